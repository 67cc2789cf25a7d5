import io
import json
import logging
import sys

import pytest

from mrz_decoder import MRZParser, ParserConfig
from mrz_decoder.logging_config import MRZJSONFormatter, configure_logging, install_null_handler

pytestmark = pytest.mark.usefixtures("restore_package_logger")

TD3_UTO = [
    "P<UTOERIKSSON<<ANNA<MARIA<<<<<<<<<<<<<<<<<<<",
    "L898902C36UTO7408122F1204159ZE184226B<<<<<10",
]


def make_record(message: str) -> logging.LogRecord:
    return logging.LogRecord(
        name="mrz_decoder.parser",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg=message,
        args=(),
        exc_info=None,
    )


def test_package_ships_a_null_handler():
    install_null_handler()
    install_null_handler()

    handlers = logging.getLogger("mrz_decoder").handlers
    assert sum(isinstance(handler, logging.NullHandler) for handler in handlers) == 1


def test_configure_logging_writes_package_records():
    stream = io.StringIO()
    configure_logging("debug", stream=stream)

    logging.getLogger("mrz_decoder.parser").debug("Detected MRZ format %s", "TD3")

    package_logger = logging.getLogger("mrz_decoder")
    assert package_logger.level == logging.DEBUG
    assert "[mrz_decoder.parser] - Detected MRZ format TD3" in stream.getvalue()


def test_configure_logging_leaves_root_logger_alone():
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level

    configure_logging("INFO", stream=io.StringIO())

    assert root_logger.handlers == handlers
    assert root_logger.level == level


def test_configure_logging_replaces_its_previous_handler():
    first = configure_logging("INFO", stream=io.StringIO())
    second = configure_logging("WARNING", stream=io.StringIO())

    handlers = logging.getLogger("mrz_decoder").handlers
    assert second in handlers
    assert first not in handlers


def test_configure_logging_json_format():
    stream = io.StringIO()
    configure_logging("INFO", log_format="json", stream=stream)

    logging.getLogger("mrz_decoder.debug").info("=== MRZ Debug Info ===")

    entry = json.loads(stream.getvalue().splitlines()[-1])
    assert entry["level"] == "INFO"
    assert entry["logger"] == "mrz_decoder.debug"
    assert entry["message"] == "=== MRZ Debug Info ==="


def test_configure_logging_off():
    configure_logging("INFO", stream=io.StringIO())

    assert configure_logging("off") is None

    package_logger = logging.getLogger("mrz_decoder")
    assert package_logger.level > logging.CRITICAL
    assert not any(isinstance(handler, logging.StreamHandler) for handler in package_logger.handlers)


def test_json_formatter_includes_exception():
    try:
        raise ValueError("bad line")
    except ValueError:
        record = make_record("failed")
        record.exc_info = sys.exc_info()

    entry = json.loads(MRZJSONFormatter().format(record))

    assert entry["message"] == "failed"
    assert "ValueError: bad line" in entry["exception"]


def test_parser_applies_configured_log_level():
    MRZParser(ParserConfig(reference_year=2026, log_level="debug", log_format="json"))

    package_logger = logging.getLogger("mrz_decoder")
    assert package_logger.level == logging.DEBUG
    assert any(isinstance(handler.formatter, MRZJSONFormatter) for handler in package_logger.handlers)


def test_parser_without_log_level_keeps_host_logging():
    package_logger = logging.getLogger("mrz_decoder")
    handlers = package_logger.handlers[:]

    MRZParser(ParserConfig(reference_year=2026)).parse(TD3_UTO)

    assert package_logger.handlers == handlers
