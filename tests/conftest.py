"""
Test configuration for the MRZ decoder test suite.
"""

import logging

import pytest

from mrz_decoder import MRZParser, ParserConfig

# Two-digit years in the fixtures are windowed against this year
REFERENCE_YEAR = 2026


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "mrz: mark test as MRZ related")
    config.addinivalue_line("markers", "ocr: mark test as OCR correction related")


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        if "mrz" in str(item.fspath):
            item.add_marker(pytest.mark.mrz)
        if "ocr" in item.name.lower():
            item.add_marker(pytest.mark.ocr)


@pytest.fixture
def parser_config() -> ParserConfig:
    return ParserConfig(reference_year=REFERENCE_YEAR)


@pytest.fixture
def parser(parser_config) -> MRZParser:
    """OCR-correcting parser pinned to a fixed reference year."""
    return MRZParser(parser_config)


@pytest.fixture
def restore_package_logger():
    """Restore the mrz_decoder logger after a logging test."""
    package_logger = logging.getLogger("mrz_decoder")
    handlers = package_logger.handlers[:]
    level = package_logger.level
    propagate = package_logger.propagate

    yield package_logger

    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
    for handler in handlers:
        package_logger.addHandler(handler)
    package_logger.setLevel(level)
    package_logger.propagate = propagate
