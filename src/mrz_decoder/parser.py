"""
Machine Readable Zone (MRZ) decoding.

Detects the layout of the given lines, extracts every field, validates the check
digits and assembles an immutable MRZResult. Parsing is a pure function of the
input and the parser configuration.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Optional

from mrz_decoder.config import ParserConfig
from mrz_decoder.debug import DebugSink, log_sink, render_debug_report
from mrz_decoder.logging_config import configure_logging
from mrz_decoder.models.mrz import FILLER, DocumentType, MRZCode, MRZFormat, MRZResult, Sex, ValidatedField
from mrz_decoder.utils.code_factory import MRZCodeFactory
from mrz_decoder.utils.field_formatter import MRZFieldFormatter
from mrz_decoder.utils.format_detection import detect_format
from mrz_decoder.utils.validator import is_valid

logger = logging.getLogger(__name__)


def _document_type_additional(raw_document_type: str) -> Optional[str]:
    if len(raw_document_type) != 2:
        return None
    additional = raw_document_type[1]
    if additional in (FILLER, " "):
        return None
    return additional


def _sanitized_optional_data(
    field: ValidatedField, document_type: DocumentType, mrz_format: MRZFormat
) -> str:
    """
    Hide national numbers stored in the optional data of TD1 identity cards.

    Returns:
        The field value, or an empty string for a purely numeric TD1 ID value
    """
    if mrz_format != MRZFormat.TD1 or document_type != DocumentType.ID:
        return field.value

    trimmed = field.raw_value.replace(FILLER, "")
    if trimmed and trimmed.isascii() and trimmed.isdigit():
        return ""
    return field.value


class MRZParser:
    """Parser for Machine Readable Zone (MRZ) data according to ICAO Doc 9303."""

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        *,
        ocr_correction_enabled: Optional[bool] = None,
        debug_logging: Optional[bool] = None,
        debug_sink: Optional[DebugSink] = None,
    ) -> None:
        """
        Initialize the parser.

        Args:
            config: Parser options, defaults when None
            ocr_correction_enabled: Overrides ``config.ocr_correction_enabled``
            debug_logging: Overrides ``config.debug_logging``
            debug_sink: Receives check digit report lines when debug logging is on
        """
        config = config or ParserConfig()
        overrides = {}
        if ocr_correction_enabled is not None:
            overrides["ocr_correction_enabled"] = ocr_correction_enabled
        if debug_logging is not None:
            overrides["debug_logging"] = debug_logging
        self.config = config.model_copy(update=overrides) if overrides else config
        if self.config.log_level is not None:
            configure_logging(self.config.log_level, self.config.log_format)

        self.formatter = MRZFieldFormatter(
            ocr_correction_enabled=self.config.ocr_correction_enabled,
            reference_year=self.config.reference_year,
        )
        self.debug_sink = debug_sink or log_sink
        self._factory = MRZCodeFactory()

    def parse(self, mrz_lines: Sequence[str]) -> Optional[MRZResult]:
        """
        Parse MRZ lines.

        Args:
            mrz_lines: MRZ lines in reading order

        Returns:
            MRZResult, or None if the lines match no supported layout. A result is
            returned even when check digits fail; see ``MRZResult.is_valid``.
        """
        lines = list(mrz_lines)
        mrz_format = detect_format(lines)
        if mrz_format is None:
            logger.debug(
                "Unsupported MRZ format: %d lines with lengths %s", len(lines), [len(line) for line in lines]
            )
            return None

        logger.debug("Detected MRZ format %s", mrz_format.value)
        code = self._factory.create(lines, mrz_format, self.formatter)
        result = self._assemble(code, lines)

        if self.config.debug_logging:
            for line in render_debug_report(code, result):
                self.debug_sink(line)

        return result

    def parse_string(self, mrz_string: str) -> Optional[MRZResult]:
        """Parse an MRZ given as one string with a line break between lines."""
        return self.parse([line.rstrip("\r") for line in mrz_string.strip().split("\n")])

    def _assemble(self, code: MRZCode, mrz_lines: list[str]) -> MRZResult:
        document_type_raw = code.document_type_field.raw_value
        document_type = DocumentType.from_code(document_type_raw)

        optional_data_2 = None
        optional_data_2_check_digit = None
        if code.optional_data_2_field is not None:
            optional_data_2 = _sanitized_optional_data(code.optional_data_2_field, document_type, code.format)
            optional_data_2_check_digit = code.optional_data_2_field.check_digit or None

        return MRZResult(
            format=code.format,
            document_type=document_type,
            document_type_additional=_document_type_additional(document_type_raw),
            country_code=code.country_code_field.value,
            surnames=code.names_field.surnames,
            given_names=code.names_field.given_names,
            document_number=code.document_number_field.value or None,
            nationality_country_code=code.nationality_field.value,
            birthdate=code.birthdate_field.value,
            sex=Sex.from_code(code.sex_field.value),
            expiry_date=code.expiry_date_field.value,
            optional_data=_sanitized_optional_data(code.optional_data_field, document_type, code.format),
            optional_data_2=optional_data_2,
            raw_mrz_lines=tuple(mrz_lines),
            is_valid=is_valid(code),
            document_number_check_digit=code.document_number_field.check_digit or None,
            birthdate_check_digit=code.birthdate_field.check_digit or None,
            expiry_date_check_digit=code.expiry_date_field.check_digit or None,
            optional_data_check_digit=code.optional_data_field.check_digit or None,
            optional_data_2_check_digit=optional_data_2_check_digit,
            composite_check_digit=code.final_check_digit or None,
        )


def parse(mrz_lines: Sequence[str], config: Optional[ParserConfig] = None) -> Optional[MRZResult]:
    """Parse MRZ lines with a parser built from ``config``."""
    return MRZParser(config).parse(mrz_lines)


def parse_string(mrz_string: str, config: Optional[ParserConfig] = None) -> Optional[MRZResult]:
    """Parse an MRZ string with a parser built from ``config``."""
    return MRZParser(config).parse_string(mrz_string)
