"""
Fixed-width field extraction for MRZ lines.

Each field is sliced at a zero-based offset and length, optionally passed through
OCR correction, and turned into a semantic value with fillers removed. The raw
substring is kept so check digits can be recomputed over exactly what was read.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from mrz_decoder.exceptions import FieldExtractionError
from mrz_decoder.models.mrz import FILLER, Field, FieldType, NamesField, ValidatedField
from mrz_decoder.utils.ocr_correction import correct

logger = logging.getLogger(__name__)

# Expiry dates are printed for documents valid into the future, so their
# century window reaches this many years past the reference year.
EXPIRY_WINDOW_YEARS = 20


def trim_fillers(value: str) -> str:
    """Replace fillers with spaces and strip surrounding whitespace."""
    return value.replace(FILLER, " ").strip()


def infer_century(year_2digit: int, reference_year: int, field_type: FieldType) -> int:
    """
    Infer the four-digit year for a two-digit MRZ year.

    Birthdates fall in the 2000s when the two-digit year is below the last two
    digits of the reference year, otherwise in the 1900s. Expiry dates use the
    same rule with the pivot moved ``EXPIRY_WINDOW_YEARS`` forward.

    Args:
        year_2digit: Year in the range 0-99
        reference_year: Four-digit year the window is anchored to
        field_type: BIRTHDATE or EXPIRY_DATE

    Returns:
        Four-digit year
    """
    pivot = reference_year % 100
    if field_type == FieldType.EXPIRY_DATE:
        pivot = min(pivot + EXPIRY_WINDOW_YEARS, 100)
    return 2000 + year_2digit if year_2digit < pivot else 1900 + year_2digit


class MRZFieldFormatter:
    """Extracts typed fields from MRZ lines."""

    def __init__(self, ocr_correction_enabled: bool = True, reference_year: Optional[int] = None) -> None:
        """
        Initialize the formatter.

        Args:
            ocr_correction_enabled: Whether confusable characters are remapped
            reference_year: Year anchoring two-digit year windowing, today's year if None
        """
        self.ocr_correction_enabled = ocr_correction_enabled
        self.reference_year = reference_year

    def create_field(self, line: str, offset: int, length: int, field_type: FieldType) -> Field:
        raw_value = self._raw_value(line, offset, length, field_type)
        return Field(value=trim_fillers(raw_value), raw_value=raw_value)

    def create_string_validated_field(
        self,
        line: str,
        offset: int,
        length: int,
        field_type: FieldType,
        check_digit_follows: bool = True,
    ) -> ValidatedField:
        """
        Extract a text field and, unless told otherwise, the check digit right after it.

        Args:
            line: MRZ line
            offset: Zero-based start of the field
            length: Field length, check digit excluded
            field_type: Semantic kind of the field
            check_digit_follows: Whether a check digit sits at ``offset + length``

        Returns:
            ValidatedField with a string value
        """
        raw_value = self._raw_value(line, offset, length, field_type)
        check_digit = self._check_digit(line, offset + length) if check_digit_follows else None
        return ValidatedField(value=trim_fillers(raw_value), raw_value=raw_value, check_digit=check_digit)

    def create_date_validated_field(
        self, line: str, offset: int, length: int, field_type: FieldType
    ) -> ValidatedField:
        """Extract a YYMMDD date field followed by its check digit."""
        raw_value = self._raw_value(line, offset, length, field_type)
        return ValidatedField(
            value=self.parse_date(raw_value, field_type),
            raw_value=raw_value,
            check_digit=self._check_digit(line, offset + length),
        )

    def create_names_field(self, line: str, offset: int, length: int) -> NamesField:
        """
        Split a name field into primary and secondary identifiers.

        ``<<`` separates surnames from given names, a single ``<`` separates words.
        """
        raw_value = self._raw_value(line, offset, length, FieldType.NAMES)
        identifiers = [part for part in raw_value.strip(FILLER).split(FILLER * 2) if part]

        surnames = trim_fillers(identifiers[0]) if identifiers else ""
        given_names = " ".join(trim_fillers(part) for part in identifiers[1:])
        return NamesField(surnames=surnames, given_names=given_names)

    def parse_date(self, raw_value: str, field_type: FieldType) -> Optional[date]:
        """
        Parse a YYMMDD value.

        Returns:
            The date, or None for blank, non-numeric or impossible dates
        """
        if len(raw_value) != 6 or not (raw_value.isascii() and raw_value.isdigit()):
            return None

        year = infer_century(int(raw_value[:2]), self._reference_year(), field_type)
        try:
            return date(year, int(raw_value[2:4]), int(raw_value[4:6]))
        except ValueError:
            logger.debug("Ignoring impossible %s value %r", field_type.value, raw_value)
            return None

    def _check_digit(self, line: str, offset: int) -> str:
        return self._raw_value(line, offset, 1, FieldType.HASH)

    def _raw_value(self, line: str, offset: int, length: int, field_type: FieldType) -> str:
        if offset < 0 or length < 0 or offset + length > len(line):
            raise FieldExtractionError(line, offset, length)

        raw_value = line[offset : offset + length]
        if self.ocr_correction_enabled:
            return correct(raw_value, field_type)
        return raw_value

    def _reference_year(self) -> int:
        return self.reference_year if self.reference_year is not None else date.today().year
