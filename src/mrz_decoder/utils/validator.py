"""
Validity verdict for a decoded MRZ.

Combines per-field check digits with the composite check digit. The single-line
driving licence layout is validated over the whole line instead.
"""

from __future__ import annotations

from typing import Optional, Protocol

from mrz_decoder.models.mrz import FILLER, MRZCode, MRZFormat
from mrz_decoder.utils.checksum import MRZChecksum
from mrz_decoder.utils.code_factory import EXTENDED_DOCUMENT_NUMBER_COUNTRIES

# The DL composite covers everything before the final check digit
DL_COMPOSITE_LENGTH = 29


class CheckedField(Protocol):
    """Anything carrying a raw value and its printed check digit."""

    raw_value: str
    check_digit: Optional[str]


def composite_fields(code: MRZCode) -> list[CheckedField]:
    """Fields contributing to the composite check digit, in order."""
    if code.format == MRZFormat.TD1 and code.optional_data_2_field is not None:
        return [
            code.document_number_field,
            code.optional_data_field,
            code.birthdate_field,
            code.expiry_date_field,
            code.optional_data_2_field,
        ]
    return [
        code.document_number_field,
        code.birthdate_field,
        code.expiry_date_field,
        code.optional_data_field,
    ]


def composite_value(code: MRZCode) -> str:
    """String the composite check digit is computed over."""
    if code.format == MRZFormat.DL:
        first_line = code.first_line_raw or ""
        return first_line[:DL_COMPOSITE_LENGTH]
    return "".join(field.raw_value + (field.check_digit or "") for field in composite_fields(code))


def document_number_is_valid(code: MRZCode) -> bool:
    """
    Check the document number, allowing for extended BEL/PRT TD1 numbers.

    Those issuers spread the number over the optional data area with a filler in
    between, so a failing check is retried over the number without fillers.
    """
    field = code.document_number_field
    if field.is_valid:
        return True

    if code.format != MRZFormat.TD1 or code.country_code_field.value not in EXTENDED_DOCUMENT_NUMBER_COUNTRIES:
        return False

    sanitized = field.raw_value.replace(FILLER, "")
    if not sanitized:
        return False
    return MRZChecksum.is_value_valid(sanitized, field.check_digit)


def is_valid(code: MRZCode) -> bool:
    """
    Overall validity of the MRZ.

    Args:
        code: Intermediate record from the layout factory

    Returns:
        True when every applicable check digit matches
    """
    if code.format == MRZFormat.DL:
        if not code.final_check_digit or code.first_line_raw is None:
            return False
        if not code.document_number_field.raw_value.replace(FILLER, ""):
            return False
        return MRZChecksum.is_value_valid(composite_value(code), code.final_check_digit)

    if code.final_check_digit:
        return (
            document_number_is_valid(code)
            and code.birthdate_field.is_valid
            and code.expiry_date_field.is_valid
            and MRZChecksum.is_value_valid(composite_value(code), code.final_check_digit)
        )

    return code.document_number_field.is_valid and code.birthdate_field.is_valid and code.expiry_date_field.is_valid
