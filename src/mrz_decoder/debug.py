"""
Check digit comparison report.

Lists every check digit printed on the document next to the one recomputed
from the decoded fields. Purely informational: it never affects the result.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Optional

from pydantic import BaseModel

from mrz_decoder.models.mrz import MRZCode, MRZResult, ValidatedField
from mrz_decoder.utils.checksum import MRZChecksum
from mrz_decoder.utils.validator import composite_value

logger = logging.getLogger(__name__)

DebugSink = Callable[[str], None]


class CheckDigitComparison(BaseModel):
    """A printed check digit next to the recomputed one."""

    label: str
    parsed: str
    calculated: str

    model_config = {"frozen": True}

    @property
    def matches(self) -> bool:
        return self.parsed == self.calculated

    def __str__(self) -> str:
        mark = "✓" if self.matches else "✗"
        return f"{self.label} Check Digit: {mark} Parsed={self.parsed} Calculated={self.calculated}"


def _field_comparison(
    label: str, parsed: Optional[str], field: Optional[ValidatedField]
) -> Optional[CheckDigitComparison]:
    if parsed is None:
        return None
    calculated = MRZChecksum.calculated_digit(field.raw_value) if field is not None else "?"
    return CheckDigitComparison(label=label, parsed=parsed, calculated=calculated)


def compare_check_digits(code: MRZCode, result: MRZResult) -> list[CheckDigitComparison]:
    """Comparisons for each check digit present in ``result``."""
    comparisons = [
        _field_comparison("Document Number", result.document_number_check_digit, code.document_number_field),
        _field_comparison("Birthdate", result.birthdate_check_digit, code.birthdate_field),
        _field_comparison("Expiry Date", result.expiry_date_check_digit, code.expiry_date_field),
        _field_comparison("Optional Data", result.optional_data_check_digit, code.optional_data_field),
        _field_comparison("Optional Data 2", result.optional_data_2_check_digit, code.optional_data_2_field),
    ]
    if result.composite_check_digit is not None:
        comparisons.append(
            CheckDigitComparison(
                label="Composite",
                parsed=result.composite_check_digit,
                calculated=MRZChecksum.calculated_digit(composite_value(code)),
            )
        )
    return [comparison for comparison in comparisons if comparison is not None]


def render_debug_report(code: MRZCode, result: MRZResult) -> list[str]:
    """Human-readable report lines for one parse."""
    lines = [
        "=== MRZ Debug Info ===",
        f"Valid: {result.is_valid}",
        f"Format: {result.format.value}",
    ]
    lines.extend(str(comparison) for comparison in compare_check_digits(code, result))
    lines.append("======================")
    return lines


def log_sink(line: str) -> None:
    """Default sink: emit report lines on this module's logger."""
    logger.info(line)
