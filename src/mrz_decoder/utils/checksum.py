"""
ICAO Doc 9303 check digit computation.

Character mapping:
- 0-9 → 0-9
- A-Z → 10-35
- < → 0

Any other character makes the check digit uncomputable.
"""

from __future__ import annotations

import string
from typing import ClassVar, Optional


class MRZChecksum:
    """Check digit engine following ICAO Doc 9303 Part 3."""

    FILLER_CHAR = "<"

    # ICAO weight pattern: 7, 3, 1, 7, 3, 1, ...
    WEIGHT_PATTERN: ClassVar[tuple[int, ...]] = (7, 3, 1)

    CHARACTER_VALUES: ClassVar[dict[str, int]] = {
        **{digit: int(digit) for digit in string.digits},
        **{letter: index + 10 for index, letter in enumerate(string.ascii_uppercase)},
        FILLER_CHAR: 0,
    }

    @classmethod
    def check_digit(cls, data: str) -> Optional[int]:
        """
        Calculate the check digit for a string.

        Args:
            data: Input string for checksum calculation

        Returns:
            Check digit (0-9), or None if the string holds a character outside
            the MRZ alphabet
        """
        total = 0
        for i, char in enumerate(data):
            value = cls.CHARACTER_VALUES.get(char)
            if value is None:
                return None
            total += value * cls.WEIGHT_PATTERN[i % 3]
        return total % 10

    @classmethod
    def is_value_valid(cls, data: str, check_digit: Optional[str]) -> bool:
        """
        Validate a printed check digit against input data.

        A filler check digit only matches data made of fillers, as printed for
        blank optional dates. An empty or missing check digit never matches.

        Args:
            data: Raw field value, fillers included
            check_digit: The printed check digit

        Returns:
            True if the check digit matches, False otherwise
        """
        if not check_digit:
            return False

        if check_digit == cls.FILLER_CHAR:
            return bool(data) and not data.strip(cls.FILLER_CHAR)

        calculated = cls.check_digit(data)
        return calculated is not None and str(calculated) == check_digit

    @classmethod
    def calculated_digit(cls, data: str) -> str:
        """Check digit as printed text, ``?`` when it cannot be computed."""
        calculated = cls.check_digit(data)
        return "?" if calculated is None else str(calculated)
