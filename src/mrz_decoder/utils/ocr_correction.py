"""
OCR confusable-character correction.

OCR engines regularly confuse letters and digits that look alike. Fields whose
alphabet is known (numeric dates and check digits, alphabetic codes and names)
are remapped towards that alphabet before they are interpreted.
"""

from __future__ import annotations

from mrz_decoder.models.mrz import FieldType

# Letters read where a digit was printed
DIGIT_FIXES = {"B": "8", "C": "0", "D": "0", "G": "6", "I": "1", "O": "0", "Q": "0", "S": "5", "Z": "2"}

# Digits read where a letter was printed
LETTER_FIXES = {"0": "O", "1": "I", "2": "Z", "4": "A", "5": "S", "6": "G", "8": "B"}

NUMERIC_FIELDS = frozenset({FieldType.BIRTHDATE, FieldType.EXPIRY_DATE, FieldType.HASH})
ALPHABETIC_FIELDS = frozenset({FieldType.COUNTRY_CODE, FieldType.NATIONALITY, FieldType.NAMES})

_DIGIT_TABLE = str.maketrans(DIGIT_FIXES)
_LETTER_TABLE = str.maketrans(LETTER_FIXES)


def correct(value: str, field_type: FieldType) -> str:
    """Remap confusable characters in ``value`` according to ``field_type``."""
    if field_type in NUMERIC_FIELDS:
        return value.translate(_DIGIT_TABLE)
    if field_type in ALPHABETIC_FIELDS:
        return value.translate(_LETTER_TABLE)
    return value
