"""
Data models for MRZ decoding.
"""

from mrz_decoder.models.mrz import (
    FILLER,
    DocumentType,
    Field,
    FieldType,
    MRZCode,
    MRZFormat,
    MRZResult,
    NamesField,
    Sex,
    ValidatedField,
)

__all__ = [
    "FILLER",
    "DocumentType",
    "Field",
    "FieldType",
    "MRZCode",
    "MRZFormat",
    "MRZResult",
    "NamesField",
    "Sex",
    "ValidatedField",
]
