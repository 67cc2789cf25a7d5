"""
MRZ data models for the decoding pipeline.

These models describe the document layouts of ICAO Doc 9303 (TD1, TD2, TD3) plus the
single-line driving licence layout, the intermediate field record produced by the layout
factory and the public, immutable parse result.
"""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, Field as ModelField

from mrz_decoder.utils.checksum import MRZChecksum

FILLER = "<"


def camel_case(snake_str: str) -> str:
    """Convert snake_case to camelCase."""
    components = snake_str.split("_")
    return components[0] + "".join(x.title() for x in components[1:])


def snake_to_camel_dict(d: dict) -> dict:
    """Convert all keys in a dictionary from snake_case to camelCase."""
    return {camel_case(k): v for k, v in d.items()}


class MRZFormat(str, Enum):
    """Supported MRZ layouts."""

    TD1 = "TD1"  # 3 lines, 30 chars each (ID cards)
    TD2 = "TD2"  # 2 lines, 36 chars each (ID cards, MRV-B visas)
    TD3 = "TD3"  # 2 lines, 44 chars each (passports, MRV-A visas)
    DL = "DL"  # 1 line, 30 chars (driving licences)

    @property
    def line_count(self) -> int:
        """Number of lines in this layout."""
        return {"TD1": 3, "TD2": 2, "TD3": 2, "DL": 1}[self.value]

    @property
    def line_length(self) -> int:
        """Number of characters per line in this layout."""
        return {"TD1": 30, "TD2": 36, "TD3": 44, "DL": 30}[self.value]


class DocumentType(str, Enum):
    """Document type, keyed by the first character of the MRZ."""

    VISA = "V"
    PASSPORT = "P"
    DRIVING_LICENSE = "D"
    ID = "I"
    UNDEFINED = "_"

    @classmethod
    def from_code(cls, code: str) -> DocumentType:
        """Map the raw document type field to a document type."""
        if not code:
            return cls.UNDEFINED
        for member in cls:
            if member is not cls.UNDEFINED and member.value == code[0]:
                return member
        return cls.UNDEFINED


class Sex(str, Enum):
    """Holder sex according to ICAO standards."""

    MALE = "M"
    FEMALE = "F"
    UNSPECIFIED = "X"

    @classmethod
    def from_code(cls, code: str) -> Sex:
        if code == cls.MALE.value:
            return cls.MALE
        if code == cls.FEMALE.value:
            return cls.FEMALE
        return cls.UNSPECIFIED


class FieldType(str, Enum):
    """Semantic kind of an extracted field; drives OCR correction."""

    DOCUMENT_TYPE = "document_type"
    COUNTRY_CODE = "country_code"
    DOCUMENT_NUMBER = "document_number"
    BIRTHDATE = "birthdate"
    SEX = "sex"
    EXPIRY_DATE = "expiry_date"
    NATIONALITY = "nationality"
    OPTIONAL_DATA = "optional_data"
    NAMES = "names"
    HASH = "hash"


class Field(BaseModel):
    """A decoded value together with the raw substring it was read from."""

    value: str = ""
    raw_value: str = ""

    model_config = {"frozen": True, "extra": "forbid"}


class ValidatedField(BaseModel):
    """A field followed by its own check digit.

    ``check_digit`` is ``None`` when the layout prints no check digit for the field.
    A present check digit is kept verbatim, even when it is a filler or blank.
    """

    value: Union[str, date, None] = None
    raw_value: str = ""
    check_digit: Optional[str] = None

    model_config = {"frozen": True, "extra": "forbid"}

    @property
    def is_valid(self) -> bool:
        if self.check_digit is None:
            return True
        return MRZChecksum.is_value_valid(self.raw_value, self.check_digit)


class NamesField(BaseModel):
    """Primary and secondary identifiers from the name field."""

    surnames: str = ""
    given_names: str = ""

    model_config = {"frozen": True, "extra": "forbid"}


class MRZCode(BaseModel):
    """Intermediate record built by the layout factory for one MRZ."""

    format: MRZFormat
    first_line_raw: Optional[str] = None
    document_type_field: Field
    country_code_field: Field
    document_number_field: ValidatedField
    birthdate_field: ValidatedField
    sex_field: Field
    expiry_date_field: ValidatedField
    nationality_field: Field
    optional_data_field: ValidatedField
    optional_data_2_field: Optional[ValidatedField] = None
    names_field: NamesField
    final_check_digit: Optional[str] = None

    model_config = {"frozen": True, "extra": "forbid"}


class MRZResult(BaseModel):
    """Public result of parsing one MRZ.

    Every field is populated on a best-effort basis, even when ``is_valid`` is false.
    Check digit attributes are ``None`` when the layout carries no such digit.
    """

    format: MRZFormat
    document_type: DocumentType
    document_type_additional: Optional[str] = ModelField(
        default=None, description="Second character of the document code, if meaningful"
    )
    country_code: str = ModelField(..., description="Issuing state or organisation")
    surnames: str
    given_names: str
    document_number: Optional[str] = None
    nationality_country_code: str
    birthdate: Optional[date] = None
    sex: Sex
    expiry_date: Optional[date] = None
    optional_data: Optional[str] = None
    optional_data_2: Optional[str] = ModelField(default=None, description="TD1 only")
    raw_mrz_lines: tuple[str, ...]
    is_valid: bool
    document_number_check_digit: Optional[str] = None
    birthdate_check_digit: Optional[str] = None
    expiry_date_check_digit: Optional[str] = None
    optional_data_check_digit: Optional[str] = None
    optional_data_2_check_digit: Optional[str] = None
    composite_check_digit: Optional[str] = None

    model_config = {"frozen": True, "extra": "forbid"}

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary with camelCase keys."""
        data = self.model_dump(mode="json")
        return snake_to_camel_dict(data)
