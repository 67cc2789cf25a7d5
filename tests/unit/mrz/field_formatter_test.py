from datetime import date

import pytest

from mrz_decoder.exceptions import FieldExtractionError, MRZErrorCode
from mrz_decoder.models.mrz import FieldType
from mrz_decoder.utils.field_formatter import MRZFieldFormatter, infer_century, trim_fillers
from mrz_decoder.utils.ocr_correction import correct


@pytest.fixture
def formatter():
    return MRZFieldFormatter(ocr_correction_enabled=True, reference_year=2026)


@pytest.fixture
def raw_formatter():
    return MRZFieldFormatter(ocr_correction_enabled=False, reference_year=2026)


def test_trim_fillers():
    assert trim_fillers("D<<") == "D"
    assert trim_fillers("SS099993<") == "SS099993"
    assert trim_fillers("<<<<") == ""


def test_create_field_keeps_raw_value(formatter):
    field = formatter.create_field("IDD<<T010089212", 2, 3, FieldType.COUNTRY_CODE)
    assert field.value == "D"
    assert field.raw_value == "D<<"


def test_string_validated_field_reads_trailing_check_digit(formatter):
    field = formatter.create_string_validated_field("D231458907UTO", 0, 9, FieldType.DOCUMENT_NUMBER)
    assert field.value == "D23145890"
    assert field.raw_value == "D23145890"
    assert field.check_digit == "7"
    assert field.is_valid


def test_string_validated_field_without_check_digit(formatter):
    field = formatter.create_string_validated_field(
        "ZE184226B<<<<<", 0, 14, FieldType.OPTIONAL_DATA, check_digit_follows=False
    )
    assert field.value == "ZE184226B"
    assert field.check_digit is None
    assert field.is_valid


def test_date_validated_field(formatter):
    field = formatter.create_date_validated_field("7408122F", 0, 6, FieldType.BIRTHDATE)
    assert field.value == date(1974, 8, 12)
    assert field.raw_value == "740812"
    assert field.check_digit == "2"
    assert field.is_valid


def test_ocr_correction_applies_to_dates(formatter, raw_formatter):
    corrected = formatter.create_date_validated_field("74O8I22", 0, 6, FieldType.BIRTHDATE)
    assert corrected.raw_value == "740812"
    assert corrected.value == date(1974, 8, 12)
    assert corrected.is_valid

    uncorrected = raw_formatter.create_date_validated_field("74O8I22", 0, 6, FieldType.BIRTHDATE)
    assert uncorrected.raw_value == "74O8I2"
    assert uncorrected.value is None
    assert not uncorrected.is_valid


def test_ocr_correction_applies_to_country_codes(formatter):
    assert formatter.create_field("I<UT0", 2, 3, FieldType.COUNTRY_CODE).value == "UTO"


def test_ocr_correction_leaves_document_numbers_alone(formatter):
    field = formatter.create_string_validated_field("L898902C36", 0, 9, FieldType.DOCUMENT_NUMBER)
    assert field.raw_value == "L898902C3"


def test_ocr_correction_table():
    assert correct("O1Z", FieldType.HASH) == "012"
    assert correct("8R0WN", FieldType.NAMES) == "BROWN"
    assert correct("D1", FieldType.DOCUMENT_TYPE) == "D1"
    assert correct("M", FieldType.SEX) == "M"


def test_names_field(formatter):
    names = formatter.create_names_field("ERIKSSON<<ANNA<MARIA<<<<<<<<<<", 0, 29)
    assert names.surnames == "ERIKSSON"
    assert names.given_names == "ANNA MARIA"


def test_names_field_with_compound_surname(formatter):
    names = formatter.create_names_field("CARLOS<MONTEIRO<<AMELIA<VANESS", 0, 29)
    assert names.surnames == "CARLOS MONTEIRO"
    assert names.given_names == "AMELIA VANES"


def test_names_field_without_given_names(formatter):
    names = formatter.create_names_field("MADONNA<<<<<<<<", 0, 15)
    assert names.surnames == "MADONNA"
    assert names.given_names == ""


def test_blank_names_field(formatter):
    names = formatter.create_names_field("<" * 30, 0, 29)
    assert names.surnames == ""
    assert names.given_names == ""


def test_field_out_of_range_raises(formatter):
    with pytest.raises(FieldExtractionError) as exc_info:
        formatter.create_field("ABC", 2, 3, FieldType.COUNTRY_CODE)

    assert exc_info.value.error_code == MRZErrorCode.FIELD_OUT_OF_RANGE
    assert exc_info.value.offset == 2
    assert exc_info.value.length == 3


def test_missing_trailing_check_digit_raises(formatter):
    with pytest.raises(FieldExtractionError):
        formatter.create_string_validated_field("ABC", 0, 3, FieldType.DOCUMENT_NUMBER)


@pytest.mark.parametrize(
    ("year_2digit", "field_type", "expected"),
    [
        (25, FieldType.BIRTHDATE, 2025),
        (26, FieldType.BIRTHDATE, 1926),
        (74, FieldType.BIRTHDATE, 1974),
        (0, FieldType.BIRTHDATE, 2000),
        (26, FieldType.EXPIRY_DATE, 2026),
        (45, FieldType.EXPIRY_DATE, 2045),
        (46, FieldType.EXPIRY_DATE, 1946),
        (96, FieldType.EXPIRY_DATE, 1996),
    ],
)
def test_century_window_boundaries(year_2digit, field_type, expected):
    assert infer_century(year_2digit, 2026, field_type) == expected


def test_expiry_window_is_capped_at_the_century():
    assert infer_century(99, 2085, FieldType.EXPIRY_DATE) == 2099
    assert infer_century(99, 2085, FieldType.BIRTHDATE) == 1999


@pytest.mark.parametrize("raw_value", ["<<<<<<", "741312", "740230", "7408", "74O812"])
def test_unparsable_dates_are_absent(raw_formatter, raw_value):
    assert raw_formatter.parse_date(raw_value, FieldType.BIRTHDATE) is None


def test_reference_year_defaults_to_today():
    formatter = MRZFieldFormatter()
    parsed = formatter.parse_date("000101", FieldType.EXPIRY_DATE)
    assert parsed == date(2000, 1, 1)
