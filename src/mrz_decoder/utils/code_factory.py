"""
Per-layout field maps.

Offsets and lengths follow ICAO Doc 9303 Part 5 (TD1), Part 6 (TD2), Part 4
(TD3), Part 7 (MRV-A/MRV-B visas) and the single-line driving licence MRZ.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from mrz_decoder.models.mrz import (
    FILLER,
    DocumentType,
    Field,
    FieldType,
    MRZCode,
    MRZFormat,
    NamesField,
    ValidatedField,
)
from mrz_decoder.utils.field_formatter import MRZFieldFormatter

# TD1 issuers printing a 13 character document number ending at column 18
EXTENDED_DOCUMENT_NUMBER_COUNTRIES = frozenset({"BEL", "PRT"})


class MRZCodeFactory:
    """Builds the intermediate MRZCode record for a detected layout."""

    def create(self, mrz_lines: Sequence[str], mrz_format: MRZFormat, formatter: MRZFieldFormatter) -> MRZCode:
        """
        Apply the field map of ``mrz_format`` to the lines.

        Args:
            mrz_lines: Lines whose shape already matches ``mrz_format``
            mrz_format: Detected layout
            formatter: Field extractor

        Returns:
            The populated MRZCode
        """
        first_line = mrz_lines[0]

        if mrz_format == MRZFormat.TD1:
            fields = self._td1_fields(mrz_lines, formatter)
        elif mrz_format in (MRZFormat.TD2, MRZFormat.TD3):
            fields = self._td2_td3_fields(mrz_lines, mrz_format, formatter)
        elif mrz_format == MRZFormat.DL:
            fields = self._dl_fields(first_line, formatter)
        else:
            msg = f"No field map for format {mrz_format}"
            raise ValueError(msg)

        return MRZCode(
            format=mrz_format,
            first_line_raw=first_line,
            document_type_field=formatter.create_field(first_line, 0, 2, FieldType.DOCUMENT_TYPE),
            country_code_field=formatter.create_field(first_line, 2, 3, FieldType.COUNTRY_CODE),
            **fields,
        )

    def _td1_fields(self, mrz_lines: Sequence[str], formatter: MRZFieldFormatter) -> dict[str, Any]:
        first_line, second_line, third_line = mrz_lines

        issuing_country = formatter.create_field(first_line, 2, 3, FieldType.COUNTRY_CODE).value
        if issuing_country in EXTENDED_DOCUMENT_NUMBER_COUNTRIES:
            extended = formatter.create_string_validated_field(
                first_line, 5, 13, FieldType.DOCUMENT_NUMBER
            )
            # Fillers may sit inside the extended number, not only at its end
            document_number_field = ValidatedField(
                value=extended.raw_value.replace(FILLER, ""),
                raw_value=extended.raw_value,
                check_digit=extended.check_digit,
            )
            optional_data_field = formatter.create_string_validated_field(
                first_line, 19, 11, FieldType.OPTIONAL_DATA, check_digit_follows=False
            )
        else:
            document_number_field = formatter.create_string_validated_field(
                first_line, 5, 9, FieldType.DOCUMENT_NUMBER
            )
            optional_data_field = formatter.create_string_validated_field(
                first_line, 15, 15, FieldType.OPTIONAL_DATA, check_digit_follows=False
            )

        return {
            "document_number_field": document_number_field,
            "birthdate_field": formatter.create_date_validated_field(second_line, 0, 6, FieldType.BIRTHDATE),
            "sex_field": formatter.create_field(second_line, 7, 1, FieldType.SEX),
            "expiry_date_field": formatter.create_date_validated_field(second_line, 8, 6, FieldType.EXPIRY_DATE),
            "nationality_field": formatter.create_field(second_line, 15, 3, FieldType.NATIONALITY),
            "optional_data_field": optional_data_field,
            "optional_data_2_field": formatter.create_string_validated_field(
                second_line, 18, 11, FieldType.OPTIONAL_DATA, check_digit_follows=False
            ),
            "names_field": formatter.create_names_field(third_line, 0, 29),
            "final_check_digit": formatter.create_field(second_line, 29, 1, FieldType.HASH).raw_value,
        }

    def _td2_td3_fields(
        self, mrz_lines: Sequence[str], mrz_format: MRZFormat, formatter: MRZFieldFormatter
    ) -> dict[str, Any]:
        first_line, second_line = mrz_lines
        line_length = mrz_format.line_length

        # MRV-A and MRV-B visas carry no composite check digit
        is_visa = first_line[:1] == DocumentType.VISA.value

        if mrz_format == MRZFormat.TD2:
            optional_data_field = formatter.create_string_validated_field(
                second_line, 28, 8 if is_visa else 7, FieldType.OPTIONAL_DATA, check_digit_follows=False
            )
        elif is_visa:
            optional_data_field = formatter.create_string_validated_field(
                second_line, 28, 16, FieldType.OPTIONAL_DATA, check_digit_follows=False
            )
        else:
            optional_data_field = formatter.create_string_validated_field(
                second_line, 28, 14, FieldType.OPTIONAL_DATA
            )

        if is_visa:
            final_check_digit = None
        else:
            final_check_digit = formatter.create_field(second_line, line_length - 1, 1, FieldType.HASH).raw_value

        return {
            "document_number_field": formatter.create_string_validated_field(
                second_line, 0, 9, FieldType.DOCUMENT_NUMBER
            ),
            "birthdate_field": formatter.create_date_validated_field(second_line, 13, 6, FieldType.BIRTHDATE),
            "sex_field": formatter.create_field(second_line, 20, 1, FieldType.SEX),
            "expiry_date_field": formatter.create_date_validated_field(second_line, 21, 6, FieldType.EXPIRY_DATE),
            "nationality_field": formatter.create_field(second_line, 10, 3, FieldType.NATIONALITY),
            "optional_data_field": optional_data_field,
            "optional_data_2_field": None,
            "names_field": formatter.create_names_field(first_line, 5, line_length - 5),
            "final_check_digit": final_check_digit,
        }

    def _dl_fields(self, line: str, formatter: MRZFieldFormatter) -> dict[str, Any]:
        return {
            "document_number_field": formatter.create_string_validated_field(
                line, 6, 10, FieldType.DOCUMENT_NUMBER, check_digit_follows=False
            ),
            "birthdate_field": ValidatedField(),
            "sex_field": Field(),
            "expiry_date_field": ValidatedField(),
            "nationality_field": formatter.create_field(line, 2, 3, FieldType.NATIONALITY),
            "optional_data_field": formatter.create_string_validated_field(
                line, 16, 13, FieldType.OPTIONAL_DATA, check_digit_follows=False
            ),
            "optional_data_2_field": None,
            "names_field": NamesField(),
            "final_check_digit": formatter.create_field(line, 29, 1, FieldType.HASH).raw_value,
        }
