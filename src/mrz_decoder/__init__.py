"""
MRZ decoder: parsing and check digit validation of ICAO Doc 9303 machine readable zones.
"""

from mrz_decoder.config import ParserConfig
from mrz_decoder.exceptions import (
    ConfigurationError,
    FieldExtractionError,
    MRZErrorCode,
    MRZException,
    UnsupportedFormatError,
)
from mrz_decoder.logging_config import configure_logging, install_null_handler
from mrz_decoder.models.mrz import DocumentType, MRZFormat, MRZResult, Sex
from mrz_decoder.parser import MRZParser, parse, parse_string

install_null_handler()

__all__ = [
    "ConfigurationError",
    "DocumentType",
    "FieldExtractionError",
    "MRZErrorCode",
    "MRZException",
    "MRZFormat",
    "MRZParser",
    "MRZResult",
    "ParserConfig",
    "Sex",
    "UnsupportedFormatError",
    "configure_logging",
    "parse",
    "parse_string",
]
