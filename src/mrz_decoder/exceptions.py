"""
Custom exceptions for the MRZ decoder.
"""

from __future__ import annotations

from enum import Enum


class MRZErrorCode(str, Enum):
    """Standardized error codes for MRZ decoding failures."""

    INVALID_LINE_COUNT = "INVALID_LINE_COUNT"
    INVALID_LINE_LENGTH = "INVALID_LINE_LENGTH"
    FIELD_OUT_OF_RANGE = "FIELD_OUT_OF_RANGE"
    INVALID_CONFIGURATION = "INVALID_CONFIGURATION"


class MRZException(Exception):
    """Base exception class for MRZ decoding."""

    def __init__(self, message: str, error_code: MRZErrorCode | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code


class UnsupportedFormatError(MRZException):
    """Raised when the input lines match none of the known MRZ layouts."""

    def __init__(self, message: str, error_code: MRZErrorCode = MRZErrorCode.INVALID_LINE_COUNT) -> None:
        super().__init__(message, error_code)


class FieldExtractionError(MRZException):
    """Raised when a field map points outside the line it is applied to."""

    def __init__(self, line: str, offset: int, length: int) -> None:
        super().__init__(
            f"Field [{offset}:{offset + length}] is out of range for a line of {len(line)} characters",
            MRZErrorCode.FIELD_OUT_OF_RANGE,
        )
        self.line = line
        self.offset = offset
        self.length = length


class ConfigurationError(MRZException):
    """Exception raised for configuration-related errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message, MRZErrorCode.INVALID_CONFIGURATION)
