"""
MRZ layout detection from line geometry.

A layout matches when the number of lines equals its line count and every line
has exactly its line length.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Optional

from mrz_decoder.exceptions import MRZErrorCode, UnsupportedFormatError
from mrz_decoder.models.mrz import MRZFormat


def uniform_line_length(mrz_lines: Sequence[str]) -> Optional[int]:
    """Length shared by all lines, or None if the lines differ or there are none."""
    if not mrz_lines:
        return None
    line_length = len(mrz_lines[0])
    if any(len(line) != line_length for line in mrz_lines):
        return None
    return line_length


def detect_format(mrz_lines: Sequence[str]) -> Optional[MRZFormat]:
    """
    Infer the MRZ layout of the given lines.

    Args:
        mrz_lines: MRZ lines in reading order

    Returns:
        The matching MRZFormat, or None for an unrecognised shape
    """
    line_length = uniform_line_length(mrz_lines)
    if line_length is None:
        return None

    for mrz_format in MRZFormat:
        if mrz_format.line_count == len(mrz_lines) and mrz_format.line_length == line_length:
            return mrz_format
    return None


def detect_format_strict(mrz_lines: Sequence[str]) -> MRZFormat:
    """
    Like :func:`detect_format`, but raise for an unrecognised shape.

    Raises:
        UnsupportedFormatError: If no layout matches
    """
    mrz_format = detect_format(mrz_lines)
    if mrz_format is not None:
        return mrz_format

    lengths = [len(line) for line in mrz_lines]
    msg = f"Unsupported MRZ format: {len(mrz_lines)} lines with lengths {lengths}"
    if any(candidate.line_count == len(mrz_lines) for candidate in MRZFormat):
        raise UnsupportedFormatError(msg, MRZErrorCode.INVALID_LINE_LENGTH)
    raise UnsupportedFormatError(msg, MRZErrorCode.INVALID_LINE_COUNT)
