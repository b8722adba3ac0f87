"""
ID parsing utilities.

This module provides functions for parsing the identifiers found in
catalogue migration mapping files: legacy (III) bib record numbers and
the Ex Libris identifiers they were migrated to.
"""

import re
from typing import Optional

# Legacy record numbers are bounded by the source catalogue's record space
MAX_LEGACY_ID = 2**32 - 1

# Target identifiers are wide surrogate keys
MAX_TARGET_ID = 2**64 - 1

_UNSIGNED_RE = re.compile(r"[0-9]+")


class MappingLineError(ValueError):
    """Raised when a mapping line cannot be parsed."""


def parse_unsigned(value: str, max_value: int) -> int:
    """
    Parse a plain unsigned decimal that must fit under max_value.

    Signs, whitespace, underscores and non-ASCII digits are rejected.

    Args:
        value: Decimal string
        max_value: Largest acceptable value

    Returns:
        Parsed integer

    Example:
        >>> parse_unsigned("4294967295", MAX_LEGACY_ID)
        4294967295
    """
    if not _UNSIGNED_RE.fullmatch(value):
        raise MappingLineError(f"'{value}' is not an unsigned integer")
    number = int(value)
    if number > max_value:
        raise MappingLineError(f"'{value}' is out of range (max {max_value})")
    return number


def parse_legacy_id(field: str) -> int:
    """
    Parse a legacy bib ID field.

    The field looks like ``b1234-instid``: a one-character record type
    flag, the record number, and an optional dash-separated suffix which
    is discarded.

    Args:
        field: The raw bib ID field

    Returns:
        The record number as an integer

    Example:
        >>> parse_legacy_id("b1000001-01suffix")
        1000001
    """
    dash_index = field.find("-")
    if dash_index in (0, 1):
        raise MappingLineError(
            "No bib ID number was found before the dash between bib ID and institution ID"
        )
    if dash_index == -1:
        number = field[1:]
    else:
        number = field[1:dash_index]
    return parse_unsigned(number, MAX_LEGACY_ID)


def parse_mapping_line(line: str) -> tuple[int, int]:
    """
    Parse one line of a mapping file.

    Lines look like ``991018705459705153,b2405380-01ocul_inst``. Only the
    first two comma-separated fields are consulted; trailing fields are
    ignored.

    Args:
        line: A single line, without its line terminator

    Returns:
        Tuple of (legacy_id, target_id)

    Example:
        >>> parse_mapping_line("900000000000000001,b1000001-01suffix,")
        (1000001, 900000000000000001)
    """
    fields = line.split(",")
    if len(fields) < 2:
        raise MappingLineError(
            f"Line has incorrect number of fields, 2 expected, {len(fields)} found"
        )
    legacy_id = parse_legacy_id(fields[1])
    target_id = parse_unsigned(fields[0], MAX_TARGET_ID)
    return legacy_id, target_id


def parse_record_number(value: str) -> Optional[int]:
    """
    Parse a record number taken from a request, tolerating junk.

    Anything after a ``~`` (the III search scope suffix, as in
    ``2405380~S1``) is ignored. Returns None when the value is not a
    valid legacy ID.
    """
    number = value.split("~", 1)[0]
    try:
        return parse_unsigned(number, MAX_LEGACY_ID)
    except MappingLineError:
        return None


def format_docid(target_id: int) -> str:
    """Format a target ID as a Primo docid (e.g. "alma991018705459705153")."""
    return f"alma{target_id}"
