"""
Legacy ID map - resolves III bib record numbers to Ex Libris IDs.

The map is built once at startup from one or more mapping sources and is
read-only afterwards, so lookups need no locking.
"""
from __future__ import annotations

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Iterator, Optional, Sequence

from detour.utils.file_io import iter_lines, open_file
from detour.utils.ids import MappingLineError, parse_mapping_line

logger = logging.getLogger(__name__)


class MappingLoadError(Exception):
    """Raised when mapping sources cannot be loaded into an IdMap."""


class DuplicateLegacyIdError(MappingLoadError):
    """Raised when a legacy ID is seen a second time during a load."""

    def __init__(self, legacy_id: int, source: str, line_number: int):
        self.legacy_id = legacy_id
        self.source = source
        self.line_number = line_number
        super().__init__(
            f"Previously seen bib ID {legacy_id} was encountered again "
            f"at line {line_number} of {source}"
        )


class IdMap:
    """Read-only map of legacy bib IDs to Ex Libris IDs."""

    def __init__(self, mappings: Optional[dict[int, int]] = None):
        self._mappings = MappingProxyType(dict(mappings or {}))

    def lookup(self, legacy_id: int) -> Optional[int]:
        """Return the target ID for legacy_id, or None if it is not mapped."""
        return self._mappings.get(legacy_id)

    def __contains__(self, legacy_id: object) -> bool:
        return legacy_id in self._mappings

    def __len__(self) -> int:
        return len(self._mappings)

    def __repr__(self) -> str:
        return f"IdMap({len(self)} mappings)"


def _add_source(
    mappings: dict[int, int],
    source: str,
    lines: Iterable[str],
) -> int:
    """Parse every line of one source into mappings; returns the line count."""
    line_number = 0
    for line_number, line in enumerate(lines, start=1):
        try:
            legacy_id, target_id = parse_mapping_line(line)
        except MappingLineError as e:
            raise MappingLoadError(
                f"Unable to process line {line_number} '{line}' of {source}, {e}"
            ) from e
        if legacy_id in mappings:
            raise DuplicateLegacyIdError(legacy_id, source, line_number)
        mappings[legacy_id] = target_id
    return line_number


def load_id_map(sources: Iterable[tuple[str, Iterable[str]]]) -> IdMap:
    """
    Build an IdMap from mapping sources.

    Each source is a (name, lines) pair; the name is used in error messages.
    Sources are consumed in order, each fully before the next is requested.
    Duplicates are checked across all sources, and the first bad line or
    duplicate aborts the whole load.

    Args:
        sources: Iterable of (source name, iterable of lines)

    Returns:
        The loaded IdMap

    Raises:
        MappingLoadError: On a malformed line
        DuplicateLegacyIdError: On a repeated legacy ID
    """
    mappings: dict[int, int] = {}
    for source, lines in sources:
        count = _add_source(mappings, source, lines)
        logger.info(f"Processed {count} lines from {source}")

    id_map = IdMap(mappings)
    logger.info(f"{len(id_map)} III bib ID to Ex Libris ID mappings processed.")
    return id_map


def _file_sources(paths: Sequence[str | Path]) -> Iterator[tuple[str, Iterator[str]]]:
    """Open each file in turn; it stays open until its lines are consumed."""
    for path in paths:
        abs_path = Path(path).absolute()
        with open_file(abs_path) as fh:
            yield str(abs_path), iter_lines(fh)


def load_id_map_files(paths: Sequence[str | Path]) -> IdMap:
    """
    Build an IdMap from mapping files on disk.

    Plain and gzipped files are accepted. Absolute paths are used in log
    and error messages.

    Raises:
        MappingLoadError: If a file cannot be read or contains bad data
    """
    try:
        return load_id_map(_file_sources(paths))
    except (OSError, EOFError, UnicodeDecodeError) as e:
        raise MappingLoadError(f"Could not read mapping file, {e}") from e
