"""
General file I/O utilities.

This module provides functions for opening mapping files (plain or
gzipped) and reading them line by line.
"""

import gzip
from pathlib import Path
from typing import Iterator, TextIO


def open_file(filepath: Path, encoding: str = "utf-8") -> TextIO:
    """
    Open a text file for reading, decompressing .gz/.gzip files.

    Example:
        >>> with open_file(Path("mappings.csv.gz")) as f:
        ...     content = f.read()
    """
    if filepath.suffix in (".gz", ".gzip"):
        return gzip.open(filepath, "rt", encoding=encoding)
    return open(filepath, "r", encoding=encoding)


def iter_lines(fh: TextIO) -> Iterator[str]:
    """
    Yield lines from an open file with their terminators removed.

    Both ``\\n`` and ``\\r\\n`` endings are stripped; nothing else is.
    """
    for line in fh:
        yield line.rstrip("\n").rstrip("\r")
