"""
Detour Utility Library.

Modules:
--------
logging_setup
    Logging configuration utilities.
ids
    Mapping line and record number parsing.
file_io
    Plain and gzipped file reading.
"""

from detour.utils.logging_setup import setup_logging, parse_log_level
from detour.utils.ids import parse_mapping_line, parse_record_number, MappingLineError
from detour.utils.file_io import open_file, iter_lines

__all__ = [
    # logging_setup
    "setup_logging",
    "parse_log_level",
    # ids
    "parse_mapping_line",
    "parse_record_number",
    "MappingLineError",
    # file_io
    "open_file",
    "iter_lines",
]
