"""
Tests for utility modules.

Tests cover:
- Opening plain and gzipped files
- Line iteration with terminators removed
- Logging setup and level parsing
"""
import gzip
import io
import logging
import sys

import pytest

from detour.utils.file_io import iter_lines, open_file
from detour.utils.logging_setup import DEFAULT_FORMAT, parse_log_level, setup_logging


class TestOpenFile:
    """Tests for open_file."""

    def test_plain_file(self, tmp_path):
        """Should open plain files as text."""
        path = tmp_path / "map.csv"
        path.write_text("1,b10\n", encoding="utf-8")
        with open_file(path) as fh:
            assert fh.read() == "1,b10\n"

    @pytest.mark.parametrize("name", ["map.csv.gz", "map.csv.gzip"])
    def test_gzipped_file(self, tmp_path, name):
        """Should decompress .gz and .gzip files."""
        path = tmp_path / name
        with gzip.open(path, "wt", encoding="utf-8") as fh:
            fh.write("1,b10\n")
        with open_file(path) as fh:
            assert fh.read() == "1,b10\n"

    def test_missing_file(self, tmp_path):
        """Should raise FileNotFoundError for missing files."""
        with pytest.raises(FileNotFoundError):
            open_file(tmp_path / "missing.csv")


class TestIterLines:
    """Tests for iter_lines."""

    def test_strips_terminators(self):
        """Should strip both LF and CRLF endings."""
        fh = io.StringIO("a,b\nc,d\r\ne,f", newline="")
        assert list(iter_lines(fh)) == ["a,b", "c,d", "e,f"]

    def test_keeps_other_whitespace(self):
        """Should leave surrounding spaces alone."""
        assert list(iter_lines(io.StringIO(" a,b \n"))) == [" a,b "]


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_console_handler(self):
        """Should attach a single stdout handler at the requested level."""
        logger = setup_logging("detour.tests.console", level=logging.DEBUG)
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        handler = logger.handlers[0]
        assert handler.stream is sys.stdout
        assert handler.formatter._fmt == DEFAULT_FORMAT

    def test_no_duplicate_handlers(self):
        """Should replace handlers when called again."""
        setup_logging("detour.tests.repeat")
        logger = setup_logging("detour.tests.repeat", level=logging.WARNING)
        assert len(logger.handlers) == 1
        assert logger.handlers[0].level == logging.WARNING


class TestParseLogLevel:
    """Tests for parse_log_level."""

    @pytest.mark.parametrize("name,level", [
        ("DEBUG", logging.DEBUG),
        ("info", logging.INFO),
        ("Warning", logging.WARNING),
        ("critical", logging.CRITICAL),
    ])
    def test_known_levels(self, name, level):
        """Should accept level names in any case."""
        assert parse_log_level(name) == level

    @pytest.mark.parametrize("name", ["verbose", "", "WARN", "10"])
    def test_unknown_levels(self, name):
        """Should reject names outside the standard levels."""
        with pytest.raises(ValueError, match="Unknown log level"):
            parse_log_level(name)
