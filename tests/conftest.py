"""
Pytest fixtures for Permanent Detour tests.

Provides a small ID map, Sierra and WebVoyage detourers, and a helper for
taking redirect URLs apart.
"""
from urllib.parse import parse_qsl, urlsplit

import pytest

from detour.api.services.redirect_service import Detourer
from detour.core.id_map import IdMap
from detour.core.rule_sets import SIERRA, WEBVOYAGE

PRIMO_BASE_URL = "https://myinst.primo.exlibrisgroup.com"
VID = "01MYINST_INST:VU1"

# Legacy bib ID -> Ex Libris ID
SAMPLE_MAPPINGS = {
    2405380: 991018705459705153,
    1000001: 900000000000000001,
    4294967295: 18446744073709551615,
}


def _split_url(url: str) -> tuple[str, str, list[tuple[str, str]]]:
    parts = urlsplit(url)
    base = f"{parts.scheme}://{parts.netloc}"
    return base, parts.path, parse_qsl(parts.query, keep_blank_values=True)


@pytest.fixture
def split_url():
    """Split a redirect URL into (base, path, query pairs)."""
    return _split_url


@pytest.fixture
def primo_base_url():
    return PRIMO_BASE_URL


@pytest.fixture
def vid():
    return VID


@pytest.fixture
def id_map():
    """ID map holding SAMPLE_MAPPINGS."""
    return IdMap(SAMPLE_MAPPINGS)


@pytest.fixture
def sierra_detourer(id_map):
    """Detourer translating Sierra WebPAC requests."""
    return Detourer(id_map=id_map, rule_set=SIERRA, base_url=PRIMO_BASE_URL, vid=VID)


@pytest.fixture
def webvoyage_detourer(id_map):
    """Detourer translating WebVoyage requests."""
    return Detourer(id_map=id_map, rule_set=WEBVOYAGE, base_url=PRIMO_BASE_URL, vid=VID)


@pytest.fixture
def mapping_file(tmp_path):
    """Return a function that writes a mapping file and returns its path."""
    def _write(name: str, lines: list[str]):
        path = tmp_path / name
        path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
        return path
    return _write
