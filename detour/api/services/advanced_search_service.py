"""
Advanced Search Service - decodes III advanced search expressions.

III WebPAC advanced searches arrive as a single boolean expression such as
``(t:(spiders) and not d:(biology))``. Only the top-level boolean structure
is decoded; the text inside a ``field:(...)`` group is passed through
untouched, since the vendor's field sub-grammar is undocumented.
"""
from __future__ import annotations

import logging
import re
import string
from typing import Optional

from detour.schemas.search_schema import Connective, SearchField, SearchTerm

logger = logging.getLogger(__name__)

# III field codes that translate to a Primo field
FIELD_CODES: dict[str, SearchField] = {
    "t": SearchField.TITLE,
    "a": SearchField.CREATOR,
    "d": SearchField.SUBJECT,
}

CONNECTIVE_WORDS: dict[str, Connective] = {
    "and not": Connective.NOT,
    "and": Connective.AND,
    "or": Connective.OR,
}

# "and not" must be tried before "and"
_CONNECTIVE_RE = re.compile(r"\s+(and\s+not|and|or)\s+", re.IGNORECASE)

_PAREN_AND_SPACE = "()" + string.whitespace


def _closing_index(text: str, open_index: int) -> Optional[int]:
    """Index of the paren closing the one at open_index, or None if unclosed."""
    depth = 0
    for i in range(open_index, len(text)):
        char = text[i]
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                return i
    return None


def _is_wrapped(text: str) -> bool:
    """True if the paren opening text closes at its last character."""
    return text.startswith("(") and _closing_index(text, 0) == len(text) - 1


def strip_outer_parens(text: str) -> str:
    """
    Remove parens that wrap the entire expression, as many times as they do.

    Example:
        >>> strip_outer_parens("((spiders) and (snakes))")
        '(spiders) and (snakes)'
    """
    text = text.strip()
    while _is_wrapped(text):
        text = text[1:-1].strip()
    return text


def split_top_level(text: str) -> list[tuple[str, Connective]]:
    """
    Split an expression on connectives that are not inside parens.

    Each segment is paired with the connective that follows it; the last
    segment gets AND. Unbalanced closing parens never take the depth
    below zero.
    """
    segments: list[tuple[str, Connective]] = []
    depth = 0
    start = 0
    i = 0
    while i < len(text):
        char = text[i]
        if char == "(":
            depth += 1
        elif char == ")":
            depth = max(depth - 1, 0)
        elif depth == 0 and char.isspace():
            match = _CONNECTIVE_RE.match(text, i)
            if match:
                word = " ".join(match.group(1).lower().split())
                segments.append((text[start:i], CONNECTIVE_WORDS[word]))
                start = i = match.end()
                continue
        i += 1
    segments.append((text[start:], Connective.AND))
    return segments


def _is_blank(text: str) -> bool:
    return not text.strip(_PAREN_AND_SPACE)


def extract_field(segment: str) -> tuple[SearchField, str]:
    """
    Work out the field and text of one segment.

    Only the exact shape ``<code>:(<text>)`` with a known code is field
    scoped. Anything else, including an unknown code in that shape, is
    searched as literal text in any field.

    Example:
        >>> extract_field("t:(spiders and snakes)")
        (<SearchField.TITLE: 'title'>, 'spiders and snakes')
        >>> extract_field("t:spiders")
        (<SearchField.ANY: 'any'>, 't:spiders')
    """
    if (
        len(segment) >= 4
        and segment[1] == ":"
        and segment[2] == "("
        and _closing_index(segment, 2) == len(segment) - 1
    ):
        field = FIELD_CODES.get(segment[0])
        if field is not None:
            return field, segment[3:-1]
    return SearchField.ANY, segment


def decode_advanced_search(expression: str) -> list[SearchTerm]:
    """
    Decode an III advanced search expression into Primo search terms.

    Never raises: malformed input degrades to literal text terms, and
    input with no searchable text decodes to an empty list.

    Args:
        expression: Raw expression, e.g. "(t:(spiders) and not d:(biology))"

    Returns:
        Terms in left-to-right order. Each term's connective joins it to
        the next term; the last term's connective is always AND.

    Example:
        >>> [t.to_query() for t in decode_advanced_search("t:(spiders) or a:(lee)")]
        ['title,contains,spiders,OR', 'creator,contains,lee,AND']
    """
    text = strip_outer_parens(expression)
    if not text:
        return []

    terms: list[SearchTerm] = []
    for segment, connective in split_top_level(text):
        segment = segment.strip()
        if _is_wrapped(segment):
            segment = segment[1:-1].strip()
        if _is_blank(segment):
            continue
        field, term_text = extract_field(segment)
        if _is_blank(term_text):
            continue
        terms.append(SearchTerm(field=field, text=term_text, connective=connective))

    if terms and terms[-1].connective is not Connective.AND:
        terms[-1] = terms[-1].model_copy(update={"connective": Connective.AND})

    logger.debug(f"Decoded advanced search {expression!r} into {len(terms)} terms")
    return terms
