"""
Redirect Service - translates legacy OPAC requests into Primo VE URLs.

The Detourer picks a rule from its RuleSet by path prefix and runs the
builder for that rule's type. Builders only read the request and the
IdMap, so a single Detourer can serve any number of concurrent requests.
Requests that cannot be translated (unmapped IDs, unknown codes, odd
search syntax) still get a redirect, to the Primo search page.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional
from urllib.parse import parse_qsl, urlencode

from detour.api.services.advanced_search_service import decode_advanced_search
from detour.core.id_map import IdMap
from detour.core.rule_sets import (
    AdvancedSearchRule,
    BrowseRule,
    LoginRule,
    RecordRule,
    Rule,
    RuleSet,
    SearchOptions,
    SearchRule,
    SearchTarget,
)
from detour.utils.ids import format_docid, parse_record_number

logger = logging.getLogger(__name__)

SEARCH_PATH = "/discovery/search"
RECORD_PATH = "/discovery/fulldisplay"
LOGIN_PATH = "/discovery/login"
BROWSE_PATH = "/discovery/browse"

CALL_NUMBER_BROWSE_SCOPE = "callnumber.0"

PERMANENT_REDIRECT = 301
TEMPORARY_REDIRECT = 302


@dataclass(frozen=True)
class Redirect:
    url: str
    status_code: int


class _OutboundUrl:
    """Path and ordered query parameters of the URL being built."""

    def __init__(self, path: str = SEARCH_PATH):
        self.path = path
        self._params: list[tuple[str, str]] = []

    def set(self, name: str, value: str) -> None:
        """Replace all values of name with value."""
        self._params = [(k, v) for k, v in self._params if k != name]
        self._params.append((name, value))

    def add(self, name: str, value: str) -> None:
        """Append another value for name."""
        self._params.append((name, value))

    def render(self, base_url: str) -> str:
        url = f"{base_url}{self.path}"
        if self._params:
            url = f"{url}?{urlencode(self._params)}"
        return url


def parse_query(query_string: str) -> dict[str, str]:
    """Parse a query string, keeping the first value of repeated parameters."""
    params: dict[str, str] = {}
    for name, value in parse_qsl(query_string, keep_blank_values=True):
        params.setdefault(name, value)
    return params


class Detourer:
    """Builds Primo redirects for requests to a legacy catalogue."""

    def __init__(
        self,
        id_map: IdMap,
        rule_set: RuleSet,
        base_url: str,
        vid: str,
        status_code: int = PERMANENT_REDIRECT,
    ):
        self.id_map = id_map
        self.rule_set = rule_set
        self.base_url = base_url.rstrip("/")
        self.vid = vid
        self.status_code = status_code
        self._builders: dict[type, Callable[[Rule, str, dict[str, str], _OutboundUrl], None]] = {
            RecordRule: self._build_record,
            LoginRule: self._build_login,
            BrowseRule: self._build_browse,
            SearchRule: self._build_search,
            AdvancedSearchRule: self._build_advanced_search,
        }

    def classify(self, path: str, query_string: str = "") -> Redirect:
        """
        Translate one legacy request into a Primo redirect.

        Args:
            path: Request path, e.g. "/record=b2405380"
            query_string: Raw query string, without the leading "?"

        Returns:
            Redirect carrying the absolute Primo URL and the status to send
        """
        params = parse_query(query_string)
        url = _OutboundUrl()

        rule = self.rule_set.match(path)
        if rule is None:
            logger.debug(f"No rule matched {path}, using the search page")
        else:
            logger.debug(f"{path} matched {type(rule).__name__} {rule.prefix}")
            self._builders[type(rule)](rule, path, params, url)

        url.set("vid", self.vid)
        return Redirect(url=url.render(self.base_url), status_code=self.status_code)

    # -- builders ----------------------------------------------------------

    def _build_record(self, rule: RecordRule, path: str, params: dict[str, str], url: _OutboundUrl) -> None:
        if rule.id_param:
            raw_id = params.get(rule.id_param, "")
        else:
            raw_id = path[len(rule.prefix):]

        legacy_id = parse_record_number(raw_id)
        if legacy_id is None:
            logger.debug(f"Malformed record number {raw_id!r}")
            return

        target_id = self.id_map.lookup(legacy_id)
        if target_id is None:
            logger.debug(f"No mapping for bib ID {legacy_id}")
            return

        url.path = RECORD_PATH
        url.set("docid", format_docid(target_id))

    def _build_login(self, rule: LoginRule, path: str, params: dict[str, str], url: _OutboundUrl) -> None:
        url.path = LOGIN_PATH

    def _build_browse(self, rule: BrowseRule, path: str, params: dict[str, str], url: _OutboundUrl) -> None:
        _set_browse(url, rule.browse_scope, params.get(rule.query_param, ""))

    def _build_search(self, rule: SearchRule, path: str, params: dict[str, str], url: _OutboundUrl) -> None:
        options = rule.options
        _apply_search_options(options, params, url)

        text = params.get(options.text_param, "")
        expression = params.get(options.expression_param, "") if options.expression_param else ""

        if text:
            target = options.search_types.get(params.get(options.type_param, ""), SearchTarget.ANY)
            if target is SearchTarget.CALL_NUMBER:
                _set_browse(url, CALL_NUMBER_BROWSE_SCOPE, text)
            elif target is SearchTarget.ADVANCED:
                _set_advanced_query(url, text)
            else:
                url.set("query", f"{target.value},contains,{text}")
        elif expression:
            _set_advanced_query(url, expression)

    def _build_advanced_search(
        self, rule: AdvancedSearchRule, path: str, params: dict[str, str], url: _OutboundUrl
    ) -> None:
        options = rule.options
        _apply_search_options(options, params, url)

        expression = ""
        if options.expression_param:
            expression = params.get(options.expression_param, "")
        if not expression:
            expression = params.get(options.text_param, "")
        _set_advanced_query(url, expression)


def _set_browse(url: _OutboundUrl, browse_scope: str, text: str) -> None:
    url.path = BROWSE_PATH
    url.set("browseScope", browse_scope)
    if text:
        url.set("browseQuery", text)


def _set_advanced_query(url: _OutboundUrl, expression: str) -> None:
    """Switch to advanced mode with one query parameter per decoded term."""
    url.set("mode", "advanced")
    for term in decode_advanced_search(expression):
        url.add("query", term.to_query())


def _apply_search_options(options: SearchOptions, params: dict[str, str], url: _OutboundUrl) -> None:
    """Translate sort and scope codes; unknown codes are left out."""
    if options.sort_param:
        sort_by: Optional[str] = options.sort_codes.get(params.get(options.sort_param, ""))
        if sort_by:
            url.set("sortby", sort_by)

    if options.scope_param:
        facets = options.scope_facets.get(params.get(options.scope_param, ""), ())
        for facet in facets:
            url.add("mfacet", facet)

    for name, value in options.fixed_params:
        url.set(name, value)
