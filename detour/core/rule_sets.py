"""
Redirect rule sets - which legacy OPAC paths translate to which Primo pages.

Each legacy platform gets a RuleSet: an ordered tuple of rules, one per
request class, matched by plain path prefix. The first matching rule
wins. Requests matching no rule go to the Primo search landing page.
"""
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Union


class SearchTarget(str, Enum):
    """What a legacy search type code turns into on the Primo side."""
    ANY = "any"
    TITLE = "title"
    CREATOR = "creator"
    SUBJECT = "sub"
    CALL_NUMBER = "callnumber"
    ADVANCED = "advanced"


@dataclass(frozen=True)
class SearchOptions:
    """Parameter names and code tables for translating a legacy search."""
    text_param: str                              # Free-text search argument
    type_param: str                              # Search type (index) code
    search_types: Mapping[str, SearchTarget]     # Type code -> Primo target
    sort_param: Optional[str] = None
    sort_codes: Mapping[str, str] = field(default_factory=dict)          # Code -> sortby
    scope_param: Optional[str] = None
    scope_facets: Mapping[str, tuple[str, ...]] = field(default_factory=dict)  # Code -> mfacet values
    expression_param: Optional[str] = None       # Raw advanced search expression
    fixed_params: tuple[tuple[str, str], ...] = ()


@dataclass(frozen=True)
class RecordRule:
    """Record permalink. The legacy ID is the path after the prefix, or id_param."""
    prefix: str
    id_param: Optional[str] = None


@dataclass(frozen=True)
class LoginRule:
    """Patron account / login page."""
    prefix: str


@dataclass(frozen=True)
class BrowseRule:
    """Index browse (author, call number, title)."""
    prefix: str
    browse_scope: str
    query_param: str


@dataclass(frozen=True)
class SearchRule:
    """Simple or canned keyword search."""
    prefix: str
    options: SearchOptions


@dataclass(frozen=True)
class AdvancedSearchRule:
    """Boolean advanced search, decoded into separate Primo query terms."""
    prefix: str
    options: SearchOptions


Rule = Union[RecordRule, LoginRule, BrowseRule, SearchRule, AdvancedSearchRule]


class UnknownRuleSetError(KeyError):
    """Raised when a rule set name is not registered."""


@dataclass(frozen=True)
class RuleSet:
    """Ordered redirect rules for one legacy platform."""
    name: str
    description: str
    rules: tuple[Rule, ...]

    def match(self, path: str) -> Optional[Rule]:
        """Return the first rule whose prefix starts path, or None."""
        for rule in self.rules:
            if path.startswith(rule.prefix):
                return rule
        return None


# ---------------------------------------------------------------------------
# III Sierra / Millennium WebPAC
# ---------------------------------------------------------------------------

SIERRA_SORT_CODES = {
    "t": "title",
    "a": "author",
    "c": "date_a",
    "r": "date_d",
}

SIERRA_SCOPE_FACETS = {
    "1": ("rtype,include,books,1",),
    "2": ("rtype,include,journals,1",),
    "3": ("rtype,include,books,1", "rtype,include,online_resources,2"),
    "4": ("rtype,include,journals,1", "rtype,include,online_resources,2"),
    "5": ("rtype,include,online_resources,1",),
    "6": ("rtype,include,government_documents,1",),
    "7": ("rtype,include,audios,1",),
    "8": ("rtype,include,videos,1",),
}

SIERRA_SEARCH_TYPES = {
    "t": SearchTarget.TITLE,
    "a": SearchTarget.CREATOR,
    "d": SearchTarget.SUBJECT,
    "c": SearchTarget.CALL_NUMBER,
    "X": SearchTarget.ADVANCED,
}

SIERRA_SEARCH = SearchOptions(
    text_param="searcharg",
    type_param="searchtype",
    search_types=MappingProxyType(SIERRA_SEARCH_TYPES),
    sort_param="sortdropdown",
    sort_codes=MappingProxyType(SIERRA_SORT_CODES),
    scope_param="searchscope",
    scope_facets=MappingProxyType(SIERRA_SCOPE_FACETS),
    expression_param="SEARCH",
    fixed_params=(("tab", "Everything"), ("search_scope", "MyInst_and_CI")),
)

SIERRA = RuleSet(
    name="sierra",
    description="III Sierra/Millennium WebPAC",
    rules=(
        RecordRule("/record=b"),
        LoginRule("/patroninfo"),
        BrowseRule("/search/a", browse_scope="author", query_param="SEARCH"),
        BrowseRule("/search/c", browse_scope="callnumber.0", query_param="SEARCH"),
        BrowseRule("/search/t", browse_scope="title", query_param="SEARCH"),
        AdvancedSearchRule("/search/X", options=SIERRA_SEARCH),
        SearchRule("/search", options=SIERRA_SEARCH),
    ),
)

# ---------------------------------------------------------------------------
# Voyager WebVoyage
# ---------------------------------------------------------------------------

WEBVOYAGE_SEARCH_TYPES = {
    "GKEY^*": SearchTarget.ANY,
    "TALL": SearchTarget.TITLE,
    "NAME": SearchTarget.CREATOR,
    "SUBJ": SearchTarget.SUBJECT,
    "CALL": SearchTarget.CALL_NUMBER,
}

WEBVOYAGE_SEARCH = SearchOptions(
    text_param="searchArg",
    type_param="searchCode",
    search_types=MappingProxyType(WEBVOYAGE_SEARCH_TYPES),
    fixed_params=(("tab", "Everything"), ("search_scope", "MyInst_and_CI")),
)

WEBVOYAGE = RuleSet(
    name="webvoyage",
    description="Voyager WebVoyage",
    rules=(
        RecordRule("/vwebv/holdingsInfo", id_param="bibId"),
        LoginRule("/vwebv/login"),
        LoginRule("/vwebv/myAccount"),
        SearchRule("/vwebv/search", options=WEBVOYAGE_SEARCH),
    ),
)


RULE_SETS: dict[str, RuleSet] = {
    rule_set.name: rule_set for rule_set in (SIERRA, WEBVOYAGE)
}


def get_rule_set(name: str) -> RuleSet:
    """Look up a registered rule set by name."""
    try:
        return RULE_SETS[name]
    except KeyError:
        raise UnknownRuleSetError(
            f"Unknown rule set '{name}', expected one of: {', '.join(sorted(RULE_SETS))}"
        ) from None
