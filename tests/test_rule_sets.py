"""
Tests for redirect rule sets.

Tests cover:
- Prefix matching order
- Rule set registry lookups
"""
import pytest

from detour.core.rule_sets import (
    RULE_SETS,
    SIERRA,
    AdvancedSearchRule,
    BrowseRule,
    LoginRule,
    RecordRule,
    RuleSet,
    SearchRule,
    UnknownRuleSetError,
    get_rule_set,
)


class TestRuleSetMatch:
    """Tests for RuleSet.match."""

    @pytest.mark.parametrize("path,rule_type", [
        ("/record=b2405380", RecordRule),
        ("/patroninfo", LoginRule),
        ("/search/a?SEARCH=lee", BrowseRule),
        ("/search/X", AdvancedSearchRule),
        ("/search/Y", SearchRule),
        ("/search~S1", SearchRule),
    ])
    def test_sierra_paths(self, path, rule_type):
        """Should pick the rule for each legacy request class."""
        assert isinstance(SIERRA.match(path), rule_type)

    def test_title_browse_has_own_prefix(self):
        """Should browse titles for /search/t, not call numbers."""
        assert SIERRA.match("/search/t").browse_scope == "title"
        assert SIERRA.match("/search/c").browse_scope == "callnumber.0"

    def test_first_match_wins(self):
        """Should stop at the first matching prefix."""
        rule_set = RuleSet(
            name="test",
            description="",
            rules=(LoginRule("/a"), RecordRule("/ab")),
        )
        assert isinstance(rule_set.match("/abc"), LoginRule)

    def test_no_match(self):
        """Should return None when nothing matches."""
        assert SIERRA.match("/screens/help.html") is None

    def test_prefix_is_not_a_pattern(self):
        """Should compare prefixes literally."""
        assert SIERRA.match("/recordXb1") is None


class TestGetRuleSet:
    """Tests for get_rule_set."""

    def test_known(self):
        """Should return registered rule sets."""
        assert get_rule_set("sierra") is SIERRA
        assert get_rule_set("webvoyage").name == "webvoyage"

    def test_registry_names(self):
        """Should register every rule set under its own name."""
        assert all(name == rule_set.name for name, rule_set in RULE_SETS.items())

    def test_unknown(self):
        """Should raise UnknownRuleSetError, a KeyError."""
        with pytest.raises(UnknownRuleSetError):
            get_rule_set("koha")
        with pytest.raises(KeyError):
            get_rule_set("koha")
