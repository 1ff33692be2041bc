"""
Tests for Pattern Resolution
============================
Tests for placeholder/literal classification and ruleset cycling.
"""

import pytest

from longpass.core.errors import NoRulesetError
from longpass.core.pattern import Literal, Placeholder, cursor_trace, resolve
from longpass.core.ruleset import Ruleset


class TestResolve:
    """Tests for resolve()."""

    def test_single_ruleset(self):
        """Placeholders and the space literal resolve in order."""
        rules = [Ruleset(arrays={"a": ["x", "y"]})]
        assert resolve("a a", rules) == [
            Placeholder(0, "a"),
            Literal(" "),
            Placeholder(0, "a"),
        ]

    def test_cycles_across_rulesets(self):
        """Each placeholder advances to the next ruleset."""
        rules = [Ruleset(arrays={"a": ["p", "q"]}), Ruleset(arrays={"a": ["r", "s"]})]
        steps = resolve("a a", rules)
        assert steps[0] == Placeholder(0, "a")
        assert steps[2] == Placeholder(1, "a")

    def test_cursor_wraps_around(self):
        """The cursor wraps modulo the number of rulesets."""
        rules = [Ruleset(arrays={"a": ["p"]}), Ruleset(arrays={"a": ["r"]})]
        steps = [s for s in resolve("aaa", rules)]
        assert [s.ruleset_index for s in steps] == [0, 1, 0]

    def test_unknown_character_is_literal(self):
        """Characters with no matching array stay literal."""
        rules = [Ruleset(arrays={"a": ["cat"]})]
        assert resolve("a-a", rules)[1] == Literal("-")

    def test_same_char_literal_then_placeholder(self):
        """A key missing from the active ruleset is literal on that step only."""
        rules = [
            Ruleset(arrays={"a": ["x"]}),
            Ruleset(arrays={"a": ["y"], "b": ["z"]}),
        ]
        # 'b' is literal against ruleset 0, then a placeholder once 'a' advanced
        assert resolve("bab", rules) == [
            Literal("b"),
            Placeholder(0, "a"),
            Placeholder(1, "b"),
        ]

    def test_empty_pattern(self):
        """An empty pattern resolves to no steps."""
        assert resolve("", [Ruleset(arrays={"a": ["x"]})]) == []

    def test_no_rulesets(self):
        """Resolution without rulesets fails."""
        with pytest.raises(NoRulesetError):
            resolve("a a", [])

    def test_deterministic(self):
        """Resolving twice gives the same steps."""
        rules = [Ruleset(arrays={"a": ["x"], "d": ["1"]}), Ruleset(arrays={"d": ["2"]})]
        assert resolve("a d-d a", rules) == resolve("a d-d a", rules)


class TestCursorTrace:
    """Literals never advance the ruleset cursor."""

    def test_interleaved_literals(self):
        """Hand-computed cursor sequence for mixed literals and placeholders."""
        rules = [
            Ruleset(arrays={"a": ["x"]}),
            Ruleset(arrays={"a": ["y"]}),
            Ruleset(arrays={"a": ["z"]}),
        ]
        #        a  -  -  a  ' ' a  !  a
        expected = [0, 1, 1, 1, 2, 2, 0, 0]
        assert cursor_trace("a--a a!a", rules) == expected

    def test_no_rulesets(self):
        """Tracing without rulesets fails like resolve."""
        with pytest.raises(NoRulesetError):
            cursor_trace("a", [])
