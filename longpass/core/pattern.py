"""
longpass Pattern - Resolve pattern characters against rulesets.

Each character of a pattern is either a placeholder (the name of a word
array in the active ruleset) or a literal. The active ruleset rotates
round-robin, advancing once per placeholder; literals leave it in place.
Generation and entropy calculation both go through resolve() so their
cycling decisions cannot drift apart.
"""

from typing import List, NamedTuple, Sequence, Union

from longpass.core.errors import NoRulesetError
from longpass.core.ruleset import Ruleset


class Placeholder(NamedTuple):
    """Select one word from rulesets[ruleset_index].arrays[key]."""
    ruleset_index: int
    key: str


class Literal(NamedTuple):
    """Insert char verbatim."""
    char: str


ResolvedStep = Union[Placeholder, Literal]


def resolve(pattern: str, rulesets: Sequence[Ruleset]) -> List[ResolvedStep]:
    """
    Classify every pattern character against the rotating active ruleset.

    Args:
        pattern: Pattern string
        rulesets: Ordered, non-empty rulesets

    Returns:
        Resolved steps, one per pattern character

    Raises:
        NoRulesetError: If rulesets is empty
    """
    if not rulesets:
        raise NoRulesetError("cannot resolve a pattern without rulesets")

    steps: List[ResolvedStep] = []
    i = 0
    for char in pattern:
        if char in rulesets[i].arrays:
            steps.append(Placeholder(i, char))
            i = (i + 1) % len(rulesets)
        else:
            steps.append(Literal(char))
    return steps


def cursor_trace(pattern: str, rulesets: Sequence[Ruleset]) -> List[int]:
    """Index of the active ruleset at each pattern character."""
    trace = []
    i = 0
    for step in resolve(pattern, rulesets):
        trace.append(i)
        if isinstance(step, Placeholder):
            i = (i + 1) % len(rulesets)
    return trace
