"""
Shared fixtures for longpass tests.
"""

import sys
from pathlib import Path

import pytest

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from longpass.core.ruleset import Ruleset


class ScriptedRandom:
    """Deterministic stand-in for SecureRandomSource."""

    def __init__(self, indices=None):
        self.indices = list(indices or [])
        self.calls = []

    def uniform_index(self, n):
        self.calls.append(n)
        value = self.indices.pop(0) if self.indices else 0
        assert 0 <= value < n
        return value

    def shuffle(self, items):
        return list(reversed(items))


@pytest.fixture
def scripted():
    """Factory for scripted random sources."""
    return ScriptedRandom


@pytest.fixture
def single():
    """One ruleset with an 8-word array."""
    return Ruleset(
        arrays={"a": ["w0", "w1", "w2", "w3", "w4", "w5", "w6", "w7"]},
        patterns=["a a", "a a a"],
        source_name="single.toml",
    )


@pytest.fixture
def ruleset_file(tmp_path):
    """A TOML ruleset on disk."""
    path = tmp_path / "words.toml"
    path.write_text(
        'patterns = ["a a a", "a d", "a-a"]\n'
        'a = ["apple", "brick", "cloud", "dune"]\n'
        'd = ["0", "1", "2", "3", "4", "5", "6", "7"]\n',
        encoding="utf-8",
    )
    return path
