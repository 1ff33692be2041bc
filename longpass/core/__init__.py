"""
longpass Core - Random source, rulesets, pattern resolution and generation.
"""

from longpass.core.entropy import SecureRandomSource, SystemRandomSource

from longpass.core.ruleset import Ruleset, load_ruleset, load_rulesets, select_pattern

from longpass.core.pattern import Placeholder, Literal, resolve

from longpass.core.generator import (
    generate_passphrase,
    generate_batch,
    calculate_passphrase_entropy,
)

__all__ = [
    "SecureRandomSource",
    "SystemRandomSource",
    "Ruleset",
    "load_ruleset",
    "load_rulesets",
    "select_pattern",
    "Placeholder",
    "Literal",
    "resolve",
    "generate_passphrase",
    "generate_batch",
    "calculate_passphrase_entropy",
]
