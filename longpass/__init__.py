"""
longpass - Diceware-style passphrase generator.

Expands textual patterns against word-list rulesets using the system
CSPRNG and reports the entropy of the result.
"""

__version__ = "1.0.0"

from longpass.core.errors import (
    LongpassError,
    NoRulesetError,
    PatternIndexOutOfRange,
    RulesetError,
    EntropySourceError,
)

from longpass.core.entropy import SecureRandomSource, SystemRandomSource

from longpass.core.ruleset import (
    Ruleset,
    RulesetLoadResult,
    load_ruleset,
    load_rulesets,
    select_pattern,
)

from longpass.core.pattern import Placeholder, Literal, ResolvedStep, resolve

from longpass.core.generator import (
    generate_words,
    generate_passphrase,
    generate_batch,
    calculate_passphrase_entropy,
    calculate_password_entropy,
)

__all__ = [
    # Version
    "__version__",
    # Errors
    "LongpassError",
    "NoRulesetError",
    "PatternIndexOutOfRange",
    "RulesetError",
    "EntropySourceError",
    # Random source
    "SecureRandomSource",
    "SystemRandomSource",
    # Rulesets
    "Ruleset",
    "RulesetLoadResult",
    "load_ruleset",
    "load_rulesets",
    "select_pattern",
    # Patterns
    "Placeholder",
    "Literal",
    "ResolvedStep",
    "resolve",
    # Generator
    "generate_words",
    "generate_passphrase",
    "generate_batch",
    "calculate_passphrase_entropy",
    "calculate_password_entropy",
]
