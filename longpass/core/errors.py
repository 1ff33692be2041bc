"""
longpass Errors - Exception hierarchy shared by the core modules.
"""


class LongpassError(Exception):
    """Base error for longpass."""
    pass


class NoRulesetError(LongpassError):
    """Pattern resolution attempted without any ruleset."""
    pass


class PatternIndexOutOfRange(LongpassError):
    """Numeric pattern selection outside the ruleset's pattern list."""

    def __init__(self, index: int, count: int):
        self.index = index
        self.count = count
        super().__init__(f"pattern {index} out of range (1-{count})")


class RulesetError(LongpassError):
    """Ruleset could not be read, parsed or validated."""
    pass


class EntropySourceError(LongpassError):
    """The operating system random source could not supply entropy."""
    pass


class ConfigError(LongpassError):
    """A configuration value has the wrong type or is out of range."""
    pass
