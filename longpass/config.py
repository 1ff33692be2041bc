"""
longpass configuration.

Defaults for the CLI are read from ~/.longpass/config.json (never written
by longpass); a single run is described by an immutable GenerationOptions
value.
"""

import copy
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from longpass.core.errors import ConfigError
from longpass.core.log import get_logger

logger = get_logger('config')


DEFAULTS = {
    "generator": {
        "count": 10,
        "entropy": False,
        "shuffle": False,
        "workers": 1,
    },
    "rulesets": {
        "cache_dir": "~/.longpass/cache",
    },
}

CONFIG_DIR = Path.home() / ".longpass"
CONFIG_FILE = CONFIG_DIR / "config.json"


@dataclass(frozen=True)
class GenerationOptions:
    """
    Options for one generation run.

    Raises:
        ConfigError: If count or workers is not an integer in range
    """
    count: int = 10
    show_entropy: bool = False
    list_only: bool = False
    pattern: str = ""
    shuffle: bool = False
    workers: int = 1

    def __post_init__(self):
        # bool is an int subclass but "count": true is a config mistake
        for name, minimum in (("count", 0), ("workers", 1)):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(f"{name} must be an integer, got {value!r}")
            if value < minimum:
                raise ConfigError(f"{name} must be >= {minimum}, got {value}")


def _deep_merge(base: dict, override: dict) -> dict:
    """Deep merge override into base, returning a new dict."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


class Config:
    """Read-only user defaults, deep-merged over DEFAULTS."""

    def __init__(self, config_file: Optional[Path] = None):
        self._file = Path(config_file) if config_file else CONFIG_FILE
        self._data = self._load()

    def _read_user_file(self) -> dict:
        """Parsed user sections; anything that is not a table is dropped."""
        if not self._file.exists():
            return {}
        try:
            with open(self._file, 'r') as f:
                user_data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Ignoring unreadable config %s: %s", self._file, e)
            return {}

        if not isinstance(user_data, dict):
            logger.warning("Ignoring %s: top level is not an object", self._file)
            return {}

        sections = {}
        for name, section in user_data.items():
            if isinstance(section, dict):
                sections[name] = section
            else:
                logger.warning("Ignoring config section %r in %s: not an object",
                               name, self._file)
        return sections

    def _load(self) -> dict:
        return _deep_merge(copy.deepcopy(DEFAULTS), self._read_user_file())

    def get(self, section: str, key: str) -> Any:
        """Get a config value."""
        return self._data.get(section, {}).get(key)

    @property
    def cache_dir(self) -> Optional[Path]:
        """Ruleset cache directory, None when caching is disabled."""
        value = self.get("rulesets", "cache_dir")
        if value and not isinstance(value, str):
            raise ConfigError(f"rulesets.cache_dir must be a path string, got {value!r}")
        return Path(value).expanduser() if value else None
