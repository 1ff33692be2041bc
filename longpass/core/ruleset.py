"""
longpass Ruleset - Word-list rulesets and their on-disk cache.

A ruleset is a TOML document containing at least two arrays, one named
'patterns' and one with a single-character name:

    patterns = ["a a a a a a vsd", "a a a a"]
    a = ["apple", "brick", "cloud"]
    d = ["0", "1", "2", "3", "4", "5", "6", "7", "8", "9"]

Parsed rulesets are cached as JSON and reused while the cache is at least
as new as the source file.
"""

import hashlib
import json
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from longpass.core.errors import PatternIndexOutOfRange, RulesetError
from longpass.core.log import get_logger

logger = get_logger('ruleset')

# Reserved document keys that are never word arrays
PATTERNS_KEY = "patterns"
FILENAME_KEY = "filename"

PathLike = Union[str, Path]


@dataclass(frozen=True)
class Ruleset:
    """
    Immutable collection of single-character word arrays plus patterns.

    Raises:
        RulesetError: If a key is not a single character, or an array is
            empty or holds non-string entries
    """
    arrays: Mapping[str, Tuple[str, ...]]
    patterns: Tuple[str, ...] = ()
    source_name: str = ""

    # Word arrays are a read-only mapping, which cannot be hashed
    __hash__ = None

    def __post_init__(self):
        arrays: Dict[str, Tuple[str, ...]] = {}
        for key, words in self.arrays.items():
            if not isinstance(key, str) or len(key) != 1:
                raise RulesetError(
                    f"{self._label()}: array name {key!r} must be a single character"
                )
            if isinstance(words, str) or not isinstance(words, Sequence):
                raise RulesetError(f"{self._label()}: array '{key}' must be a list of words")
            if len(words) == 0:
                raise RulesetError(f"{self._label()}: array '{key}' is empty")
            if not all(isinstance(w, str) for w in words):
                raise RulesetError(f"{self._label()}: array '{key}' must contain only strings")
            arrays[key] = tuple(words)

        if (isinstance(self.patterns, str) or not isinstance(self.patterns, Sequence)
                or not all(isinstance(p, str) for p in self.patterns)):
            raise RulesetError(f"{self._label()}: 'patterns' must be a list of strings")

        object.__setattr__(self, 'arrays', MappingProxyType(arrays))
        object.__setattr__(self, 'patterns', tuple(self.patterns))

    def _label(self) -> str:
        return self.source_name or "ruleset"

    @classmethod
    def from_document(cls, document: Mapping[str, Any], source_name: str = "") -> "Ruleset":
        """
        Build a ruleset from a parsed TOML/JSON document.

        Single-character keys become word arrays, 'patterns' the pattern
        list and 'filename' the source label. Other keys are ignored.
        """
        arrays = {}
        for key, value in document.items():
            if key in (PATTERNS_KEY, FILENAME_KEY):
                continue
            if len(key) == 1:
                arrays[key] = value
            else:
                logger.debug("%s: ignoring non-array key %r", source_name, key)

        if not arrays:
            raise RulesetError(f"{source_name or 'ruleset'}: no single-character word arrays")

        return cls(
            arrays=arrays,
            patterns=document.get(PATTERNS_KEY, []),
            source_name=str(document.get(FILENAME_KEY) or source_name),
        )

    def to_document(self) -> Dict[str, Any]:
        """Inverse of from_document, used for the JSON cache."""
        doc: Dict[str, Any] = {key: list(words) for key, words in self.arrays.items()}
        doc[PATTERNS_KEY] = list(self.patterns)
        doc[FILENAME_KEY] = self.source_name
        return doc

    def array_sizes(self) -> List[Tuple[str, int]]:
        """Array names and lengths, sorted by name."""
        return [(key, len(self.arrays[key])) for key in sorted(self.arrays)]


@dataclass
class RulesetLoadResult:
    """Outcome of loading several rulesets; error is set on the first failure."""
    rulesets: List[Ruleset] = field(default_factory=list)
    error: Optional[RulesetError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


# =============================================================================
# Parsing and cache
# =============================================================================

def _parse_file(path: Path) -> Dict[str, Any]:
    """Parse a ruleset source file (TOML, or JSON by extension)."""
    try:
        if path.suffix.lower() == '.json':
            with open(path, 'r', encoding='utf-8') as f:
                doc = json.load(f)
        else:
            with open(path, 'rb') as f:
                doc = tomllib.load(f)
    except FileNotFoundError:
        raise RulesetError(f"'{path}': file not found")
    except (OSError, UnicodeDecodeError) as e:
        raise RulesetError(f"'{path}': {e}") from e
    except (tomllib.TOMLDecodeError, json.JSONDecodeError) as e:
        raise RulesetError(f"'{path}': {e}") from e

    if not isinstance(doc, dict):
        raise RulesetError(f"'{path}': top level must be a table")
    return doc


def cache_path_for(source: PathLike, cache_dir: PathLike) -> Path:
    """
    Location of the JSON cache entry for a ruleset source file.

    The absolute source path is hashed so rulesets with the same file name
    in different directories do not collide.
    """
    source = Path(source)
    digest = hashlib.sha256(str(source.resolve()).encode('utf-8')).hexdigest()[:16]
    return Path(cache_dir).expanduser() / f"{source.name}.{digest}.json"


def _read_cache(source: Path, cache_file: Path) -> Optional[Dict[str, Any]]:
    """Return the cached document if it is fresh, else None."""
    if not cache_file.exists():
        return None
    if os.path.getmtime(source) > os.path.getmtime(cache_file):
        logger.debug("Cache for %s is stale", source)
        return None
    try:
        with open(cache_file, 'r', encoding='utf-8') as f:
            doc = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Ignoring unreadable cache %s: %s", cache_file, e)
        return None
    logger.debug("Loaded %s from cache %s", source, cache_file)
    return doc if isinstance(doc, dict) else None


def _write_cache(cache_file: Path, document: Dict[str, Any]) -> None:
    """Store a parsed ruleset; failures only cost the next parse."""
    try:
        cache_file.parent.mkdir(parents=True, exist_ok=True)
        with open(cache_file, 'w', encoding='utf-8') as f:
            json.dump(document, f)
    except OSError as e:
        logger.warning("Could not write ruleset cache %s: %s", cache_file, e)


def load_ruleset(path: PathLike, cache_dir: Optional[PathLike] = None) -> Ruleset:
    """
    Load a ruleset from disk, using the JSON cache when it is fresh.

    Args:
        path: Ruleset source file (TOML, or JSON)
        cache_dir: Cache directory, None to disable caching

    Returns:
        Parsed Ruleset labelled with the path as given

    Raises:
        RulesetError: If the file cannot be read, parsed or validated
    """
    source = Path(path)
    if not source.exists():
        raise RulesetError(f"'{path}': file not found")

    cache_file = cache_path_for(source, cache_dir) if cache_dir else None
    if cache_file is not None:
        doc = _read_cache(source, cache_file)
        if doc is not None:
            try:
                return Ruleset.from_document(doc, source_name=str(path))
            except RulesetError as e:
                logger.warning("Discarding invalid cache %s: %s", cache_file, e)

    doc = _parse_file(source)
    ruleset = Ruleset.from_document(doc, source_name=str(path))
    logger.info("Loaded ruleset %s (%d arrays, %d patterns)",
                ruleset.source_name, len(ruleset.arrays), len(ruleset.patterns))

    if cache_file is not None:
        cached = ruleset.to_document()
        # Without an explicit label the path given on each load is used
        if FILENAME_KEY not in doc:
            del cached[FILENAME_KEY]
        _write_cache(cache_file, cached)

    return ruleset


def load_rulesets(paths: Sequence[PathLike],
                  cache_dir: Optional[PathLike] = None) -> RulesetLoadResult:
    """
    Load rulesets in order, stopping at the first failure.

    Returns:
        RulesetLoadResult holding the rulesets loaded so far and the error,
        if any
    """
    result = RulesetLoadResult()
    for path in paths:
        try:
            result.rulesets.append(load_ruleset(path, cache_dir=cache_dir))
        except RulesetError as e:
            logger.error("Failed to load ruleset %s: %s", path, e)
            result.error = e
            break
    return result


def select_pattern(rulesets: Sequence[Ruleset], choice: str = "") -> str:
    """
    Pick the pattern to generate from.

    Args:
        rulesets: Loaded rulesets; patterns come from the first one
        choice: Empty for the default pattern, a 1-based index, or a
            literal pattern string

    Returns:
        Pattern string

    Raises:
        PatternIndexOutOfRange: If a numeric choice is outside [1, len(patterns)]
        RulesetError: If the default pattern is requested but none exist
    """
    if not rulesets:
        raise RulesetError("no ruleset supplied")
    patterns = rulesets[0].patterns

    if not choice:
        if not patterns:
            raise RulesetError(f"{rulesets[0].source_name}: no patterns defined")
        return patterns[0]

    if choice.isascii() and choice.isdigit():
        index = int(choice)
        if not 1 <= index <= len(patterns):
            raise PatternIndexOutOfRange(index, len(patterns))
        return patterns[index - 1]

    return choice
