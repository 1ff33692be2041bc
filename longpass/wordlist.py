#!/usr/bin/env python3
"""
longpass Wordlist - Build rulesets and diceware lists from plain word lists.

Default output is a TOML ruleset for longpass; use "-d DICE" to print an
actual diceware list instead (6**DICE unique words chosen at random, each
paired with its dice roll).
"""

import argparse
import itertools
import json
import sys
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

from longpass.core.entropy import SecureRandomSource, SystemRandomSource
from longpass.core.log import get_logger

logger = get_logger('wordlist')

DEFAULT_PATTERNS = (
    "a a a a a a vsd",
    "a a a a a a a a vsd",
    "a a a a a a a vsd",
    "a a a a a vsd",
    "a a a a vsd",
    "a a a a a a a a",
    "a a a a a a a",
    "a a a a a a",
    "a a a a a",
    "a a a a",
)

# Fixed arrays emitted alongside the word array 'a'
DIGITS = tuple("0123456789")
SYMBOLS = ("+", "-", "*", "/")
CAPITALS = ("A", "B", "C", "K", "N", "Q", "T", "X", "Y", "Z")

DIE_FACES = "123456"


def load_words(path) -> List[str]:
    """Read one word per line, skipping blank lines and '#' comments."""
    words = []
    with open(path, 'r', encoding='utf-8') as f:
        for line in f:
            word = line.strip()
            if word and not word.startswith('#'):
                words.append(word)
    return words


def filter_words(words: Iterable[str], min_length: int = 3, max_length: int = 7) -> List[str]:
    """Keep single-token words within the length bounds, deduplicated and sorted."""
    kept = {
        w for w in words
        if min_length <= len(w) <= max_length and not any(c.isspace() for c in w)
    }
    return sorted(kept)


def dice_rolls(dice: int) -> List[str]:
    """All rolls of `dice` six-sided dice, sorted ('11111' .. '66666')."""
    return [''.join(r) for r in itertools.product(DIE_FACES, repeat=dice)]


def make_diceware(words: Sequence[str], dice: int,
                  rng: SecureRandomSource) -> List[Tuple[str, str]]:
    """
    Select 6**dice unique words at random and pair them with dice rolls.

    Args:
        words: Candidate words (duplicates are removed)
        dice: Number of dice per roll
        rng: Secure random source

    Returns:
        (roll, word) pairs in roll order; words are sorted

    Raises:
        ValueError: If there are fewer unique words than rolls
    """
    if dice < 1:
        raise ValueError(f"dice must be >= 1, got {dice}")
    unique = sorted(set(words))
    needed = 6 ** dice
    if len(unique) < needed:
        raise ValueError(
            f"Not enough words: {len(unique)} unique, {needed} needed for {dice} dice"
        )
    chosen = sorted(rng.shuffle(unique)[:needed])
    return list(zip(dice_rolls(dice), chosen))


def _toml_array(name: str, values: Sequence[str], per_line: int = 1) -> List[str]:
    """Render a TOML array; json.dumps gives valid TOML basic strings."""
    lines = [f"{name} = ["]
    for i in range(0, len(values), per_line):
        chunk = values[i:i + per_line]
        lines.append("\t" + " ".join(f"{json.dumps(v, ensure_ascii=False)}," for v in chunk))
    lines.append("]")
    return lines


def render_ruleset(words: Sequence[str], patterns: Sequence[str] = DEFAULT_PATTERNS) -> str:
    """
    Render a TOML ruleset with the default arrays.

    Arrays: 'a' words, 'd' digits, 's' symbols, 'v' capitals.
    """
    if not words:
        raise ValueError("Cannot build a ruleset without words")
    lines: List[str] = []
    lines += _toml_array("patterns", list(patterns))
    lines.append("")
    lines += _toml_array("d", DIGITS, per_line=10)
    lines.append("")
    lines += _toml_array("s", SYMBOLS, per_line=4)
    lines.append("")
    lines += _toml_array("v", CAPITALS, per_line=10)
    lines.append("")
    lines += _toml_array("a", list(words))
    return "\n".join(lines) + "\n"


def create_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        prog="longpass-mkruleset",
        description="Build a longpass ruleset (or a diceware list) from a word list",
    )
    parser.add_argument("wordfile", help="Plain text file, one word per line")
    parser.add_argument("-d", "--dice", type=int, metavar="DICE",
                        help="print a DICE-dice diceware list instead of a ruleset")
    parser.add_argument("--min-length", type=int, default=3,
                        help="Minimum word length (default: 3)")
    parser.add_argument("--max-length", type=int, default=7,
                        help="Maximum word length (default: 7)")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    path = Path(args.wordfile)
    try:
        words = filter_words(load_words(path), args.min_length, args.max_length)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: '{path}': {e}", file=sys.stderr)
        return 1
    logger.info("%d words kept from %s", len(words), path)

    try:
        if args.dice:
            for roll, word in make_diceware(words, args.dice, SystemRandomSource()):
                print(f"{roll}\t{word}")
        else:
            sys.stdout.write(render_ruleset(words))
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
