# -*- coding: utf-8 -*-
"""
longpass Generator - Passphrase generation and entropy calculation.
"""

import string
from concurrent.futures import ThreadPoolExecutor
from typing import List, Sequence

import numpy as np

from longpass.core.entropy import SecureRandomSource
from longpass.core.log import get_logger
from longpass.core.pattern import Placeholder, ResolvedStep, resolve
from longpass.core.ruleset import Ruleset

logger = get_logger('generator')

# Alphabet of the random ASCII passwords longpass compares itself with
PRINTABLE_ASCII = string.ascii_letters + string.digits + string.punctuation + " "

# Space literals in a pattern mark word boundaries
WORD_SEPARATOR = " "


def generate_words(
    resolved: Sequence[ResolvedStep],
    rulesets: Sequence[Ruleset],
    rng: SecureRandomSource,
    shuffle: bool = False
) -> List[str]:
    """
    Materialize one passphrase from a resolved pattern.

    Placeholders append a uniformly chosen word, literals append themselves;
    no separator is inserted automatically. The result is split into words
    on whitespace.

    Args:
        resolved: Steps produced by resolve()
        rulesets: The rulesets the steps were resolved against
        rng: Secure random source
        shuffle: Randomly reorder the words afterwards

    Returns:
        Passphrase as a list of words
    """
    parts: List[str] = []
    for step in resolved:
        if isinstance(step, Placeholder):
            words = rulesets[step.ruleset_index].arrays[step.key]
            parts.append(words[rng.uniform_index(len(words))])
        else:
            parts.append(step.char)

    # Runs of separators do not produce empty words
    phrase = ''.join(parts).split()

    if shuffle:
        phrase = rng.shuffle(phrase)

    return phrase


def generate_passphrase(
    pattern: str,
    rulesets: Sequence[Ruleset],
    rng: SecureRandomSource,
    shuffle: bool = False
) -> List[str]:
    """
    Resolve a pattern and generate one passphrase from it.

    Raises:
        NoRulesetError: If rulesets is empty
    """
    return generate_words(resolve(pattern, rulesets), rulesets, rng, shuffle=shuffle)


def generate_batch(
    pattern: str,
    rulesets: Sequence[Ruleset],
    count: int,
    rng: SecureRandomSource,
    shuffle: bool = False,
    workers: int = 1
) -> List[List[str]]:
    """
    Generate several independent passphrases from the same pattern.

    The pattern is resolved once. With workers > 1 generation runs in a
    thread pool sharing rng, which must be safe for concurrent use
    (SystemRandomSource is). Results keep submission order.

    Args:
        pattern: Pattern string
        rulesets: Ordered rulesets
        count: Number of passphrases
        rng: Secure random source
        shuffle: Randomly reorder the words of each passphrase
        workers: Thread pool size

    Returns:
        List of passphrases (each a list of words)
    """
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")

    resolved = resolve(pattern, rulesets)

    if workers <= 1 or count <= 1:
        return [generate_words(resolved, rulesets, rng, shuffle=shuffle) for _ in range(count)]

    logger.debug("Generating %d passphrases with %d workers", count, workers)
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [
            executor.submit(generate_words, resolved, rulesets, rng, shuffle)
            for _ in range(count)
        ]
        return [f.result() for f in futures]


def calculate_passphrase_entropy(
    pattern: str,
    rulesets: Sequence[Ruleset],
    shuffle: bool = False
) -> float:
    """
    Calculate the entropy of a pattern over a set of rulesets.

    Every placeholder contributes log2 of its array size. With shuffle,
    patterns made of more than one distinct word slot gain
    log2(spaces + 1) bits. That bonus is deliberately kept at the value
    longpass has always reported rather than log2(k!).

    Args:
        pattern: Pattern string
        rulesets: Ordered rulesets
        shuffle: Whether output words will be reordered

    Returns:
        Entropy in bits

    Raises:
        NoRulesetError: If rulesets is empty
    """
    entropy = 0.0
    for step in resolve(pattern, rulesets):
        if isinstance(step, Placeholder):
            entropy += np.log2(len(rulesets[step.ruleset_index].arrays[step.key]))

    if shuffle and len(set(pattern.split())) > 1:
        entropy += np.log2(pattern.count(WORD_SEPARATOR) + 1)

    return float(entropy)


def calculate_password_entropy(length: int) -> float:
    """Entropy in bits of a random printable ASCII password (95 symbols)."""
    return float(length * np.log2(len(PRINTABLE_ASCII)))
