#!/usr/bin/env python3
"""
longpass CLI - Diceware-style passphrase generator driven by rulesets.
"""

import argparse
import logging
import sys
from typing import List, Optional, Sequence

from longpass import __version__
from longpass.config import Config, GenerationOptions
from longpass.core.entropy import SystemRandomSource
from longpass.core.errors import (
    ConfigError,
    EntropySourceError,
    PatternIndexOutOfRange,
    RulesetError,
)
from longpass.core.generator import (
    calculate_passphrase_entropy,
    calculate_password_entropy,
    generate_batch,
)
from longpass.core.log import get_logger, setup_logging
from longpass.core.pattern import cursor_trace
from longpass.core.ruleset import Ruleset, load_rulesets, select_pattern

logger = get_logger('cli')

# Lengths shown in the random ASCII password comparison table
ASCII_COMPARISON_LENGTHS = (8, 10, 12, 14, 16, 18)

EPILOG = """
The default pattern in the supplied rulesets has at least 80 bits of
entropy. I recommend that you use one of the stronger patterns, and
remember half of it and write the other half on a card in your wallet.

If multiple rulesets are supplied, it will select the pattern from the
first one and then select elements from each ruleset in turn. The
effective entropy is higher than the estimate, especially if you use
the shuffle option.
"""


def create_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        prog="longpass",
        description="Generate diceware-style passphrases from word-list rulesets",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=EPILOG,
    )
    parser.add_argument("rulesets", nargs="*", metavar="ruleset",
                        help="Ruleset file (TOML or JSON)")

    gen_group = parser.add_argument_group('Generation')
    gen_group.add_argument("-c", "--count", type=int, metavar="COUNT",
                           help="generate COUNT passphrases (default: 10)")
    gen_group.add_argument("-e", "--entropy", action="store_true", default=None,
                           help="calculate the entropy for the current pattern")
    gen_group.add_argument("-l", "--list", action="store_true",
                           help="list the available patterns in the rulesets")
    gen_group.add_argument("-p", "--pattern", default="", metavar="PATTERN",
                           help="select a pattern by number, or supply your own")
    gen_group.add_argument("-s", "--shuffle", action="store_true", default=None,
                           help="randomly reorder the output words")
    gen_group.add_argument("-j", "--jobs", type=int, metavar="N",
                           help="generate with N worker threads (default: 1)")

    other_group = parser.add_argument_group('Other')
    other_group.add_argument("--config", metavar="FILE",
                             help="JSON config file (default: ~/.longpass/config.json)")
    other_group.add_argument("--no-cache", action="store_true",
                             help="do not read or write the ruleset cache")
    other_group.add_argument("-v", "--verbose", action="store_true",
                             help="log progress to stderr")
    other_group.add_argument("--log-file", metavar="FILE",
                             help="also write log records to FILE")
    other_group.add_argument("--version", action="version",
                             version=f"%(prog)s {__version__}")
    return parser


def build_options(args: argparse.Namespace, config: Config) -> GenerationOptions:
    """
    Merge CLI arguments over persistent config values.

    Raises:
        ConfigError: If count or workers is not a usable integer
    """
    def pick(arg_value, section, key):
        return arg_value if arg_value is not None else config.get(section, key)

    return GenerationOptions(
        count=pick(args.count, "generator", "count"),
        show_entropy=bool(pick(args.entropy, "generator", "entropy")),
        list_only=args.list,
        pattern=args.pattern or "",
        shuffle=bool(pick(args.shuffle, "generator", "shuffle")),
        workers=pick(args.jobs, "generator", "workers"),
    )


def format_ruleset_info(ruleset: Ruleset, shuffle: bool = False) -> List[str]:
    """Describe a ruleset: label, array sizes and numbered patterns."""
    lines = [f"Ruleset: {ruleset.source_name}", "Array Sizes:"]
    for key, size in ruleset.array_sizes():
        lines.append(f"   {key} {size}")
    lines.append("Patterns:")
    for i, pattern in enumerate(ruleset.patterns, 1):
        bits = calculate_passphrase_entropy(pattern, [ruleset], shuffle=shuffle)
        lines.append(f"  {i:2d} ({bits:6.2f}): {pattern}")
    return lines


def format_ascii_comparison() -> List[str]:
    """Entropy of random printable ASCII passwords, for comparison."""
    per_char = calculate_password_entropy(1)
    table = "".join(
        f"  {length:2d}={calculate_password_entropy(length):.2f}"
        for length in ASCII_COMPARISON_LENGTHS
    )
    return [f"Random printable ASCII passwords ({per_char:.2f} bits/char):", table]


def format_passphrase(words: Sequence[str], entropy: Optional[float] = None) -> str:
    """One output line: words joined by spaces, optionally prefixed by bits."""
    line = ' '.join(words)
    if entropy is not None:
        return f"{entropy:7.2f}\t{line}"
    return line


def _handle_list(rulesets: Sequence[Ruleset], options: GenerationOptions) -> int:
    """Handle --list command."""
    for ruleset in rulesets:
        for line in format_ruleset_info(ruleset, shuffle=options.shuffle):
            print(line)
        print()
    for line in format_ascii_comparison():
        print(line)
    return 0


def _handle_generation(parser: argparse.ArgumentParser,
                       rulesets: Sequence[Ruleset],
                       options: GenerationOptions) -> int:
    """Handle normal passphrase generation."""
    try:
        pattern = select_pattern(rulesets, options.pattern)
    except PatternIndexOutOfRange as e:
        print(parser.format_help())
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except RulesetError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if logger.isEnabledFor(logging.DEBUG):
        trace = cursor_trace(pattern, rulesets)
        logger.debug("Pattern %r ruleset cursor per character: %s",
                     pattern, " ".join(str(i) for i in trace))

    rng = SystemRandomSource()
    try:
        entropy = calculate_passphrase_entropy(pattern, rulesets, shuffle=options.shuffle)
        phrases = generate_batch(
            pattern, rulesets, options.count, rng,
            shuffle=options.shuffle,
            workers=options.workers,
        )
    except EntropySourceError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for words in phrases:
        print(format_passphrase(words, entropy if options.show_entropy else None))
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.verbose or args.log_file:
        setup_logging(level=logging.DEBUG if args.verbose else logging.INFO,
                      log_file=args.log_file)

    try:
        config = Config(args.config)
        options = build_options(args, config)
        cache_dir = None if args.no_cache else config.cache_dir
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not args.rulesets:
        print(parser.format_help())
        print("Error: no ruleset supplied on command line", file=sys.stderr)
        return 1

    try:
        result = load_rulesets(args.rulesets, cache_dir=cache_dir)
        if not result.ok:
            print(f"Error: {result.error}", file=sys.stderr)
            return 1

        if options.list_only:
            return _handle_list(result.rulesets, options)

        return _handle_generation(parser, result.rulesets, options)

    except KeyboardInterrupt:
        print("\n\nUser interrupt", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
