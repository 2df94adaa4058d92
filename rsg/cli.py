"""
Random sentence generator.

Reads a grammar file made of {...} definition blocks and prints a few random
expansions of the start nonterminal.

Usage:
    python -m rsg grammars/excuse.g
    python -m rsg grammars/poem.g --start "<start>" --count 5 --seed 42
    python -m rsg --help
"""

from __future__ import annotations

import argparse
import logging
import random
import sys
from typing import Optional, Sequence

from .errors import RSGError
from .expander import DEFAULT_MAX_DEPTH
from .generator import DEFAULT_COUNT, DEFAULT_START, generate, iter_versions
from .grammar import load_grammar, undefined_references

logger = logging.getLogger(__name__)

VERSION_RULE = "-" * 27


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="rsg", description="Generate random sentences from a grammar file.")
    p.add_argument("grammar", help="Path to the grammar text file (UTF-8).")
    p.add_argument("-s", "--start", default=DEFAULT_START, help=f"Nonterminal to expand (default {DEFAULT_START}).")
    p.add_argument("-n", "--count", type=positive_int, default=DEFAULT_COUNT, help="Number of versions to print.")
    p.add_argument("--seed", type=int, default=None, help="Seed for repeatable output.")
    p.add_argument(
        "--max-depth",
        type=positive_int,
        default=DEFAULT_MAX_DEPTH,
        help="Give up on an expansion nested deeper than this.",
    )
    p.add_argument("--strict", action="store_true", help="Reject grammars that define a nonterminal twice.")
    p.add_argument("-v", "--verbose", action="store_true", help="Log parsing and expansion steps.")
    return p


def render_version(index: int, tokens: Sequence[str]) -> str:
    return f"Version #{index}: {VERSION_RULE}\n{' '.join(tokens)}\n"


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        grammar = load_grammar(args.grammar, strict=args.strict)
    except OSError:
        print(f'Failed to open the file named "{args.grammar}". Check to ensure the file exists.', file=sys.stderr)
        return 2
    except RSGError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(f'The grammar file called "{args.grammar}" contains {len(grammar)} definitions.')
    missing = undefined_references(grammar)
    if missing:
        logger.warning("Referenced but never defined: %s", ", ".join(sorted(missing)))

    rng = random.Random(args.seed)
    try:
        sentences = generate(args.start, grammar, args.count, rng, max_depth=args.max_depth)
    except RSGError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    for index, tokens in iter_versions(sentences):
        print(render_version(index, tokens))
    return 0


if __name__ == "__main__":
    sys.exit(main())
