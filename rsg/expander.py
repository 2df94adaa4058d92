from __future__ import annotations

import logging
import random
import sys
from typing import List, Optional

from .errors import RecursionLimitExceeded, UndefinedNonterminalError
from .grammar import Grammar, Production, is_terminal

logger = logging.getLogger(__name__)

# Each nested nonterminal costs one Python frame; stay well under the
# interpreter's default recursion limit of 1000.
DEFAULT_MAX_DEPTH = 500


def expand(
    production: Production,
    grammar: Grammar,
    rng: random.Random,
    *,
    max_depth: Optional[int] = DEFAULT_MAX_DEPTH,
) -> List[str]:
    """
    Expand ``production`` into a flat list of terminal tokens.

    Every nonterminal is replaced by a uniformly chosen alternative of its
    definition, expanded the same way. ``rng`` is the only source of
    randomness, so a seeded generator gives repeatable output. Nesting deeper
    than ``max_depth`` raises RecursionLimitExceeded; ``None`` turns the
    guard off. Running out of interpreter stack first is reported the
    same way.
    """
    text: List[str] = []
    try:
        _expand_into(production, grammar, rng, text, 0, max_depth)
    except RecursionLimitExceeded:
        raise
    except RecursionError:
        start = next((token for token in production if not is_terminal(token)), str(production))
        raise RecursionLimitExceeded(start, sys.getrecursionlimit()) from None
    return text


def _expand_into(
    production: Production,
    grammar: Grammar,
    rng: random.Random,
    text: List[str],
    depth: int,
    max_depth: Optional[int],
) -> None:
    for token in production:
        if is_terminal(token):
            text.append(token)
            continue

        definition = grammar.find(token)
        if definition is None:
            raise UndefinedNonterminalError(token)
        if max_depth is not None and depth >= max_depth:
            raise RecursionLimitExceeded(token, max_depth)

        chosen = definition.random_production(rng)
        logger.debug("%s%s -> %s", "  " * depth, token, chosen)
        _expand_into(chosen, grammar, rng, text, depth + 1, max_depth)
