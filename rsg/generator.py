from __future__ import annotations

import logging
import random
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from .errors import InvalidCountError
from .expander import DEFAULT_MAX_DEPTH, expand
from .grammar import Grammar

logger = logging.getLogger(__name__)

DEFAULT_START = "<start>"
DEFAULT_COUNT = 3


def generate(
    start_name: str,
    grammar: Grammar,
    count: int = DEFAULT_COUNT,
    rng: Optional[random.Random] = None,
    *,
    max_depth: Optional[int] = DEFAULT_MAX_DEPTH,
) -> List[List[str]]:
    """
    Produce ``count`` independent sentences from ``start_name``.

    Every sentence draws its own alternative of the start definition, so
    the results are separate random expansions rather than one replayed.
    """
    if isinstance(count, bool) or not isinstance(count, int) or count < 1:
        raise InvalidCountError(count)
    if rng is None:
        rng = random.Random()

    definition = grammar.lookup(start_name)
    sentences: List[List[str]] = []
    for version in range(1, count + 1):
        production = definition.random_production(rng)
        logger.debug("Version %d starts from %s -> %s", version, start_name, production)
        sentences.append(expand(production, grammar, rng, max_depth=max_depth))
    return sentences


def iter_versions(sentences: Iterable[Sequence[str]]) -> Iterator[Tuple[int, Sequence[str]]]:
    return enumerate(sentences, start=1)
