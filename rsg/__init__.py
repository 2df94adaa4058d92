from .errors import (
    GrammarFormatError,
    InvalidCountError,
    RecursionLimitExceeded,
    RSGError,
    UndefinedNonterminalError,
)
from .expander import DEFAULT_MAX_DEPTH, expand
from .generator import DEFAULT_COUNT, DEFAULT_START, generate, iter_versions
from .grammar import (
    Definition,
    Grammar,
    Production,
    is_nonterminal,
    is_terminal,
    load_grammar,
    parse_grammar,
    undefined_references,
)

__all__ = [
    "DEFAULT_COUNT",
    "DEFAULT_MAX_DEPTH",
    "DEFAULT_START",
    "Definition",
    "Grammar",
    "GrammarFormatError",
    "InvalidCountError",
    "Production",
    "RSGError",
    "RecursionLimitExceeded",
    "UndefinedNonterminalError",
    "expand",
    "generate",
    "is_nonterminal",
    "is_terminal",
    "iter_versions",
    "load_grammar",
    "parse_grammar",
    "undefined_references",
]
