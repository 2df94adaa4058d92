from __future__ import annotations

from typing import Optional


class RSGError(Exception):
    """Base class for every failure raised by the generator core."""


class GrammarFormatError(RSGError, ValueError):
    def __init__(self, message: str, line: Optional[int] = None) -> None:
        self.message = message
        self.line = line
        super().__init__(message)

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        return f"line {self.line}: {self.message}"


class UndefinedNonterminalError(RSGError, KeyError):
    def __init__(self, nonterminal: str) -> None:
        self.nonterminal = nonterminal
        super().__init__(nonterminal)

    def __str__(self) -> str:
        return f"No definition for nonterminal {self.nonterminal}"


class RecursionLimitExceeded(RSGError, RecursionError):
    def __init__(self, nonterminal: str, limit: int) -> None:
        self.nonterminal = nonterminal
        self.limit = limit
        super().__init__(nonterminal, limit)

    def __str__(self) -> str:
        return (
            f"Expansion of {self.nonterminal} exceeded the maximum depth of {self.limit}; "
            "the grammar may be cyclic"
        )


class InvalidCountError(RSGError, ValueError):
    def __init__(self, count: object) -> None:
        self.count = count
        super().__init__(f"count must be a positive integer, got {count!r}")
