"""
Grammar model and reader for the random sentence generator.

Grammar file format (UTF-8, line oriented). Each definition is a block:

    {
    <nonterminal>
    K
    first production tokens
    ...                      (exactly K lines, tokens split on whitespace)
    }

Anything outside a block is ignored, so free text and comments may sit
between definitions. A token naming another definition starts with '<';
every other token is a terminal and is copied to the output verbatim.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional, Set, TextIO, Tuple

from .errors import GrammarFormatError, UndefinedNonterminalError

logger = logging.getLogger(__name__)

NONTERMINAL_PREFIX = "<"
OPEN_BLOCK = "{"
CLOSE_BLOCK = "}"


def is_nonterminal(token: str) -> bool:
    return token.startswith(NONTERMINAL_PREFIX)


def is_terminal(token: str) -> bool:
    return not is_nonterminal(token)


@dataclass(frozen=True)
class Production:
    tokens: Tuple[str, ...] = ()

    @classmethod
    def from_line(cls, line: str) -> "Production":
        return cls(tuple(line.split()))

    def __iter__(self) -> Iterator[str]:
        return iter(self.tokens)

    def __len__(self) -> int:
        return len(self.tokens)

    def __str__(self) -> str:
        return " ".join(self.tokens)


@dataclass(frozen=True)
class Definition:
    nonterminal: str
    productions: Tuple[Production, ...]

    def __post_init__(self) -> None:
        if not self.productions:
            raise GrammarFormatError(f"Definition of {self.nonterminal} has no productions")

    def random_production(self, rng: random.Random) -> Production:
        """Pick one alternative, each with equal probability."""
        return rng.choice(self.productions)


@dataclass(frozen=True)
class Grammar:
    definitions: Mapping[str, Definition]

    def __post_init__(self) -> None:
        object.__setattr__(self, "definitions", MappingProxyType(dict(self.definitions)))

    def __len__(self) -> int:
        return len(self.definitions)

    def __contains__(self, name: object) -> bool:
        return name in self.definitions

    def __iter__(self) -> Iterator[str]:
        return iter(self.definitions)

    def find(self, name: str) -> Optional[Definition]:
        return self.definitions.get(name)

    def lookup(self, name: str) -> Definition:
        definition = self.find(name)
        if definition is None:
            raise UndefinedNonterminalError(name)
        return definition


class _LineReader:
    """Hands out lines of ``text`` starting at ``pos`` while tracking line numbers."""

    def __init__(self, text: str, pos: int, lineno: int) -> None:
        self.text = text
        self.pos = pos
        self.lineno = lineno

    def next(self, expected: str) -> str:
        if self.pos >= len(self.text):
            raise GrammarFormatError(f"unexpected end of input, expected {expected}", self.lineno)
        end = self.text.find("\n", self.pos)
        if end == -1:
            end = len(self.text)
        line = self.text[self.pos:end]
        self.pos = end + 1
        self.lineno += 1
        return line


def _parse_block(reader: _LineReader) -> Definition:
    reader.next("end of the '{' line")

    name = reader.next("a nonterminal name").strip()
    if not is_nonterminal(name) or len(name.split()) != 1:
        raise GrammarFormatError(f"expected a nonterminal name like <name>, got {name!r}", reader.lineno)

    raw_count = reader.next(f"the production count for {name}").strip()
    try:
        count = int(raw_count)
    except ValueError:
        raise GrammarFormatError(
            f"expected the production count for {name}, got {raw_count!r}", reader.lineno
        ) from None
    if count < 1:
        raise GrammarFormatError(f"{name} must declare at least one production, got {count}", reader.lineno)

    productions = []
    for index in range(count):
        line = reader.next(f"production {index + 1} of {count} for {name}")
        if line.strip() == CLOSE_BLOCK:
            raise GrammarFormatError(
                f"{name} declares {count} productions but only {index} were given", reader.lineno
            )
        productions.append(Production.from_line(line))

    while True:
        line = reader.next(f"'{CLOSE_BLOCK}' closing {name}").strip()
        if not line:
            continue
        if line == CLOSE_BLOCK:
            break
        raise GrammarFormatError(
            f"expected '{CLOSE_BLOCK}' closing {name} after {count} productions, found {line!r}",
            reader.lineno,
        )

    return Definition(name, tuple(productions))


def parse_grammar(stream: TextIO, *, strict: bool = False) -> Grammar:
    """
    Read every definition block from ``stream``.

    A nonterminal defined twice keeps its last definition; with ``strict``
    the second definition is rejected instead.
    """
    text = stream.read()
    definitions: Dict[str, Definition] = {}
    pos = 0

    while True:
        brace = text.find(OPEN_BLOCK, pos)
        if brace == -1:
            break
        start_line = text.count("\n", 0, brace) + 1
        reader = _LineReader(text, brace + 1, start_line - 1)
        definition = _parse_block(reader)
        pos = reader.pos

        name = definition.nonterminal
        if name in definitions:
            if strict:
                raise GrammarFormatError(f"{name} is defined more than once", start_line)
            logger.warning("%s redefined at line %d; the earlier definition is discarded", name, start_line)
        definitions[name] = definition
        logger.debug("Parsed %s with %d productions", name, len(definition.productions))

    return Grammar(definitions)


def load_grammar(path: str, *, strict: bool = False) -> Grammar:
    with open(path, encoding="utf-8") as handler:
        try:
            return parse_grammar(handler, strict=strict)
        except UnicodeDecodeError as exc:
            raise GrammarFormatError(
                f"{path} is not valid UTF-8: cannot decode byte {exc.object[exc.start]:#04x} at position {exc.start}"
            ) from exc


def undefined_references(grammar: Grammar) -> Set[str]:
    referenced = {
        token
        for definition in grammar.definitions.values()
        for production in definition.productions
        for token in production
        if is_nonterminal(token)
    }
    return {name for name in referenced if name not in grammar}
