"""Clause templates: literal words mixed with ``q`name``` and ``d`name``` placeholders."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from ..constants import DATA_PREFIX, QUERY_PREFIX, VARIABLE_MARKER
from .errors import InvalidVariableName, InvalidVariablePrefix
from .tokenizer import leading_space, next_word


class Token:
    """Base class of the three clause token kinds."""

    def is_static(self) -> bool:
        return isinstance(self, Static)

    def is_query_var(self) -> bool:
        return isinstance(self, QueryVar)

    def is_data_var(self) -> bool:
        return isinstance(self, DataVar)


@dataclass(frozen=True)
class Static(Token):
    word: str

    def __str__(self) -> str:
        return self.word


@dataclass(frozen=True)
class QueryVar(Token):
    name: str

    def __str__(self) -> str:
        return f"{QUERY_PREFIX}{VARIABLE_MARKER}{self.name}{VARIABLE_MARKER}"


@dataclass(frozen=True)
class DataVar(Token):
    name: str

    def __str__(self) -> str:
        return f"{DATA_PREFIX}{VARIABLE_MARKER}{self.name}{VARIABLE_MARKER}"


ClauseSpec = tuple  # tuple[Token, ...]


def _classify(raw: str, offset: int) -> Token:
    if VARIABLE_MARKER not in raw:
        return Static(raw)
    if not raw.endswith(VARIABLE_MARKER):
        raise InvalidVariableName(raw, offset)
    prefix, _, remainder = raw.partition(VARIABLE_MARKER)
    name = remainder[:-1]
    if prefix == QUERY_PREFIX:
        kind = QueryVar
    elif prefix == DATA_PREFIX:
        kind = DataVar
    else:
        raise InvalidVariablePrefix(raw, offset)
    if not name:
        raise InvalidVariableName(raw, offset)
    return kind(name)


def parse_clause(template: str) -> Iterator[Token]:
    """Yield the tokens of ``template`` in order.

    The generator makes a single pass; the first malformed placeholder raises
    and ends it.
    """

    rest = template
    while True:
        offset = len(template) - len(rest) + leading_space(rest)
        item = next_word(rest)
        if item is None:
            return
        word, rest = item
        yield _classify(word.raw, offset)


def compile_clause(template: str) -> ClauseSpec:
    return tuple(parse_clause(template))


def variable_names(clause) -> list[str]:
    return [tok.name for tok in clause if not tok.is_static()]


def query_names(clause) -> list[str]:
    return [tok.name for tok in clause if tok.is_query_var()]


def data_names(clause) -> list[str]:
    return [tok.name for tok in clause if tok.is_data_var()]


def describe_clause(clause) -> str:
    """Render a compiled clause back into template text."""

    return " ".join(str(tok) for tok in clause)


__all__ = [
    "ClauseSpec",
    "DataVar",
    "QueryVar",
    "Static",
    "Token",
    "compile_clause",
    "data_names",
    "describe_clause",
    "parse_clause",
    "query_names",
    "variable_names",
]
