"""Match a single line of text against a compiled clause."""

from __future__ import annotations

from typing import Any, Mapping

from .clause import DataVar, QueryVar, Static
from .data import DataDecodeError, decode_data
from .errors import (
    DataDecodeFailure,
    EmptyQuery,
    ExpectedEof,
    MismatchedStaticToken,
    UnexpectedEof,
    UnfilledVar,
    UnknownDataVar,
    UnknownQueryVar,
)
from .query import Query, decode_query
from .tokenizer import next_word


class Matcher:
    """Reads static words, queries and data values off the front of a line."""

    def __init__(self, src: str):
        self.src = src

    def next_static(self) -> str:
        item = next_word(self.src)
        if item is None:
            raise UnexpectedEof()
        word, self.src = item
        return word.raw

    def next_query(self) -> list[Query]:
        items, rest = decode_query(self.src)
        if not items:
            raise EmptyQuery(self.src.strip() or None)
        self.src = rest
        return items

    def next_data(self, shape=Any):
        try:
            value, rest = decode_data(self.src, shape)
        except DataDecodeError as exc:
            raise DataDecodeFailure(str(exc)) from exc
        self.src = rest
        return value

    def is_empty(self) -> bool:
        return not self.src.strip()


def match_clause(
    clause,
    line: str,
    query_fields,
    data_fields: Mapping[str, Any],
    matcher: Matcher | None = None,
) -> dict[str, Any]:
    """Walk ``clause`` over ``line`` and return the filled fields.

    ``query_fields`` is the collection of names that receive query values;
    ``data_fields`` maps each data name to the shape it is decoded as. Pass a
    ``matcher`` to continue from text something else already consumed.
    """

    m = matcher if matcher is not None else Matcher(line)
    values: dict[str, Any] = {}

    for token in clause:
        if isinstance(token, Static):
            found = m.next_static()
            if found != token.word:
                raise MismatchedStaticToken(f"expected {token.word!r}, found {found!r}")
        elif isinstance(token, QueryVar):
            if token.name not in query_fields:
                raise UnknownQueryVar(token.name)
            values[token.name] = m.next_query()
        elif isinstance(token, DataVar):
            if token.name not in data_fields:
                raise UnknownDataVar(token.name)
            values[token.name] = m.next_data(data_fields[token.name])

    if not m.is_empty():
        raise ExpectedEof(m.src.strip())

    for name in list(query_fields) + list(data_fields):
        if name not in values:
            raise UnfilledVar(name)
    return values


__all__ = ["Matcher", "match_clause"]
