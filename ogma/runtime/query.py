"""Structured query items and the natural-language query decoder.

A query phrase names a location in the variable store, read innermost
first::

    the sum                      -> [key("sum")]
    the name of the user         -> [key("user"), key("name")]
    the 2nd of the scores        -> [key("scores"), index(1)]
"""

from __future__ import annotations

from dataclasses import dataclass
import re

from ..constants import ORDINAL_SUFFIXES, QUERY_ARTICLE, QUERY_JOINER
from .tokenizer import WORD, next_word

KEY = "key"
INDEX = "index"

ORDINAL_PATTERN = re.compile(r"^(?P<n>[1-9][0-9]*)(?:st|nd|rd|th)$")


@dataclass(frozen=True)
class Query:
    """One step of a query path: a mapping key or a zero-based index."""

    kind: str
    value: str | int

    @classmethod
    def key(cls, name: str) -> "Query":
        return cls(KEY, name)

    @classmethod
    def index(cls, position: int) -> "Query":
        return cls(INDEX, position)

    def as_key(self) -> str | None:
        return self.value if self.kind == KEY else None

    def as_index(self) -> int | None:
        return self.value if self.kind == INDEX else None

    def __str__(self) -> str:
        if self.kind == INDEX:
            return ordinal(self.value + 1)
        return str(self.value)


def ordinal(n: int) -> str:
    """Render ``n`` as an English ordinal (``1st``, ``12th``, ``22nd``)."""

    text = str(n)
    if 10 <= n % 100 <= 20:
        return f"{text}th"
    return text + ORDINAL_SUFFIXES.get(text[-1], "th")


def _segment(text: str) -> tuple[Query, str] | None:
    article = next_word(text)
    if article is None:
        return None
    word, rest = article
    if word.kind != WORD or word.text != QUERY_ARTICLE:
        return None
    target = next_word(rest)
    if target is None or target[0].kind != WORD:
        return None
    word, rest = target
    match = ORDINAL_PATTERN.match(word.text)
    if match:
        return Query.index(int(match.group("n")) - 1), rest
    return Query.key(word.text), rest


def decode_query(text: str) -> tuple[list[Query], str]:
    """Decode a query phrase from the front of ``text``.

    Returns the items (outermost first) and the unconsumed text. When
    ``text`` does not start with a query, the list is empty and ``text`` is
    returned unchanged.
    """

    first = _segment(text)
    if first is None:
        return [], text

    item, rest = first
    items = [item]
    while True:
        joiner = next_word(rest)
        if joiner is None:
            break
        word, after = joiner
        if word.kind != WORD or word.text != QUERY_JOINER:
            break
        segment = _segment(after)
        if segment is None:
            break
        item, rest = segment
        items.append(item)

    items.reverse()
    return items, rest


def describe_query(queries) -> str:
    """Render query items back into phrase form."""

    return f" {QUERY_JOINER} ".join(
        f"{QUERY_ARTICLE} {item}" for item in reversed(list(queries))
    )


__all__ = [
    "INDEX",
    "KEY",
    "Query",
    "decode_query",
    "describe_query",
    "ordinal",
]
