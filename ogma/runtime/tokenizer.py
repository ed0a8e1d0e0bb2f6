"""Whitespace and quote aware word tokenizer."""

from __future__ import annotations

from dataclasses import dataclass

from ..constants import PUNCTUATION, VARIABLE_MARKER

WORD = "word"
QUOTED = "quoted"
PUNCT = "punct"


@dataclass(frozen=True)
class Word:
    """A single word pulled from the front of some text."""

    kind: str
    raw: str
    text: str

    @property
    def is_quoted(self) -> bool:
        return self.kind == QUOTED

    @property
    def is_punct(self) -> bool:
        return self.kind == PUNCT


def _scan_word(text: str) -> int:
    """Return the end index of the bare word starting at ``text[0]``."""

    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch.isspace() or ch in PUNCTUATION:
            break
        if ch == VARIABLE_MARKER:
            close = text.find(VARIABLE_MARKER, i + 1)
            if close == -1:
                return n
            i = close + 1
            continue
        i += 1
    return i


def next_word(text: str) -> tuple[Word, str] | None:
    """Split the next word off ``text``.

    Returns ``(word, rest)`` or ``None`` when only whitespace remains.
    Quoted words keep their whitespace; an unterminated quote runs to the
    end of the text and is reported as a plain word.
    """

    stripped = text.lstrip()
    if not stripped:
        return None

    first = stripped[0]
    if first in PUNCTUATION:
        return Word(PUNCT, first, first), stripped[1:]

    if first == VARIABLE_MARKER:
        close = stripped.find(VARIABLE_MARKER, 1)
        if close == -1:
            return Word(WORD, stripped, stripped), ""
        raw = stripped[: close + 1]
        return Word(QUOTED, raw, raw[1:-1]), stripped[close + 1 :]

    end = _scan_word(stripped)
    raw = stripped[:end]
    return Word(WORD, raw, raw), stripped[end:]


def leading_space(text: str) -> int:
    return len(text) - len(text.lstrip())


def tokenize(text: str) -> list[Word]:
    words: list[Word] = []
    rest = text
    while True:
        item = next_word(rest)
        if item is None:
            return words
        word, rest = item
        words.append(word)


__all__ = [
    "PUNCT",
    "QUOTED",
    "WORD",
    "Word",
    "leading_space",
    "next_word",
    "tokenize",
]
