"""Natural-language structured data decoder.

Decodes exactly one value of a requested shape from the front of a string:

========================  ==========================================
shape                     accepted text
========================  ==========================================
``int``                   ``3``, ``-4``
``float``                 ``2.5``, ``-1e3``, ``7``
``bool``                  ``true``, ``false``
``str``                   ```hello world``` (back-tick quoted)
``list[T]``               ``the empty list``,
                          ``the list containing 1, 2, and 3``
``Optional[T]``           ``nothing`` or a ``T``
``Any`` / unannotated     the first of the above that decodes
========================  ==========================================
"""

from __future__ import annotations

import math
import re
import types
import typing
from typing import Any

from ..constants import (
    DATA_EMPTY_LIST,
    DATA_FALSE,
    DATA_LIST_HEAD,
    DATA_LIST_LAST,
    DATA_NOTHING,
    DATA_TRUE,
)
from .tokenizer import PUNCT, QUOTED, WORD, next_word

INT_PATTERN = re.compile(r"^[+-]?[0-9]+$")
FLOAT_PATTERN = re.compile(r"^[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?$")

_UNION_TYPES = (typing.Union, getattr(types, "UnionType", typing.Union))


class DataDecodeError(ValueError):
    """The text does not start with a value of the requested shape."""

    def __init__(self, shape, message: str):
        self.shape = shape
        super().__init__(f"{shape_name(shape)}: {message}")


def shape_name(shape) -> str:
    if shape is Any:
        return "any"
    if typing.get_origin(shape) is not None:
        return repr(shape).replace("typing.", "")
    return getattr(shape, "__name__", repr(shape))


def _word(text: str, shape):
    item = next_word(text)
    if item is None:
        raise DataDecodeError(shape, "unexpected end of input")
    return item


def _expect_words(text: str, expected) -> str | None:
    rest = text
    for token in expected:
        item = next_word(rest)
        if item is None or item[0].kind != WORD or item[0].text != token:
            return None
        rest = item[1]
    return rest


def _decode_int(text: str):
    word, rest = _word(text, int)
    if word.kind != WORD or not INT_PATTERN.match(word.text):
        raise DataDecodeError(int, f"expected an integer, found {word.raw!r}")
    try:
        return int(word.text), rest
    except ValueError as exc:
        raise DataDecodeError(int, f"integer out of range: {word.raw[:20]}...") from exc


def _decode_float(text: str):
    word, rest = _word(text, float)
    if word.kind != WORD or not FLOAT_PATTERN.match(word.text):
        raise DataDecodeError(float, f"expected a number, found {word.raw!r}")
    value = float(word.text)
    if math.isinf(value):
        raise DataDecodeError(float, f"number out of range: {word.raw[:20]}...")
    return value, rest


def _decode_bool(text: str):
    word, rest = _word(text, bool)
    if word.kind == WORD and word.text == DATA_TRUE:
        return True, rest
    if word.kind == WORD and word.text == DATA_FALSE:
        return False, rest
    raise DataDecodeError(bool, f"expected true or false, found {word.raw!r}")


def _decode_str(text: str):
    word, rest = _word(text, str)
    if word.kind != QUOTED:
        raise DataDecodeError(str, f"expected a quoted string, found {word.raw!r}")
    return word.text, rest


def _decode_nothing(text: str):
    word, rest = _word(text, type(None))
    if word.kind != WORD or word.text != DATA_NOTHING:
        raise DataDecodeError(type(None), f"expected {DATA_NOTHING}, found {word.raw!r}")
    return None, rest


def _decode_list(text: str, item_shape, shape):
    rest = _expect_words(text, DATA_EMPTY_LIST)
    if rest is not None:
        return [], rest

    rest = _expect_words(text, DATA_LIST_HEAD)
    if rest is None:
        raise DataDecodeError(shape, "expected a list")

    items = []
    value, rest = decode_data(rest, item_shape)
    items.append(value)
    while True:
        item = next_word(rest)
        if item is None:
            break
        word, after = item
        if word.kind == PUNCT and word.text == ",":
            follow = next_word(after)
            if follow is not None and follow[0].kind == WORD and follow[0].text == DATA_LIST_LAST:
                value, rest = decode_data(follow[1], item_shape)
                items.append(value)
                break
            value, rest = decode_data(after, item_shape)
            items.append(value)
            continue
        if word.kind == WORD and word.text == DATA_LIST_LAST:
            value, rest = decode_data(after, item_shape)
            items.append(value)
        break
    return items, rest


def _decode_any(text: str):
    decoders = (
        _decode_bool,
        _decode_int,
        _decode_float,
        _decode_str,
        _decode_nothing,
        lambda src: _decode_list(src, Any, list),
    )
    for decoder in decoders:
        try:
            return decoder(text)
        except DataDecodeError:
            continue
    word = next_word(text)
    found = word[0].raw if word else "end of input"
    raise DataDecodeError(Any, f"no value found at {found!r}")


def _decode_union(text: str, members, shape):
    if type(None) in members and _expect_words(text, (DATA_NOTHING,)) is not None:
        return _decode_nothing(text)
    for member in members:
        if member is type(None):
            continue
        try:
            return decode_data(text, member)
        except DataDecodeError:
            continue
    raise DataDecodeError(shape, "no member of the union matched")


_SCALARS = {
    bool: _decode_bool,
    int: _decode_int,
    float: _decode_float,
    str: _decode_str,
    type(None): _decode_nothing,
}


def decode_data(text: str, shape=Any):
    """Decode one value of ``shape`` from ``text``; return ``(value, rest)``."""

    if shape is Any:
        return _decode_any(text)
    decoder = _SCALARS.get(shape)
    if decoder is not None:
        return decoder(text)

    origin = typing.get_origin(shape)
    if shape is list or origin is list:
        args = typing.get_args(shape)
        return _decode_list(text, args[0] if args else Any, shape)
    if origin in _UNION_TYPES:
        return _decode_union(text, typing.get_args(shape), shape)

    raise DataDecodeError(shape, "unsupported shape")


def supports_shape(shape) -> bool:
    """Return whether :func:`decode_data` can decode values of ``shape``."""

    if shape is Any or shape in _SCALARS or shape is list:
        return True
    origin = typing.get_origin(shape)
    if origin is list:
        args = typing.get_args(shape)
        return not args or supports_shape(args[0])
    if origin in _UNION_TYPES:
        return all(supports_shape(member) for member in typing.get_args(shape))
    return False


def encode_data(value) -> str:
    """Render a value in the form :func:`decode_data` reads back."""

    if value is None:
        return DATA_NOTHING
    if isinstance(value, bool):
        return DATA_TRUE if value else DATA_FALSE
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, str):
        return f"`{value}`"
    if isinstance(value, (list, tuple)):
        if not value:
            return " ".join(DATA_EMPTY_LIST)
        parts = [encode_data(item) for item in value]
        if len(parts) == 1:
            body = parts[0]
        elif len(parts) == 2:
            body = f" {DATA_LIST_LAST} ".join(parts)
        else:
            body = ", ".join(parts[:-1]) + f", {DATA_LIST_LAST} " + parts[-1]
        return " ".join(DATA_LIST_HEAD) + " " + body
    return repr(value)


__all__ = [
    "DataDecodeError",
    "decode_data",
    "encode_data",
    "shape_name",
    "supports_shape",
]
