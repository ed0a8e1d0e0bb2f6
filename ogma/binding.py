"""Bind Python functions to clause templates.

A decorated function becomes a :class:`CommandType`: it knows its compiled
clause, matches lines into :class:`BoundCommand` objects and is still
callable as the decorated function::

    @given("the addition of q`input` and d`b` henceforth q`out`")
    def add(ctx, input: list[Query], b: int, out: list[Query]):
        ...
"""

from __future__ import annotations

import functools
import importlib
import inspect
import logging
import types
import typing
from typing import Any

from .constants import BINDING_LOGGER, CONTINUATION_KEYWORD, KEYWORDS
from .runtime.clause import compile_clause, data_names, query_names, variable_names
from .runtime.data import shape_name, supports_shape
from .runtime.errors import BindingError, InvalidContext, MismatchedStaticToken
from .runtime.matcher import Matcher, match_clause
from .runtime.module import Module
from .runtime.query import Query
from .runtime.vm import Command

log = logging.getLogger(BINDING_LOGGER)

_QUERY_ANNOTATIONS = (inspect.Parameter.empty, Any, list, list[Query], typing.List[Query])


def _field_parameters(func) -> list[inspect.Parameter]:
    params = list(inspect.signature(func).parameters.values())
    if not params:
        raise BindingError(f"{func.__name__} must accept the context as its first argument")
    fields = params[1:]
    for param in fields:
        if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
            raise BindingError(f"{func.__name__}: variadic parameter {param.name!r} not allowed")
    return fields


def _bind_fields(clause, func) -> tuple[tuple[str, ...], dict[str, Any]]:
    """Route clause variables to function parameters, validating both sides."""

    names = variable_names(clause)
    duplicates = sorted({n for n in names if names.count(n) > 1})
    if duplicates:
        raise BindingError(f"{func.__name__}: variables used more than once: {duplicates}")

    params = _field_parameters(func)
    if len(params) != len(names):
        raise BindingError(
            f"{func.__name__}: variable number mismatch "
            f"(clause has {len(names)}, function has {len(params)})"
        )
    for param in params:
        if param.name not in names:
            raise BindingError(f"{func.__name__}: {param.name!r} not found in clause")

    try:
        hints = typing.get_type_hints(func)
    except (NameError, TypeError) as exc:
        raise BindingError(f"{func.__name__}: cannot resolve annotations: {exc}") from exc

    query_fields = tuple(query_names(clause))
    for name in query_fields:
        hint = hints.get(name, inspect.Parameter.empty)
        if hint not in _QUERY_ANNOTATIONS:
            raise BindingError(f"{func.__name__}: query variable {name!r} must be list[Query]")

    data_fields = {name: hints.get(name, Any) for name in data_names(clause)}
    for name, shape in data_fields.items():
        if not supports_shape(shape):
            raise BindingError(
                f"{func.__name__}: data variable {name!r} has unsupported shape {shape_name(shape)}"
            )
    return query_fields, data_fields


class CommandType:
    """A clause template bound to the function that implements it."""

    def __init__(self, template: str, func, *, name: str | None = None, keyword: str | None = None):
        if keyword is not None and keyword not in KEYWORDS:
            raise BindingError(f"unknown keyword {keyword!r}")
        self.template = template
        self.clause = compile_clause(template)
        self.func = func
        self.name = name or func.__name__
        self.keyword = keyword
        self.query_fields, self.data_fields = _bind_fields(self.clause, func)
        functools.update_wrapper(self, func)
        log.debug("registered %s: %s", self.name, self.describe())

    def describe(self) -> str:
        if self.keyword is None:
            return self.template
        return f"{self.keyword} {self.template}"

    def _check_keyword(self, ctx, matcher: Matcher):
        word = matcher.next_static()
        if word not in (self.keyword, CONTINUATION_KEYWORD):
            raise MismatchedStaticToken(f"expected {self.keyword!r}, found {word!r}")
        peek = getattr(ctx, "peek", None)
        if peek is None:
            raise InvalidContext("keyword commands need a step context")
        following = peek(word)
        if following is None:
            raise InvalidContext(f"{word!r} after {ctx.step.name.title()}")
        return following

    def match_line(self, ctx, line: str) -> "BoundCommand":
        """Match ``line`` and return a command holding the extracted fields.

        For keyword commands the step held by ``ctx`` only moves once the
        whole line has matched.
        """

        matcher = Matcher(line)
        following = None
        if self.keyword is not None:
            following = self._check_keyword(ctx, matcher)
        values = match_clause(self.clause, line, self.query_fields, self.data_fields, matcher)
        if following is not None:
            ctx.step = following
        return BoundCommand(self, values)

    def __call__(self, *args, **kwargs):
        return self.func(*args, **kwargs)

    def __repr__(self) -> str:  # pragma: no cover - representation helper
        return f"<CommandType {self.name}: {self.describe()!r}>"


class BoundCommand(Command):
    """A matched line: a command type plus its field values."""

    def __init__(self, command_type: CommandType, arguments: dict[str, Any]):
        self.command_type = command_type
        self.arguments = arguments
        self.name = command_type.name

    def call(self, ctx) -> None:
        self.command_type.func(ctx, **self.arguments)

    def __eq__(self, other):
        if not isinstance(other, BoundCommand):
            return NotImplemented
        return self.command_type is other.command_type and self.arguments == other.arguments

    __hash__ = None

    def __repr__(self) -> str:  # pragma: no cover - representation helper
        return f"<{self.name} {self.arguments!r}>"


def _decorator(template: str, name: str | None, keyword: str | None):
    def wrap(func) -> CommandType:
        return CommandType(template, func, name=name, keyword=keyword)

    return wrap


def command(template: str, *, name: str | None = None):
    """Bind a function to a clause with no keyword."""

    return _decorator(template, name, None)


def given(template: str, *, name: str | None = None):
    return _decorator(template, name, "Given")


def when(template: str, *, name: str | None = None):
    return _decorator(template, name, "When")


def then(template: str, *, name: str | None = None):
    return _decorator(template, name, "Then")


def command_types_in(namespace) -> list[CommandType]:
    """Return the command types defined in a module, in definition order."""

    items = vars(namespace).values() if isinstance(namespace, types.ModuleType) else namespace.values()
    return [item for item in items if isinstance(item, CommandType)]


def load_module(spec) -> Module:
    """Normalize any supported description of command types into a Module.

    Accepts a :class:`Module`, a :class:`CommandType`, a Python module (its
    ``MODULE`` attribute when that is a Module, otherwise every command type
    it defines), a dotted module name, or a list of any of these.
    """

    if isinstance(spec, Module):
        return spec
    if isinstance(spec, CommandType):
        return Module([spec])
    if isinstance(spec, str):
        return load_module(importlib.import_module(spec))
    if isinstance(spec, types.ModuleType):
        declared = getattr(spec, "MODULE", None)
        if isinstance(declared, Module):
            return declared
        return Module(command_types_in(spec))
    if isinstance(spec, (list, tuple)):
        candidates = []
        for item in spec:
            candidates.extend(load_module(item))
        return Module(candidates)
    raise TypeError(f"Unsupported command module spec: {type(spec)!r}")


__all__ = [
    "BoundCommand",
    "CommandType",
    "command",
    "command_types_in",
    "given",
    "load_module",
    "then",
    "when",
]
