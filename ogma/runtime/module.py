"""Compile multi-line scripts by trying command types in order."""

from __future__ import annotations

import logging

from ..constants import COMPILE_LOGGER
from .bdd import StepContext
from .errors import CompileError, MatchError, UnexpectedEof
from .vm import Script

log = logging.getLogger(COMPILE_LOGGER)


def source_lines(source: str):
    """Yield ``(line_number, text)`` for each non-blank line, trimmed."""

    for number, raw in enumerate(source.splitlines(), start=1):
        text = raw.strip()
        if text:
            yield number, text


class Module:
    """An ordered list of candidate command types.

    Each candidate exposes ``match_line(ctx, line)`` returning a command or
    raising :class:`MatchError`. Earlier candidates win.
    """

    def __init__(self, candidates=()):
        self.candidates = list(candidates)

    def __len__(self) -> int:
        return len(self.candidates)

    def __iter__(self):
        return iter(self.candidates)

    def compile_line(self, ctx, line: str):
        last_error: MatchError = UnexpectedEof()
        for candidate in self.candidates:
            try:
                command = candidate.match_line(ctx, line)
            except MatchError as exc:
                last_error = exc
                continue
            log.debug("matched %r with %s", line, _candidate_name(candidate))
            return command
        raise last_error

    def compile(self, ctx, source: str) -> Script:
        commands = []
        for number, line in source_lines(source):
            try:
                commands.append(self.compile_line(ctx, line))
            except MatchError as exc:
                raise CompileError(number, line, exc) from exc
        log.debug("compiled %d command(s)", len(commands))
        return Script(commands)

    def compile_source(self, source: str) -> Script:
        return self.compile(StepContext(), source)


def _candidate_name(candidate) -> str:
    return getattr(candidate, "name", None) or type(candidate).__name__


__all__ = ["Module", "source_lines"]
