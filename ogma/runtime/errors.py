"""Error taxonomy shared by the clause compiler, matcher and virtual machine."""

from __future__ import annotations


class OgmaError(Exception):
    """Base class for every error raised by Ogma."""


# -- clause compilation -------------------------------------------------


class ClauseError(OgmaError, ValueError):
    """A clause template contains a malformed placeholder word."""

    reason = "invalid clause"

    def __init__(self, word: str, offset: int | None = None):
        self.word = word
        self.offset = offset
        where = f" at offset {offset}" if offset is not None else ""
        super().__init__(f"{self.reason}: {word!r}{where}")


class InvalidVariableName(ClauseError):
    reason = "invalid variable name"


class InvalidVariablePrefix(ClauseError):
    reason = "invalid variable prefix"


class BindingError(OgmaError, ValueError):
    """A command declaration does not agree with its clause."""


# -- matching -----------------------------------------------------------


class MatchError(OgmaError):
    """A line does not match a command type.

    Match errors are recoverable: the module compiler moves on to the next
    candidate when one is raised.
    """

    message = "match failed"

    def __init__(self, detail: str | None = None):
        self.detail = detail
        text = self.message if detail is None else f"{self.message}: {detail}"
        super().__init__(text)


class MismatchedStaticToken(MatchError):
    message = "mismatched static token"


class EmptyQuery(MatchError):
    message = "empty query"


class UnknownQueryVar(MatchError):
    message = "unknown query variable"


class UnknownDataVar(MatchError):
    message = "unknown data variable"


class UnfilledVar(MatchError):
    message = "unfilled variable"


class UnexpectedEof(MatchError):
    message = "unexpected end of input"


class ExpectedEof(MatchError):
    message = "unexpected trailing tokens"


class InvalidContext(MatchError):
    message = "invalid keyword sequence"


class DataDecodeFailure(MatchError):
    message = "data decode error"


class CompileError(OgmaError):
    """No candidate command type matched a script line."""

    def __init__(self, line_number: int, line: str, cause: MatchError):
        self.line_number = line_number
        self.line = line
        self.cause = cause
        super().__init__(f"line {line_number}: {cause}")


# -- execution traps ----------------------------------------------------


class Trap(OgmaError):
    """Execution-time failure raised by a command or the instance loop."""

    @staticmethod
    def runtime(message: str) -> "RuntimeTrap":
        return RuntimeTrap(message)


class DowncastError(Trap):
    def __init__(self, name: str, expected, actual):
        self.name = name
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"global {name!r} is stored as {_shape_name(actual)}, "
            f"not {_shape_name(expected)}"
        )


class ScriptOutOfBounds(Trap):
    def __init__(self, pc: int):
        self.pc = pc
        super().__init__(f"program counter {pc} is past the end of the script")


class MissingGlobal(Trap):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"missing global {name!r}")


class RuntimeTrap(Trap):
    pass


def _shape_name(shape) -> str:
    return getattr(shape, "__name__", None) or repr(shape)


__all__ = [
    "BindingError",
    "ClauseError",
    "CompileError",
    "DataDecodeFailure",
    "DowncastError",
    "EmptyQuery",
    "ExpectedEof",
    "InvalidContext",
    "InvalidVariableName",
    "InvalidVariablePrefix",
    "MatchError",
    "MismatchedStaticToken",
    "MissingGlobal",
    "OgmaError",
    "RuntimeTrap",
    "ScriptOutOfBounds",
    "Trap",
    "UnexpectedEof",
    "UnfilledVar",
    "UnknownDataVar",
    "UnknownQueryVar",
]
