"""Sequential virtual machine: variable store, scripts and instances."""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable

from ..constants import VM_LOGGER
from .errors import (
    DowncastError,
    MissingGlobal,
    RuntimeTrap,
    ScriptOutOfBounds,
    Trap,
)

log = logging.getLogger(VM_LOGGER)


class Context:
    """Global variables addressable by name, each tagged with its shape."""

    def __init__(self):
        self.globals: dict[str, tuple[Any, Any]] = {}

    def set_global(self, name: str, value: Any, shape: Any = None) -> None:
        self.globals[str(name)] = (type(value) if shape is None else shape, value)

    def get_global(self, name: str, shape: Any) -> Any:
        """Return the value stored under ``name``.

        ``None`` means nothing is stored there; a value stored as a different
        shape raises :class:`DowncastError`.
        """

        entry = self.globals.get(name)
        if entry is None:
            return None
        stored, value = entry
        if stored != shape:
            raise DowncastError(name, shape, stored)
        return value

    def require_global(self, name: str, shape: Any) -> Any:
        if name not in self.globals:
            raise MissingGlobal(name)
        return self.get_global(name, shape)

    def shape_of(self, name: str) -> Any:
        entry = self.globals.get(name)
        return None if entry is None else entry[0]

    def remove_global(self, name: str) -> None:
        self.globals.pop(name, None)

    def take_global(self, name: str, shape: Any) -> Any:
        value = self.get_global(name, shape)
        self.globals.pop(name, None)
        return value

    def snapshot(self) -> dict[str, Any]:
        return {name: value for name, (_, value) in self.globals.items()}

    def __contains__(self, name) -> bool:
        return name in self.globals

    def __len__(self) -> int:
        return len(self.globals)

    def __repr__(self) -> str:  # pragma: no cover - representation helper
        return f"Context({sorted(self.globals)})"


class Command:
    """An executable unit of a script."""

    name = "command"

    def call(self, ctx: Context) -> None:
        raise NotImplementedError


class FunctionCommand(Command):
    """Adapt a plain callable ``fn(ctx, *args)`` into a command."""

    def __init__(self, fn: Callable[..., Any], *args: Any):
        self.fn = fn
        self.args = args
        self.name = getattr(fn, "__name__", "function")

    def call(self, ctx: Context) -> None:
        self.fn(ctx, *self.args)

    def __repr__(self) -> str:  # pragma: no cover - representation helper
        return f"<FunctionCommand {self.name}{self.args!r}>"


class Script:
    """An immutable, ordered list of commands."""

    def __init__(self, commands: Iterable[Command] = ()):
        self._commands = tuple(commands)

    def __len__(self) -> int:
        return len(self._commands)

    def __getitem__(self, index: int) -> Command:
        return self._commands[index]

    def __iter__(self):
        return iter(self._commands)

    def instance(self) -> "Instance":
        return Instance(self)

    def __repr__(self) -> str:  # pragma: no cover - representation helper
        return f"<Script {len(self)} commands>"


class Instance:
    """One execution of a script against its own context."""

    def __init__(self, script: Script):
        self.script = script
        self.ctx = Context()
        self.pc = 0

    @property
    def done(self) -> bool:
        return self.pc >= len(self.script)

    def step(self) -> None:
        """Run the current command and advance the program counter."""

        if self.pc < 0 or self.pc >= len(self.script):
            raise ScriptOutOfBounds(self.pc)
        command = self.script[self.pc]
        try:
            command.call(self.ctx)
        except Trap:
            raise
        except Exception as exc:
            raise RuntimeTrap(f"{getattr(command, 'name', command)}: {exc}") from exc
        log.debug("step %d: %s", self.pc, getattr(command, "name", command))
        self.pc += 1

    def exec(self) -> None:
        """Step to the end of the script.

        Any trap other than running off the end stops execution and is raised;
        the context keeps every change made before it.
        """

        while True:
            try:
                self.step()
            except ScriptOutOfBounds:
                return
            except Trap as exc:
                log.warning("trap at step %d: %s", self.pc, exc)
                raise

    def reset(self) -> None:
        self.pc = 0
        self.ctx = Context()


__all__ = [
    "Command",
    "Context",
    "FunctionCommand",
    "Instance",
    "Script",
]
