"""Command-line interface for the Ogma runtime."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys
from typing import Any

from ..binding import load_module
from ..constants import DEFAULT_LOG_LEVEL, DEFAULT_STEPS_MODULE, REPL_HISTORY_LIMIT
from .analysis import describe_command, export_graphviz, print_script
from .bdd import StepContext
from .clause import compile_clause
from .data import decode_data, encode_data
from .errors import ClauseError, CompileError, MatchError, Trap
from .vm import Context, Instance, Script


def parse_assignment(text: str) -> tuple[str, Any]:
    """Parse ``NAME=VALUE`` where VALUE is written the way scripts write data."""

    name, sep, raw = text.partition("=")
    name = name.strip()
    if not sep or not name:
        raise ValueError(f"expected NAME=VALUE, got {text!r}")
    value, rest = decode_data(raw)
    if rest.strip():
        raise ValueError(f"unexpected text after value for {name}: {rest.strip()!r}")
    return name, value


def print_globals(ctx: Context) -> None:
    if not len(ctx):
        print("  (no globals)")
        return
    for name, value in sorted(ctx.snapshot().items()):
        print(f"  {name} = {encode_data(value)}")


def run_repl(module, plain=False, history_limit=REPL_HISTORY_LIMIT):  # pragma: no cover
    """Interactive shell: each line is compiled and run at once."""

    print("Ogma REPL — enter script lines or commands (:help for help)")
    match_ctx = None if plain else StepContext()
    ctx = Context()
    history = []

    while True:
        try:
            line = input("ogma> ")
        except EOFError:
            print()
            break

        stripped = line.strip()
        if not stripped:
            continue

        if stripped.startswith(":"):
            cmd = stripped.split()[0]
            if cmd in (":quit", ":exit"):
                break
            if cmd == ":help":
                print("Commands: :help, :quit, :globals, :reset, :script")
                print(f"History: last {history_limit} commands kept.")
                continue
            if cmd == ":globals":
                print_globals(ctx)
                continue
            if cmd == ":reset":
                ctx = Context()
                match_ctx = None if plain else StepContext()
                history.clear()
                print("  ✓ state cleared")
                continue
            if cmd == ":script":
                print_script(Script(history))
                continue
            print(f"Unknown command: {cmd}")
            continue

        try:
            command = module.compile_line(match_ctx, stripped)
        except MatchError as exc:
            print(f"  ✗ no match: {exc}")
            continue

        instance = Instance(Script([command]))
        instance.ctx = ctx
        try:
            instance.exec()
        except Trap as exc:
            print(f"  ✗ trap: {exc}")
            continue

        history.append(command)
        if len(history) > history_limit:
            history.pop(0)
        print(f"  ✓ {describe_command(command)}")


def parse_args(args):
    argp = argparse.ArgumentParser(description="Ogma natural-language script runner")

    argp.add_argument("script", nargs="?", help="Path of a script file to run")
    argp.add_argument("--src", help="Inline script source")
    argp.add_argument(
        "--steps",
        action="append",
        metavar="MODULE",
        help=f"Import step definitions from MODULE (default: {DEFAULT_STEPS_MODULE})",
    )
    argp.add_argument(
        "--set",
        action="append",
        dest="assignments",
        metavar="NAME=VALUE",
        help="Seed a global before running (e.g. input=3, name=`bob`)",
    )
    argp.add_argument(
        "--plain",
        action="store_true",
        help="Compile without Given/When/Then keyword sequencing",
    )
    argp.add_argument("--dump", action="store_true", help="Print globals after running")
    argp.add_argument("--tokens", metavar="TEMPLATE", help="Show the tokens of a clause template")
    argp.add_argument(
        "--viz",
        metavar="OUTPUT",
        help="Export the compiled script as Graphviz (SVG, or DOT for .dot paths)",
    )
    argp.add_argument("--repl", action="store_true", help="Start an interactive REPL")
    argp.add_argument(
        "--log-level",
        default=DEFAULT_LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )

    return argp.parse_args(args)


def show_tokens(template: str) -> int:
    try:
        clause = compile_clause(template)
    except ClauseError as exc:
        print(f"  ✗ {exc}")
        return 1
    for token in clause:
        print(f"  {type(token).__name__}({str(token)!r})")
    return 0


def main(args) -> int:
    params = parse_args(args)
    logging.basicConfig(
        level=getattr(logging, params.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )

    if params.tokens is not None:
        return show_tokens(params.tokens)

    module = load_module(params.steps or [DEFAULT_STEPS_MODULE])

    if params.repl:
        run_repl(module, plain=params.plain)
        return 0

    if params.script:
        source = Path(params.script).read_text(encoding="utf-8")
    elif params.src is not None:
        source = params.src
    else:
        print("Nothing to run: give a SCRIPT path, --src or --repl")
        return 1

    match_ctx = None if params.plain else StepContext()
    try:
        script = module.compile(match_ctx, source)
    except CompileError as exc:
        print(f"  ✗ compile error on {exc}")
        print(f"    {exc.line}")
        return 1

    print("Script:")
    print_script(script)
    if params.viz:
        export_graphviz(script, params.viz)

    instance = script.instance()
    for assignment in params.assignments or []:
        try:
            name, value = parse_assignment(assignment)
        except ValueError as exc:
            print(f"  ✗ {exc}")
            return 1
        instance.ctx.set_global(name, value)

    status = 0
    try:
        instance.exec()
    except Trap as exc:
        print(f"\n  ✗ trap at step {instance.pc}: {exc}")
        status = 1
    else:
        print(f"\n  ✓ {len(script)} command(s) executed")

    if params.dump:
        print("\nGlobals:")
        print_globals(instance.ctx)
    return status


def run() -> None:  # pragma: no cover
    sys.exit(main(sys.argv[1:]))


__all__ = [
    "main",
    "parse_args",
    "parse_assignment",
    "print_globals",
    "run",
    "run_repl",
    "show_tokens",
]


if __name__ == "__main__":  # pragma: no cover
    run()
