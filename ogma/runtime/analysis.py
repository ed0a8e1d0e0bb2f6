"""Inspection helpers for compiled scripts."""

from __future__ import annotations

from pathlib import Path

try:
    import pydot
except ModuleNotFoundError:  # pragma: no cover
    pydot = None

from ..constants import KEYWORD_COLORS
from .data import encode_data
from .query import Query, describe_query


def _format_argument(value) -> str:
    if isinstance(value, list) and value and all(isinstance(v, Query) for v in value):
        return describe_query(value)
    return encode_data(value)


def describe_command(command) -> str:
    name = getattr(command, "name", type(command).__name__)
    arguments = getattr(command, "arguments", None)
    if not arguments:
        return name
    fields = ", ".join(f"{key}={_format_argument(val)}" for key, val in arguments.items())
    return f"{name}({fields})"


def describe_script(script) -> list[str]:
    """Return one line per command: position, command type and fields."""

    return [f"{index:>3}  {describe_command(cmd)}" for index, cmd in enumerate(script)]


def print_script(script) -> None:
    if not len(script):
        print("  (empty script)")
        return
    for line in describe_script(script):
        print(line)


def build_graph(script):
    """Build a pydot graph with one node per command in execution order."""

    if pydot is None:
        raise RuntimeError("Graphviz export requires the optional pydot dependency")

    graph = pydot.Dot(
        "ogma_script",
        graph_type="digraph",
        rankdir="TB",
        fontname="Helvetica",
    )

    previous = None
    for index, command in enumerate(script):
        command_type = getattr(command, "command_type", None)
        keyword = getattr(command_type, "keyword", None)
        label = describe_command(command)
        if command_type is not None:
            label = f"{label}\\n{command_type.describe()}"
        node_id = f"cmd{index}"
        graph.add_node(
            pydot.Node(
                node_id,
                label='"' + label.replace('"', '\\"') + '"',
                shape="box",
                style="filled",
                fillcolor=KEYWORD_COLORS.get(keyword, KEYWORD_COLORS[None]),
                color="#34495e",
                fontname="Helvetica",
            )
        )
        if previous is not None:
            graph.add_edge(pydot.Edge(previous, node_id, color="#7f8c8d"))
        previous = node_id
    return graph


def export_graphviz(script, output_path):  # pragma: no cover
    """Write the script graph as SVG, or as DOT text for a ``.dot`` path."""

    graph = build_graph(script)
    output_path = Path(output_path)
    if output_path.parent and not output_path.parent.exists():
        output_path.parent.mkdir(parents=True, exist_ok=True)

    if output_path.suffix == ".dot":
        graph.write_raw(str(output_path))
    else:
        graph.write_svg(str(output_path))
    print(f"  ✓ Graphviz visualization exported → {output_path}")


__all__ = [
    "build_graph",
    "describe_command",
    "describe_script",
    "export_graphviz",
    "print_script",
]
