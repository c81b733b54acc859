"""Rich rendering utilities for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.table import Table

from arithgraph._ir import NodeKind

if TYPE_CHECKING:
    from rich.console import Console

    from arithgraph._builder import Builder
    from arithgraph._eval_engine import EvaluationResult

_KIND_STYLES = {
    NodeKind.INPUT: "cyan",
    NodeKind.CONSTANT: "blue",
    NodeKind.ADD: "yellow",
    NodeKind.MUL: "yellow",
    NodeKind.HINT: "magenta",
}


def render_node_table(builder: Builder, console: Console) -> None:
    """Render the nodes of a circuit as a Rich table.

    Args:
        builder: The circuit to render.
        console: Rich Console to output to.

    """
    if len(builder) == 0:
        console.print("[dim]Circuit has no nodes[/dim]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Id", justify="right", style="bold")
    table.add_column("Kind")
    table.add_column("Node", style="dim")

    for node in builder:
        style = _KIND_STYLES[node.kind]
        table.add_row(str(node.id), f"[{style}]{node.kind}[/{style}]", escape(node.describe()))

    console.print(table)


def render_value_table(builder: Builder, result: EvaluationResult, console: Console) -> None:
    """Render computed node values as a Rich table.

    Args:
        builder: The evaluated circuit.
        result: Values computed for the circuit.
        console: Rich Console to output to.

    """
    table = Table(show_header=True, header_style="bold cyan", box=None)
    table.add_column("Id", justify="right", style="bold")
    table.add_column("Node", style="dim")
    table.add_column("Value", justify="right")

    for node in builder:
        table.add_row(str(node.id), escape(node.describe()), str(result.get_value(node)))

    console.print(table)


def render_constraint_table(builder: Builder, result: EvaluationResult, console: Console) -> None:
    """Render the status of each constraint as a Rich table."""
    if not builder.constraints:
        console.print("[dim]No constraints[/dim]")
        return

    violated = set(result.violations)
    table = Table(show_header=True, header_style="bold cyan", box=None)
    table.add_column("Constraint", style="dim")
    table.add_column("Values")
    table.add_column("Result")

    for constraint in builder.constraints:
        values = f"{result.values.get(constraint.left)} == {result.values.get(constraint.right)}"
        status = "[red]✗ FAIL[/red]" if constraint in violated else "[green]✓ PASS[/green]"
        table.add_row(str(constraint), values, status)

    console.print(table)
