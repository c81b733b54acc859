import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from arithgraph._builder import Builder
from arithgraph._errors import EvaluationError, InputFileError
from arithgraph._eval_engine import evaluate_graph
from arithgraph._io import export_to_toml, load_inputs_from_toml
from arithgraph._u32 import U32_MAX, is_u32

from .config import ArithGraphConfig, ConfigError, get_config
from .discover import load_circuit_from_module_path, load_circuit_from_script, load_circuit_from_source
from .render import render_constraint_table, render_node_table, render_value_table

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)
# Console for stdout (results)
out_console = Console()


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """Arithmetic graph CLI."""
    log_level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=verbose,
                rich_tracebacks=True,
            ),
        ],
    )


def _get_config() -> ArithGraphConfig:
    try:
        return get_config()
    except ConfigError as e:
        err_console.print(f"[red]Configuration error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e


def _load_circuit(path: str | None, config: ArithGraphConfig, builder_name: str | None) -> Builder:
    """Load circuit from CLI path or config."""
    if path is not None:
        if ":" in path:
            err_console.print(f"[cyan]Loading circuit from module:[/cyan] {path}")
            return load_circuit_from_module_path(path)
        script_path = Path(path)
        err_console.print(f"[cyan]Loading circuit from script:[/cyan] {script_path}")
        return load_circuit_from_script(script_path, builder_name)

    if config.circuit is None:
        msg = "No circuit specified. Provide a path argument or configure [tool.arithgraph].circuit in pyproject.toml."
        raise typer.BadParameter(msg)

    err_console.print(f"[cyan]Loading circuit from config:[/cyan] {config.circuit}")
    return load_circuit_from_source(config.circuit)


def _parse_assignments(assignments: list[str]) -> dict[int, int]:
    """Parse ``ID=VALUE`` command line assignments.

    Both sides are decimal, so ``0=010`` assigns ten to node 0.
    """
    inputs: dict[int, int] = {}
    for assignment in assignments:
        node_id, sep, value = assignment.partition("=")
        if not sep:
            msg = f"Invalid assignment '{assignment}'. Expected format: ID=VALUE"
            raise typer.BadParameter(msg, param_hint="'-x' / '--set'")
        try:
            key, word = int(node_id), int(value)
        except ValueError as e:
            msg = f"Invalid assignment '{assignment}': node id and value must be decimal integers"
            raise typer.BadParameter(msg, param_hint="'-x' / '--set'") from e
        if not is_u32(word):
            msg = f"Invalid assignment '{assignment}': value must be in [0, {U32_MAX}]"
            raise typer.BadParameter(msg, param_hint="'-x' / '--set'")
        inputs[key] = word
    return inputs


@app.command()
def calc(  # noqa: PLR0913
    path: Annotated[
        str | None,
        typer.Argument(help="Path to Python script or module path (e.g., examples.division:builder)"),
    ] = None,
    *,
    input: Annotated[  # noqa: A002
        Path | None,
        typer.Option("-i", "--input", help="Path to input TOML file"),
    ] = None,
    assignments: Annotated[
        list[str] | None,
        typer.Option("-x", "--set", help="Input value as ID=VALUE (repeatable, overrides the input file)"),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("-o", "--output", help="Path to output TOML file"),
    ] = None,
    builder_name: Annotated[
        str | None,
        typer.Option("--builder", help="Name of the Builder variable or factory (for script paths only)"),
    ] = None,
    verify: Annotated[
        bool,
        typer.Option("--verify", help="Verify that all constraints hold (exit non-zero if any fail)"),
    ] = False,
) -> None:
    """Evaluate a circuit and check its constraints."""
    err_console.print()
    config = _get_config()

    builder = _load_circuit(path, config, builder_name)
    err_console.print(f"[cyan]Circuit:[/cyan] [bold]{len(builder)} nodes[/bold]")

    overrides = _parse_assignments(assignments or [])
    effective_input = input if input is not None else config.input
    inputs: dict[int, int] = {}
    try:
        if effective_input is not None:
            err_console.print(f"[cyan]Loading input from:[/cyan] {effective_input}")
            inputs.update(load_inputs_from_toml(effective_input))
    except InputFileError as e:
        err_console.print(f"[red]Input error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e
    inputs.update(overrides)
    err_console.print()

    err_console.print("[cyan]Evaluating circuit...[/cyan]")
    try:
        result = evaluate_graph(builder, inputs)
    except EvaluationError as e:
        err_console.print(f"[red]✗ Evaluation failed: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e
    err_console.print()

    out_console.print("[bold]Computed values[/bold]")
    render_value_table(builder, result, out_console)
    err_console.print()
    render_constraint_table(builder, result, err_console)
    err_console.print()

    if result.constraints_satisfied:
        err_console.print("[green]✓ All constraints satisfied[/green]")
    else:
        err_console.print(f"[red]✗ {len(result.violations)} constraint(s) not satisfied[/red]")

    effective_output = output if output is not None else config.output
    if effective_output is not None:
        err_console.print(f"[cyan]Exporting results to:[/cyan] {effective_output}")
        export_to_toml(result, effective_output)

    err_console.print()

    if verify and not result.constraints_satisfied:
        raise typer.Exit(code=1)


@app.command()
def check(
    path: Annotated[
        str | None,
        typer.Argument(help="Path to Python script or module path (e.g., examples.division:builder)"),
    ] = None,
    *,
    builder_name: Annotated[
        str | None,
        typer.Option("--builder", help="Name of the Builder variable or factory (for script paths only)"),
    ] = None,
) -> None:
    """Show the nodes of a circuit without evaluating it."""
    err_console.print()
    config = _get_config()

    builder = _load_circuit(path, config, builder_name)
    err_console.print()

    render_node_table(builder, out_console)
    out_console.print(
        f"[bold]{len(builder)}[/bold] nodes, "
        f"[bold]{len(builder.input_nodes())}[/bold] inputs, "
        f"[bold]{len(builder.constraints)}[/bold] constraints",
    )

    err_console.print()
    err_console.print("[green]✓ Circuit is valid[/green]")
    err_console.print()


def main() -> None:
    """Run the arithgraph command line."""
    app()
