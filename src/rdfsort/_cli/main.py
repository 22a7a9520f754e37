import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from rdfsort._ancestry import parent_map
from rdfsort._errors import CycleError, SortError
from rdfsort._graph import TripleGraph
from rdfsort._io import DocumentError, TripleDocument, export_to_toml, load_document
from rdfsort._namespaces import abbreviate, invert_schema_definition
from rdfsort._reassemble import sort_triples
from rdfsort._terms import Node, NodeKind

from .config import ConfigError, RdfsortConfig, get_config

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
    """Order RDF triples for streaming serialization."""
    log_level = logging.DEBUG if verbose else logging.INFO

    # Configure rich logging handler to output to stderr
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


def _load_config() -> RdfsortConfig:
    try:
        return get_config()
    except ConfigError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e


def _load_document(input_path: Path) -> TripleDocument:
    if not input_path.exists():
        err_console.print(f"[red]Error: Input file not found: {input_path}[/red]")
        raise typer.Exit(code=1)

    err_console.print(f"[cyan]Loading triples from:[/cyan] {input_path}")
    try:
        return load_document(input_path)
    except DocumentError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e


def _display(node: Node | None, inverted: dict[str, str]) -> str:
    if node is None:
        return "-"
    if node.kind is NodeKind.IRI:
        return escape(abbreviate(node.value, inverted))
    return escape(str(node))


@app.command()
def sort(
    input: Annotated[  # noqa: A002
        Path,
        typer.Argument(help="Path to the input TOML triple document"),
    ],
    *,
    output: Annotated[
        Path | None,
        typer.Option("-o", "--output", help="Path to write the ordered TOML document"),
    ] = None,
    strict: Annotated[
        bool | None,
        typer.Option("--strict/--no-strict", help="Fail on cyclic input instead of breaking cycles"),
    ] = None,
) -> None:
    """Order the triples of a document and print them."""
    config = _load_config()
    document = _load_document(input)
    namespaces = {**config.namespaces, **document.namespaces}
    inverted = invert_schema_definition(namespaces)

    if strict is None:
        strict = config.strict

    try:
        ordered = sort_triples(document.triples, strict=strict)
    except SortError as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Subject")
    table.add_column("Predicate")
    table.add_column("Object")
    for position, triple in enumerate(ordered):
        table.add_row(
            str(position),
            _display(triple.subject, inverted),
            _display(triple.predicate, inverted),
            _display(triple.object, inverted),
        )
    out_console.print(table)

    output = output or config.output
    if output is not None:
        export_to_toml(ordered, output, document.namespaces)
        err_console.print(f"[green]✓ Wrote {len(ordered)} triples to {output}[/green]")


@app.command()
def nodes(
    input: Annotated[  # noqa: A002
        Path,
        typer.Argument(help="Path to the input TOML triple document"),
    ],
) -> None:
    """Print the nodes of a document in sorted order with their parents."""
    config = _load_config()
    document = _load_document(input)
    inverted = invert_schema_definition({**config.namespaces, **document.namespaces})

    graph = TripleGraph.from_triples(document.triples)
    parents = parent_map(document.triples)
    cyclic = False
    try:
        order = graph.topological_order(strict=True)
    except CycleError:
        cyclic = True
        order = graph.topological_order()
    except SortError as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Node")
    table.add_column("Kind")
    table.add_column("Out", justify="right")
    table.add_column("Parent")
    for node in order:
        table.add_row(
            _display(node, inverted),
            node.kind.value,
            str(len(graph.successors(node))),
            _display(parents.get(node), inverted),
        )
    out_console.print(table)

    if cyclic:
        err_console.print("[yellow]⚠ The graph contains a cycle; it was broken at an arbitrary edge.[/yellow]")


@app.command()
def namespaces(
    input: Annotated[  # noqa: A002
        Path | None,
        typer.Argument(help="Optional TOML triple document with its own [namespaces]"),
    ] = None,
) -> None:
    """Print the URI -> abbreviation table used to shorten names."""
    config = _load_config()
    schema = dict(config.namespaces)
    if input is not None:
        schema.update(_load_document(input).namespaces)

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("URI")
    table.add_column("Prefix")
    for uri, abbreviation in sorted(invert_schema_definition(schema).items()):
        table.add_row(escape(uri), escape(abbreviation))
    out_console.print(table)


def main() -> None:
    app()
