"""emmygen CLI: generate EmmyLua annotations for the LÖVE API."""

from __future__ import annotations

import logging
import time
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel

from .codegen import generate as generate_files
from .config import GeneratorConfig
from .errors import EmmygenError
from .loader import load_api, parse_api
from .registry import DebugReport, debug_summary
from .validators import validate_directory

app = typer.Typer(
    name="emmygen",
    help="Generate EmmyLua annotation files for the LÖVE API.",
    add_completion=False,
    rich_markup_mode="rich",
)
console = Console()

# -- Helpers -------------------------------------------------------------------


def _print_listing(title: str, names: list[str], total_label: str | None = None) -> None:
    console.print(f"[bold]{title}[/bold] ({len(names)} total):")
    for name in names:
        console.print(f"  - {name}", markup=False)
    if total_label:
        console.print(f"{total_label}: {len(names)}")
    console.print()


def _print_debug(report: DebugReport) -> None:
    """Show how every collected type name was classified."""
    _print_listing("All collected types", report.known)
    _print_listing(
        "Descriptive types (with spaces, not prefixed)",
        report.descriptive,
        "Total descriptive types",
    )
    _print_listing(
        "Capitalized types defined by the API",
        report.defined_capitalized,
        "Total defined capital letter types",
    )
    _print_listing(
        "Capitalized types used but NOT defined",
        report.undefined_capitalized,
        "Total undefined capital letter types",
    )


# -- Commands ------------------------------------------------------------------


@app.command()
def generate(
    output: str = typer.Argument(None, help="Output directory (default: api)"),
    source: str = typer.Option(
        None, "--source", "-s", help="API description: JSON file or http(s) URL"
    ),
    namespace: str = typer.Option(None, "--namespace", "-n", help="Root namespace"),
    debug: bool = typer.Option(
        False, "--debug", help="Show debug information about type collection"
    ),
) -> None:
    """Generate one annotated .lua file per API module."""
    started = time.perf_counter()
    config = GeneratorConfig.from_env()
    if source:
        config.source = source
    if output:
        config.output_dir = Path(output)
    if namespace:
        config.namespace = namespace

    console.print(
        Panel(
            f"[bold]Source:[/bold] {config.source}\n"
            f"[bold]Output:[/bold] {config.output_dir}\n"
            f"[bold]Namespace:[/bold] {config.namespace}",
            title="[bold cyan]emmygen generate[/bold cyan]",
            border_style="cyan",
        )
    )

    try:
        api = parse_api(load_api(config.source))
    except EmmygenError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1)

    if debug:
        _print_debug(debug_summary(api, config.namespace))

    try:
        written = generate_files(api, config.output_dir, config)
    except OSError as exc:
        console.print(f"[red]Error:[/red] could not write output: {exc}")
        raise typer.Exit(1)

    for path in written:
        console.print(f"  [green]✓[/green] {path.name}")

    elapsed_ms = (time.perf_counter() - started) * 1000
    console.print("--------")
    console.print(
        f"Generated [bold]{len(written)}[/bold] modules in {elapsed_ms:.0f}ms."
    )


@app.command()
def check(
    api_dir: str = typer.Argument("api", help="Directory containing generated files"),
) -> None:
    """Validate previously generated annotation files."""
    root = Path(api_dir)
    if not root.is_dir():
        console.print(f"[red]Error:[/red] API directory not found: {root}")
        raise typer.Exit(1)

    result = validate_directory(root)
    if result.files_checked == 0:
        console.print(f"[red]Error:[/red] No .lua files found in {root}")
        raise typer.Exit(1)

    for warning in result.warnings:
        console.print(f"[yellow]warning:[/yellow] {warning}", highlight=False)
    for error in result.errors:
        console.print(f"[red]error:[/red] {error}", highlight=False)

    console.print(
        f"Checked {result.files_checked} files: "
        f"{len(result.errors)} errors, {len(result.warnings)} warnings"
    )
    if not result.ok:
        raise typer.Exit(1)


# -- Logging setup -------------------------------------------------------------


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """emmygen: EmmyLua annotations for LÖVE."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


if __name__ == "__main__":
    app()
