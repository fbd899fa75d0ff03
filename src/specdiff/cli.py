"""SpecDiff CLI - Command-line interface.

Usage:
    specdiff compare --old <path-or-url> --new <path-or-url> [--format json|text]
"""

import asyncio
import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from specdiff.exceptions import ComparisonLimitExceeded, SpecLoadError, SpecParseError
from specdiff.types import ComparisonMessage, ComparisonSettings, OutputFormat

console = Console(stderr=True)
app = typer.Typer(
    name="specdiff",
    help="Detect breaking changes between two versions of an OpenAPI spec",
    no_args_is_help=True,
)

EXIT_INPUT_ERROR = 1
EXIT_LIMIT_EXCEEDED = 2
EXIT_BREAKING_CHANGES = 3


def setup_logging(verbose: bool = False) -> None:
    """Set up logging with rich handler."""
    level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_time=False, show_path=False)],
    )

    logging.getLogger("specdiff").setLevel(level)

    # Quiet down httpx
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


@app.command()
def compare(
    old: str = typer.Option(
        ...,
        "--old",
        "-o",
        help="Path or http(s) URL of the previous OpenAPI spec",
    ),
    new: str = typer.Option(
        ...,
        "--new",
        "-n",
        help="Path or http(s) URL of the new OpenAPI spec",
    ),
    output_format: OutputFormat = typer.Option(
        OutputFormat.JSON,
        "--format",
        "-f",
        help="Output format",
        case_sensitive=False,
    ),
    fail_on_breaking: bool = typer.Option(
        False,
        "--fail-on-breaking",
        help="Exit with a non-zero code when breaking changes are found",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging",
    ),
) -> None:
    """Compare two OpenAPI specs and report the differences."""
    from specdiff.modules.pipeline import compare_sources
    from specdiff.modules.report import summarize_findings

    setup_logging(verbose=verbose)

    try:
        messages = asyncio.run(
            compare_sources(old, new, settings=ComparisonSettings.from_env())
        )
    except (SpecLoadError, SpecParseError) as e:
        console.print(f"[red]Error:[/red] {e}")
        console.print("Exiting.")
        raise typer.Exit(EXIT_INPUT_ERROR)
    except ComparisonLimitExceeded as e:
        console.print(f"[red]Comparison aborted:[/red] {e}")
        raise typer.Exit(EXIT_LIMIT_EXCEEDED)

    _output(messages, output_format)

    summary = summarize_findings(messages)
    if fail_on_breaking and summary.has_breaking_changes:
        console.print(f"[red]✗ {summary.breaking} breaking changes found[/red]")
        raise typer.Exit(EXIT_BREAKING_CHANGES)


def _output(messages: list[ComparisonMessage], output_format: OutputFormat) -> None:
    from specdiff.modules.report import render_json, render_text

    if output_format == OutputFormat.JSON:
        print(render_json(messages))
    else:
        print(render_text(messages))


@app.command()
def version() -> None:
    """Show version information."""
    from specdiff import __version__
    console.print(f"specdiff version {__version__}")


if __name__ == "__main__":
    app()
