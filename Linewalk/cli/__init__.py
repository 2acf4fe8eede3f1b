"""
Command-line interface for Linewalk line navigation.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from Linewalk.config import NavigatorConfig
from Linewalk.core.errors import LinewalkError
from Linewalk.core.result import Line, NavigationResult
from Linewalk.utils.file_loader import iter_records, line_at, sniff_binary, tail_lines, walk_file

app = typer.Typer(
    name="linewalk",
    help="Linewalk - move through files line by line, in either direction",
    add_completion=False,
)
console = Console()
error_console = Console(stderr=True)

EOL_LABELS = {"crlf": "\\r\\n", "cr": "\\r", "lf": "\\n"}


@app.callback()
def main_options(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    config: Optional[Path] = typer.Option(
        None, "--config", "-c",
        help="JSON file with navigator settings"
    ),
) -> None:
    """
    Bidirectional, end-of-line aware file navigation.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )

    if config is None:
        ctx.obj = NavigatorConfig()
        return

    try:
        ctx.obj = NavigatorConfig.from_json_file(config)
    except (OSError, ValueError, TypeError) as e:
        error_console.print(f"[red]✗[/red] Invalid config {config}: {e}")
        raise typer.Exit(code=2)


def _config(ctx: typer.Context) -> NavigatorConfig:
    return ctx.obj if isinstance(ctx.obj, NavigatorConfig) else NavigatorConfig()


def _check_path(path: Path, force: bool) -> None:
    if not path.is_file():
        error_console.print(f"[red]✗[/red] File not found: {path}")
        raise typer.Exit(code=2)  # Error exit code

    if not force and sniff_binary(path):
        error_console.print(
            f"[red]✗[/red] {path} looks like a binary file. Use --force to read it anyway."
        )
        raise typer.Exit(code=2)


def _lines_table(title: str, lines: List[Line]) -> Table:
    table = Table(title=title, show_header=True)
    table.add_column("Start", style="cyan", justify="right")
    table.add_column("End", style="cyan", justify="right")
    table.add_column("EOL", style="magenta")
    table.add_column("Text")

    for line in lines:
        eol = EOL_LABELS.get(line.eol.value, "") if line.eol else "-"
        table.add_row(str(line.start), str(line.end), eol, escape(line.text))
    return table


def _print_result(result: NavigationResult, json_output: bool, title: str) -> None:
    for error in result.errors:
        error_console.print(f"[yellow]⚠[/yellow]  {error}")

    if json_output:
        print(json.dumps(result.to_dict(), indent=2))
        raise typer.Exit(code=2 if result.errors else 0)

    if result.errors and not result.found_lines:
        raise typer.Exit(code=2)

    if not result.found_lines:
        console.print("[yellow]⚠[/yellow] No lines")
        raise typer.Exit(code=0)

    console.print(_lines_table(title, result.lines))
    console.print(f"\n{result}")


@app.command()
def line(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="File to read"),
    offset: int = typer.Option(0, "--offset", "-o", help="Byte offset inside the line"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    force: bool = typer.Option(False, "--force", help="Read binary files too"),
) -> None:
    """
    Show the line containing a byte offset.

    Examples:

        # Line around byte 1024
        linewalk line app.log --offset 1024
    """
    _check_path(path, force)
    if offset < 0:
        error_console.print(f"[red]✗[/red] Offset must be >= 0, got: {offset}")
        raise typer.Exit(code=2)

    try:
        found = line_at(path, offset, _config(ctx))
    except OSError as e:
        error_console.print(f"[red]✗[/red] Error reading {path}: {e}")
        raise typer.Exit(code=2)

    result = NavigationResult(
        lines=[found] if found.content else [],
        path=str(path),
    )
    _print_result(result, json_output, f"Line at offset {offset}")


@app.command()
def tail(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="File to read"),
    count: int = typer.Option(10, "--lines", "-n", help="Number of lines"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    force: bool = typer.Option(False, "--force", help="Read binary files too"),
) -> None:
    """
    Show the last lines of a file without reading all of it.

    Examples:

        linewalk tail app.log -n 20
    """
    _check_path(path, force)
    if count < 0:
        error_console.print(f"[red]✗[/red] Line count must be >= 0, got: {count}")
        raise typer.Exit(code=2)

    try:
        lines = tail_lines(path, count, _config(ctx))
    except OSError as e:
        error_console.print(f"[red]✗[/red] Error reading {path}: {e}")
        raise typer.Exit(code=2)

    result = NavigationResult(lines=lines, path=str(path))
    _print_result(result, json_output, f"Last {len(lines)} lines of {path.name}")


@app.command()
def lines(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="File to read"),
    start: Optional[int] = typer.Option(
        None, "--start", "-s",
        help="Byte offset inside the first line (default: start, or end with --reverse)"
    ),
    reverse: bool = typer.Option(False, "--reverse", "-r", help="Walk towards the start"),
    limit: Optional[int] = typer.Option(None, "--limit", "-l", help="Maximum lines"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    force: bool = typer.Option(False, "--force", help="Read binary files too"),
) -> None:
    """
    Walk lines forward or backward from an offset.

    Examples:

        # Five lines starting at the line around byte 300
        linewalk lines data.csv --start 300 --limit 5

        # Whole file, last line first
        linewalk lines data.csv --reverse
    """
    _check_path(path, force)
    if (start is not None and start < 0) or (limit is not None and limit < 0):
        error_console.print("[red]✗[/red] --start and --limit must be >= 0")
        raise typer.Exit(code=2)

    result = walk_file(path, start=start, reverse=reverse, limit=limit, config=_config(ctx))
    direction = "backward" if reverse else "forward"
    _print_result(result, json_output, f"{path.name} ({direction})")


@app.command()
def records(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="Delimited file to read"),
    delimiter: Optional[str] = typer.Option(
        None, "--delimiter", "-d",
        help="Single-byte field separator (default: ',')"
    ),
    fields: Optional[int] = typer.Option(
        None, "--fields", "-f",
        help="Expected fields per record; shorter lines are joined with the next"
    ),
    max_len: Optional[int] = typer.Option(
        None, "--max-len",
        help="Per-line read cap in bytes (0 = unbounded, else at least 2)"
    ),
    reverse: bool = typer.Option(False, "--reverse", "-r", help="Read from the end"),
    limit: Optional[int] = typer.Option(None, "--limit", "-l", help="Maximum records"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    force: bool = typer.Option(False, "--force", help="Read binary files too"),
) -> None:
    """
    Split lines into delimiter-separated fields.

    No quoting is understood: every delimiter splits. With --fields, a
    record with too few fields continues onto the adjacent line.

    Examples:

        linewalk records data.csv --fields 4

        # Last 3 records of a tab separated file
        linewalk records data.tsv -d $'\\t' --reverse --limit 3
    """
    _check_path(path, force)
    base = _config(ctx)
    cfg = NavigatorConfig(
        read_chunk=base.read_chunk,
        max_len=base.max_len if max_len is None else max_len,
        delimiter=base.delimiter if delimiter is None else delimiter,
        encoding=base.encoding,
        errors=base.errors,
    )

    try:
        cfg.validate()
        rows = list(iter_records(path, reverse, fields, limit, cfg))
    except LinewalkError as e:
        error_console.print(f"[red]✗[/red] {e}")
        raise typer.Exit(code=2)
    except ValueError as e:
        error_console.print(f"[red]✗[/red] Invalid option: {e}")
        raise typer.Exit(code=2)
    except OSError as e:
        error_console.print(f"[red]✗[/red] Error reading {path}: {e}")
        raise typer.Exit(code=2)

    if json_output:
        print(json.dumps({"path": str(path), "records": rows}, indent=2))
        raise typer.Exit(code=0)

    if not rows:
        console.print("[yellow]⚠[/yellow] No records")
        raise typer.Exit(code=0)

    width = max(len(row) for row in rows)
    table = Table(title=f"{len(rows)} records from {path.name}", show_header=True)
    table.add_column("#", style="cyan", justify="right")
    for i in range(width):
        table.add_column(f"Field {i + 1}")

    for n, row in enumerate(rows, start=1):
        cells = [escape(value) for value in row]
        cells += [""] * (width - len(row))
        table.add_row(str(n), *cells)

    console.print(table)


@app.command()
def version() -> None:
    """Display version information."""
    from Linewalk import __version__
    console.print(f"Linewalk version {__version__}")


def main() -> None:
    """Main entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
