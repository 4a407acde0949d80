"""pyfc CLI: Typer application with compare and init commands."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from pyfc import __version__
from pyfc.compare.models import ExitCode

app = typer.Typer(
    name="pyfc",
    help="Compare two files and display the differences between them.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)


def _enable_debug_logging() -> None:
    """Route pyfc's library loggers through Rich on stderr."""
    logger = logging.getLogger("pyfc")
    logger.setLevel(logging.DEBUG)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(RichHandler(console=Console(stderr=True), show_path=False))


def _invalid(message: str) -> typer.Exit:
    console.print(f"[bold red]{message}[/bold red]")
    return typer.Exit(code=int(ExitCode.INVALID))


def _fan_out(*callbacks: Optional[Callable]) -> Optional[Callable]:
    active = [cb for cb in callbacks if cb is not None]
    if not active:
        return None

    def call(item) -> None:
        for cb in active:
            cb(item)

    return call


# ── compare ───────────────────────────────────────────────────────────────────


@app.command()
def compare(
    file1: str = typer.Argument(..., help="First file"),
    file2: str = typer.Argument(..., help="Second file"),
    abbreviate: bool = typer.Option(False, "--abbreviate", "-a", help="Show only first and last line of each difference"),
    binary: bool = typer.Option(False, "--binary", "-b", help="Compare byte by byte"),
    ignore_case: bool = typer.Option(False, "--ignore-case", "-c", help="Ignore letter case"),
    text: bool = typer.Option(False, "--text", "-l", help="Compare as text even for binary extensions"),
    lb: Optional[int] = typer.Option(None, "--lb", help="Max consecutive differing lines before resync fails"),
    line_numbers: bool = typer.Option(False, "--line-numbers", "-n", help="Show line numbers"),
    offline: bool = typer.Option(False, "--offline", help="Do not skip offline files (accepted, no effect)"),
    literal_tabs: bool = typer.Option(False, "--literal-tabs", "-t", help="Do not expand tabs"),
    unicode: bool = typer.Option(False, "--unicode", "-u", help="Files are UTF-16LE text"),
    compress_whitespace: bool = typer.Option(False, "--compress-whitespace", "-w", help="Compress spaces and tabs"),
    min_match: Optional[int] = typer.Option(None, "--min-match", help="Lines that must match after a difference (accepted, no effect)"),
    encoding: Optional[str] = typer.Option(None, "--encoding", "-e", help="Codec for non-unicode text files"),
    config: Optional[str] = typer.Option(None, "--config", "-C", help="Path to .pyfc.toml or .pyfc.yaml"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write JSON report to file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Debug logging from the comparison engine"),
) -> None:
    """Compare FILE1 and FILE2."""
    from pyfc.compare.dispatch import compare_files, has_wildcard, use_binary_mode
    from pyfc.config.loader import ConfigError, build_options, load_config
    from pyfc.output import json_report
    from pyfc.output.json_report import ReportCollector
    from pyfc.output.terminal import TerminalPresenter

    if debug:
        _enable_debug_logging()

    # --- Load config ---
    try:
        cfg = load_config(Path.cwd(), config)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        raise typer.Exit(code=int(ExitCode.INVALID)) from exc

    # --- CLI overrides ---
    if format:
        if format not in ("terminal", "json"):
            raise _invalid(f"Invalid format: {format}")
        cfg.output.format = format  # type: ignore[assignment]
    if lb is not None and lb < 1:
        raise _invalid(f"FC: Invalid Switch --lb {lb}")
    if min_match is not None and min_match < 1:
        raise _invalid(f"FC: Invalid Switch --min-match {min_match}")

    try:
        options = build_options(
            cfg,
            binary_forced=binary,
            force_text=text,
            ignore_case=ignore_case,
            compress_whitespace=compress_whitespace,
            literal_tabs=literal_tabs,
            wide_text=unicode,
            abbreviate=abbreviate,
            line_numbers=line_numbers,
            offline=offline,
            resync_window=lb,
            min_resync_run=min_match,
            encoding=encoding,
        )
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        raise typer.Exit(code=int(ExitCode.INVALID)) from exc

    if has_wildcard(file1) or has_wildcard(file2):
        console.print("[yellow]FC: Wildcard not supported yet[/yellow]")

    if verbose or debug:
        mode = "binary" if use_binary_mode(file1, file2, options) else "text"
        console.print(f"[dim]Mode: {mode}[/dim]")
        console.print(f"[dim]Resync window: {options.resync_window}[/dim]")
        console.print(f"[dim]Chunk size: {options.chunk_size}[/dim]")

    # --- Run comparison ---
    collector = ReportCollector() if (cfg.output.format == "json" or output) else None
    presenter: Optional[TerminalPresenter] = None
    if cfg.output.format == "terminal":
        presenter = TerminalPresenter(
            abbreviated=options.abbreviate,
            line_numbers=options.line_numbers,
        )
        if cfg.output.show_caption:
            presenter.caption(file1, file2)

    result = compare_files(
        file1,
        file2,
        options,
        on_mismatch=_fan_out(
            presenter.show_mismatch if presenter else None,
            collector.add_mismatch if collector else None,
        ),
        on_block=_fan_out(
            presenter.show_block if presenter else None,
            collector.add_block if collector else None,
        ),
    )

    # --- Output ---
    report_text: Optional[str] = None
    if presenter is not None:
        presenter.show_outcome(result)
    else:
        report_text = json_report.render(result, collector)
        print(report_text)

    if output:
        if report_text is None:
            report_text = json_report.render(result, collector)
        Path(output).write_text(report_text, encoding="utf-8")
        if verbose:
            console.print(f"[dim]Report written to {output}[/dim]")

    raise typer.Exit(code=result.exit_code)


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init() -> None:
    """Generate a starter .pyfc.toml in the current directory."""
    from pyfc.config.defaults import DEFAULT_TOML

    config_path = Path.cwd() / ".pyfc.toml"

    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  .pyfc.toml already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"pyfc {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """pyfc: compare two files and display the differences between them."""
