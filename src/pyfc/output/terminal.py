"""Rich terminal presenter: difference blocks, byte mismatches, verdicts."""

from __future__ import annotations

from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.text import Text

from pyfc.compare.models import ByteMismatch, CompareResult, DiffBlock, DivergentRun, Outcome
from pyfc.text.models import Line

DIVIDER = "*****"
ELLIPSIS = "..."
RESYNC_FAILED_MESSAGE = "Resync failed.  Files are too different."


def _printable(text: str) -> str:
    # lone surrogates from undecodable bytes cannot be written to a terminal
    return text.encode("utf-8", "replace").decode("utf-8")


def format_mismatch(mismatch: ByteMismatch) -> str:
    """``OFFSET: XX YY``; the offset widens past 8 hex digits as needed."""
    return f"{mismatch.offset:08X}: {mismatch.left:02X} {mismatch.right:02X}"


def abbreviate(lines: List[Line]) -> List[Optional[Line]]:
    """First line, ``None`` for an ellipsis when more than two, last line."""
    if len(lines) <= 2:
        return list(lines)
    return [lines[0], None, lines[-1]]


class TerminalPresenter:
    """Print comparison output the way ``fc`` lays it out.

    Differences, mismatches and verdicts go to *console*; file errors go to
    *err_console*.
    """

    def __init__(
        self,
        *,
        abbreviated: bool = False,
        line_numbers: bool = False,
        console: Optional[Console] = None,
        err_console: Optional[Console] = None,
    ) -> None:
        self.abbreviated = abbreviated
        self.line_numbers = line_numbers
        self.console = console or Console(highlight=False)
        self.err_console = err_console or Console(stderr=True, highlight=False)

    # ---- pieces ----

    def _plain(self, text: str, style: str = "") -> None:
        self.console.print(Text(_printable(text), style=style), soft_wrap=True)

    def _say(self, markup: str, *, error: bool = False) -> None:
        console = self.err_console if error else self.console
        console.print(markup, soft_wrap=True)

    def format_line(self, line: Line) -> str:
        if self.line_numbers:
            return f"{line.number:5d}:  {line.raw_text}"
        return line.raw_text

    def caption(self, path0: str, path1: str) -> None:
        self._say(f"Comparing files [cyan]{escape(path0)}[/cyan] and [cyan]{escape(path1)}[/cyan]")

    def show_run(self, run: DivergentRun) -> None:
        self._plain(f"{DIVIDER} {run.label}", style="bold")
        shown = run.displayed
        entries = abbreviate(shown) if self.abbreviated else shown
        for line in entries:
            if line is None:
                self._plain(ELLIPSIS, style="dim")
            else:
                self._plain(self.format_line(line))

    # ---- callbacks ----

    def show_block(self, block: DiffBlock) -> None:
        if block.final:
            self._say(f"[bold red]{RESYNC_FAILED_MESSAGE}[/bold red]")
        self.show_run(block.left)
        self.show_run(block.right)
        self._plain(DIVIDER, style="bold")
        self.console.print()

    def show_mismatch(self, mismatch: ByteMismatch) -> None:
        self._plain(format_mismatch(mismatch))

    # ---- verdict ----

    def show_outcome(self, result: CompareResult) -> None:
        path0, path1 = (escape(p) for p in result.files)
        outcome = result.outcome

        if outcome is Outcome.IDENTICAL:
            self._say("[green]FC: no differences encountered[/green]")
        elif outcome is Outcome.DIFFERENT and result.mode == "binary":
            self._say(f"[yellow]FC: {path0} and {path1} are different[/yellow]")
        elif outcome is Outcome.ONE_LONGER:
            self._say(
                f"[yellow]FC: {escape(result.longer or '')} longer than "
                f"{escape(result.shorter or '')}[/yellow]"
            )
        elif outcome is Outcome.NOT_FOUND:
            self._say(
                f"[bold red]FC: cannot open {escape(result.failed_path or '')} "
                "- No such file or folder[/bold red]",
                error=True,
            )
        elif outcome is Outcome.UNREADABLE:
            self._say(
                f"[bold red]FC: cannot read {escape(result.failed_path or '')}[/bold red]",
                error=True,
            )
        elif outcome is Outcome.OUT_OF_MEMORY:
            self._say("[bold red]FC: Out of memory[/bold red]", error=True)
        # text DIFFERENT and RESYNC_FAILED are fully described by their blocks
