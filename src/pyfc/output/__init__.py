"""Output renderers: rich terminal presenter and JSON report."""

from pyfc.output.json_report import ReportCollector
from pyfc.output.terminal import TerminalPresenter

__all__ = ["ReportCollector", "TerminalPresenter"]
