"""JSON reporter for scripts and CI pipelines."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pyfc.compare.models import ByteMismatch, CompareResult, DiffBlock, DivergentRun
from pyfc.text.models import Line


@dataclass
class ReportCollector:
    """Accumulates engine callbacks so they can be rendered after the run."""

    mismatches: List[ByteMismatch] = field(default_factory=list)
    blocks: List[DiffBlock] = field(default_factory=list)

    def add_mismatch(self, mismatch: ByteMismatch) -> None:
        self.mismatches.append(mismatch)

    def add_block(self, block: DiffBlock) -> None:
        self.blocks.append(block)


def _line(line: Optional[Line]) -> Optional[Dict[str, Any]]:
    if line is None:
        return None
    return {"line": line.number, "text": line.raw_text}


def _run(run: DivergentRun) -> Dict[str, Any]:
    return {
        "file": run.label,
        "lines": [_line(ln) for ln in run.lines],
        "before": _line(run.before),
        "after": _line(run.after),
    }


def to_dict(result: CompareResult, collector: Optional[ReportCollector] = None) -> Dict[str, Any]:
    """Convert a CompareResult (plus collected details) to a JSON-serialisable dict."""
    collector = collector or ReportCollector()
    return {
        "version": "1.0",
        "files": list(result.files),
        "mode": result.mode,
        "outcome": result.outcome.value,
        "exit_code": result.exit_code,
        **({"longer": result.longer, "shorter": result.shorter} if result.longer else {}),
        **({"failed_path": result.failed_path} if result.failed_path else {}),
        **({"error": result.error} if result.error else {}),
        "mismatches": [
            {"offset": m.offset, "left": m.left, "right": m.right}
            for m in collector.mismatches
        ],
        "differences": [
            {"left": _run(b.left), "right": _run(b.right), "final": b.final}
            for b in collector.blocks
        ],
    }


def render(result: CompareResult, collector: Optional[ReportCollector] = None) -> str:
    """Return formatted JSON string."""
    # surrogate escapes from undecodable bytes survive as \udcXX escapes
    return json.dumps(to_dict(result, collector), indent=2)
