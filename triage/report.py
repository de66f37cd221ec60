# triage/report.py

from __future__ import annotations
import csv
from pathlib import Path
from typing import Iterable

from .model import TriageRow

FIELDS = [
    "path", "size_bytes", "selected_by", "kind", "header_bytes", "header_entropy", "error"
]


def write_csv(out_path: Path, rows: Iterable[TriageRow]) -> None:
    """Write triage results to a CSV file.

    Args:
        out_path (Path): Destination CSV file path.
        rows (Iterable[TriageRow]): Sequence of triage result rows.

    Returns:
        None
    """
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with out_path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(FIELDS)
        for r in rows:
            writer.writerow([
                r.path,
                r.size_bytes,
                r.selected_by,
                r.kind,
                r.header_bytes,
                f"{r.header_entropy:.4f}",
                r.error,
            ])
