# main.py

"""
Orchestrator: read params (JSON + CLI), walk files, classify headers, write CSV,
optionally score a numeric series against Benford's law.
"""
from __future__ import annotations
import argparse
import json
import logging
import sys
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from triage.frequency import (
    benford_first_digit_deviation,
    benford_multi_digit_deviation,
    entropy_of_bytes,
)
from triage.header import read_header
from triage.model import FileKind, ScanDecision, TriageRow
from triage.report import write_csv
from triage.signatures import classify
from triage.walk import iter_decisions


def load_config(path: Path | None) -> Dict[str, Any]:
    """Load configuration from a JSON file.

    Args:
        path (Path | None): Path to the JSON configuration file.

    Returns:
        Dict[str, Any]: Configuration dictionary. Empty if no file is provided or read fails.
    """
    if not path:
        return {}
    try:
        with path.open("r", encoding="utf-8") as f:
            cfg = json.load(f)
    except (OSError, ValueError) as exc:
        print(f"[WARN] Failed to read config {path}: {exc}", file=sys.stderr)
        return {}
    if not isinstance(cfg, dict):
        print(f"[WARN] Ignoring config {path}: top level must be an object", file=sys.stderr)
        return {}
    return cfg


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse CLI arguments.

    Returns:
        argparse.Namespace: Parsed command-line arguments.
    """
    p = argparse.ArgumentParser(
        description="Sweep a directory for sensitive files (keys, wallets, credential stores)."
    )
    p.add_argument("--input", type=str, help="Root directory to sweep (recursive).")
    p.add_argument("--ext", action="append", default=None,
                   help="Target extension without the dot; repeatable. Use '' for extensionless files.")
    p.add_argument("--text", action="store_true", help="Also select files whose header looks like plain text.")
    p.add_argument("--report", type=str, help="Path to CSV report (default: triage.csv).")
    p.add_argument("--benford", type=str, help="File of numbers to score against Benford's law.")
    p.add_argument("--config", type=str, help="Optional JSON config (flags override).")
    p.add_argument("--verbose", action="store_true", help="Log skipped files and read errors.")
    return p.parse_args(argv)


def _get_effective_config(args: argparse.Namespace) -> Tuple[Dict[str, Any], Path]:
    """Load CLI + JSON configuration, giving precedence to CLI flags."""
    script_dir = Path(__file__).parent
    default_config_path = script_dir / "params.json"
    config_path = Path(args.config) if args.config else default_config_path
    cfg = load_config(config_path if config_path.exists() else None)
    return cfg, config_path


def _config_extensions(cfg: Dict[str, Any]) -> List[str]:
    """Read the ``extensions`` config key; a bare string is a single extension."""
    raw = cfg.get("extensions", [])
    if isinstance(raw, str):
        return [raw]
    if not isinstance(raw, list) or not all(isinstance(e, str) for e in raw):
        print(f"[WARN] Ignoring config extensions {raw!r}: expected a list of strings", file=sys.stderr)
        return []
    return list(raw)


def _resolve_options(
    args: argparse.Namespace, cfg: Dict[str, Any]
) -> Tuple[Optional[Path], List[str], bool, Path, Optional[Path]]:
    """Merge flags over config values."""
    raw_input = args.input or cfg.get("input")
    input_path = Path(raw_input) if raw_input else None
    extensions = args.ext if args.ext is not None else _config_extensions(cfg)
    include_text = bool(args.text or cfg.get("text", False))
    report_path = Path(args.report or cfg.get("report", "triage.csv"))
    raw_benford = args.benford or cfg.get("benford")
    benford_path = Path(raw_benford) if raw_benford else None
    return input_path, extensions, include_text, report_path, benford_path


def process_file(decision: ScanDecision) -> TriageRow:
    """Classify one selected file and build its report row."""
    fp = decision.path
    try:
        head = read_header(fp)
        return TriageRow(
            path=str(fp),
            size_bytes=fp.stat().st_size,
            selected_by=decision.selected_by,
            kind=classify(head).value,
            header_bytes=len(head),
            header_entropy=entropy_of_bytes(head),
            error="",
        )
    except OSError as exc:
        return TriageRow(
            path=str(fp),
            size_bytes=0,
            selected_by=decision.selected_by,
            kind=FileKind.UNKNOWN.value,
            header_bytes=0,
            header_entropy=0.0,
            error=f"{type(exc).__name__}: {exc}",
        )


def read_numbers(path: Path) -> List[str]:
    """Return the finite whitespace-separated numeric tokens of a text file.

    Thousands separators are dropped, so ``1,234`` is one number.
    """
    text = path.read_text(encoding="utf-8", errors="ignore")
    numbers: List[str] = []
    for raw in text.split():
        token = raw.replace(",", "")
        try:
            value = Decimal(token)
        except InvalidOperation:
            continue
        if value.is_finite():
            numbers.append(token)
    return numbers


def run_benford(path: Path) -> int:
    """Print Benford deviations for the numbers in ``path``."""
    try:
        numbers = read_numbers(path)
    except OSError as exc:
        print(f"[ERR] Cannot read numbers from {path}: {exc}", file=sys.stderr)
        return 2

    print(f"[INFO] Benford: {len(numbers)} numbers from {path}")
    print(f"[INFO] First-digit deviation: {benford_first_digit_deviation(numbers):.4f}")
    print(f"[INFO] Three-digit deviation: {benford_multi_digit_deviation(numbers, 3):.4f}")
    return 0


def _print_summary(report_path: Path, total: int, sensitive: int, errors: int) -> None:
    """Print summary information to stdout."""
    print(f"[INFO] Done. Candidates: {total} | Sensitive: {sensitive} | Errors: {errors}")
    print(f"[INFO] Report: {report_path.resolve()}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main orchestration function.

    Returns:
        int: Exit code.
    """
    args = parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="[%(levelname)s] %(name)s: %(message)s")

    cfg, config_path = _get_effective_config(args)
    input_path, extensions, include_text, report_path, benford_path = _resolve_options(args, cfg)

    if input_path is None and benford_path is None:
        print(f"[ERR] --input or --benford is required (or set them in {config_path.name}).", file=sys.stderr)
        return 2

    if benford_path is not None:
        code = run_benford(benford_path)
        if code or input_path is None:
            return code

    if not extensions and not include_text:
        print("[WARN] No --ext given and --text not set; nothing will be selected.", file=sys.stderr)

    try:
        decisions = iter_decisions(input_path, extensions, include_text)
    except OSError as exc:
        print(f"[ERR] Invalid input: {exc}", file=sys.stderr)
        return 2

    rows: List[TriageRow] = []
    sensitive = errors = 0

    print(f"[INFO] Scanning: {input_path}")
    for decision in decisions:
        if not decision.included:
            continue
        row = process_file(decision)
        rows.append(row)
        if row.error:
            errors += 1
        elif row.kind != FileKind.UNKNOWN.value:
            sensitive += 1
            print(f"[INFO] {row.kind}: {row.path}")

    try:
        write_csv(report_path, rows)
    except OSError as exc:
        print(f"[ERR] Cannot write report {report_path}: {exc}", file=sys.stderr)
        return 2
    _print_summary(report_path, len(rows), sensitive, errors)

    return 3 if errors else 0


if __name__ == "__main__":
    raise SystemExit(main())
