"""Merge the summaries of several draw reports into one CSV tally."""

from __future__ import annotations

import argparse
import csv
import json
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List

PROJECT_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_OUT_PATH = PROJECT_ROOT / "draw_logs" / "summary.csv"

if PROJECT_ROOT.as_posix() not in sys.path:
    sys.path.insert(0, PROJECT_ROOT.as_posix())

from caucus_rng import chi_square

HEADER = ["limit", "result", "count", "expected", "chi_square"]


@dataclass
class TallyRow:
    limit: int
    result: int
    count: int
    expected: float
    statistic: float

    def as_csv_row(self) -> List[str]:
        return [
            str(self.limit),
            str(self.result),
            str(self.count),
            f"{self.expected:.4f}",
            f"{self.statistic:.4f}",
        ]


def merge_summaries(payloads: Iterable[dict]) -> Dict[int, Dict[int, int]]:
    merged: Dict[int, Dict[int, int]] = {}
    for payload in payloads:
        for limit, counts in payload.get("summary", {}).items():
            target = merged.setdefault(int(limit), {})
            for result, count in counts.items():
                target[int(result)] = target.get(int(result), 0) + count
    return merged


def build_rows(merged: Dict[int, Dict[int, int]]) -> List[TallyRow]:
    rows: List[TallyRow] = []
    for limit in sorted(merged):
        counts = merged[limit]
        statistic = chi_square(counts, limit)
        expected = sum(counts.values()) / limit
        for result in sorted(counts):
            rows.append(TallyRow(limit, result, counts[result], expected, statistic))
    return rows


def _load_reports(paths: Iterable[Path]) -> List[dict]:
    payloads: List[dict] = []
    for path in paths:
        if not path.exists():
            raise FileNotFoundError(f"Missing draw report: {path}")
        payloads.append(json.loads(path.read_text()))
    return payloads


def _write_csv(rows: Iterable[TallyRow], out_path: Path) -> None:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with out_path.open("w", newline="") as handle:
        writer = csv.writer(handle)
        writer.writerow(HEADER)
        for row in rows:
            writer.writerow(row.as_csv_row())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Aggregate draw report summaries into a CSV")
    parser.add_argument("reports", nargs="+", type=Path, help="JSON reports written by run_draws.py")
    parser.add_argument(
        "--out",
        type=Path,
        default=DEFAULT_OUT_PATH,
        help="CSV destination (default: draw_logs/summary.csv under the repository root)",
    )
    return parser


def main() -> None:
    args = build_parser().parse_args()
    rows = build_rows(merge_summaries(_load_reports(args.reports)))
    _write_csv(rows, args.out)
    print(args.out)


if __name__ == "__main__":
    main()
