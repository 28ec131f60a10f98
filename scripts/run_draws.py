"""Command line harness for reproducible caucus draws."""

import argparse
import json
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_LOG_PATH = PROJECT_ROOT / "draw_logs" / "latest_run.json"

if PROJECT_ROOT.as_posix() not in sys.path:
    sys.path.insert(0, PROJECT_ROOT.as_posix())

from caucus_rng import MAX_LIMIT, DrawConfig, parse_seed, run_draws


def _parse_seed_arg(value: str) -> int:
    """Accept decimal or 0x-prefixed hex seeds, rejecting anything unusable."""

    seed = parse_seed(value)
    if seed is None:
        raise argparse.ArgumentTypeError(
            f"Seed must resolve to a positive integer (decimal or 0x hex), received '{value}'."
        )
    return seed


def _parse_limit(value: str) -> int:
    try:
        limit = int(value, 0)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("Limit must be an integer.") from exc

    if not 1 <= limit <= MAX_LIMIT:
        raise argparse.ArgumentTypeError(f"Limit must be between 1 and {MAX_LIMIT}.")
    return limit


def _parse_count(value: str) -> int:
    try:
        count = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("Count must be an integer.") from exc

    if count < 0:
        raise argparse.ArgumentTypeError("Count cannot be negative.")
    return count


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Draw reproducible bounded integers from the caucus PRNG")
    parser.add_argument(
        "--seed-a",
        dest="seed_a",
        type=_parse_seed_arg,
        default=None,
        help="First seed (decimal or 0x-prefixed hex); defaults to the current time in ms",
    )
    parser.add_argument(
        "--seed-b",
        dest="seed_b",
        type=_parse_seed_arg,
        default=None,
        help="Second seed; defaults to the first seed",
    )
    parser.add_argument("--limit", type=_parse_limit, default=6, help="Draw integers in [0, limit)")
    parser.add_argument("--count", type=_parse_count, default=20, help="Number of draws to make")
    parser.add_argument(
        "--no-record",
        dest="record",
        action="store_false",
        help="Skip the per-draw sample log; the report summary is left empty",
    )
    parser.add_argument("--verbose", action="store_true", help="Emit debug logging on stderr")
    parser.add_argument(
        "--log",
        nargs="?",
        type=Path,
        const=DEFAULT_LOG_PATH,
        help=(
            "Persist the JSON report to disk. Provide a path or pass the flag alone to use "
            "draw_logs/latest_run.json under the repository root."
        ),
    )
    return parser


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            stream=sys.stderr,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )

    cfg = DrawConfig(
        seed_a=args.seed_a,
        seed_b=args.seed_b,
        limit=args.limit,
        count=args.count,
        record=args.record,
    )
    result = run_draws(cfg)

    log_path: Path | None = args.log
    if log_path is not None:
        if not log_path.is_absolute():
            log_path = (PROJECT_ROOT / log_path).resolve()

        log_path.parent.mkdir(parents=True, exist_ok=True)
        log_path.write_text(json.dumps(result, indent=2))

    print(json.dumps(result, indent=2))


if __name__ == "__main__":
    main()
