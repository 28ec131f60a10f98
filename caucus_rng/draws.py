"""Seeded draw runs, randomized ordering and uniformity checks."""

from dataclasses import asdict, dataclass
from functools import cmp_to_key
from typing import Any, Dict, Iterable, List, Mapping, Optional, TypeVar

from .prng import DualLatticePRNG, normalize_limit

T = TypeVar("T")


@dataclass
class DrawConfig:
    """Configuration for a reproducible run of bounded draws."""

    seed_a: Optional[int] = None
    seed_b: Optional[int] = None
    limit: int = 6
    count: int = 20
    record: bool = True


def run_draws(cfg: DrawConfig) -> Dict[str, Any]:
    """Draw ``cfg.count`` values below ``cfg.limit`` and report them."""

    if cfg.count < 0:
        raise ValueError(f"count must be non-negative, got {cfg.count}")

    rng = DualLatticePRNG(cfg.seed_a, cfg.seed_b, record=cfg.record)
    draws = [rng.random_up_to(cfg.limit) for _ in range(cfg.count)]

    summary: Dict[str, Dict[str, int]] = {}
    if rng.recording:
        # JSON object keys must be strings.
        summary = {
            str(limit): {str(result): n for result, n in sorted(counts.items())}
            for limit, counts in rng.summarize().items()
        }

    return {
        "config": asdict(cfg),
        "final": {
            "state1": rng.state.state1,
            "state2": rng.state.state2,
            "count": len(draws),
        },
        "draws": draws,
        "summary": summary,
    }


def random_order(items: Iterable[T], rng: DualLatticePRNG) -> List[T]:
    """Return ``items`` in an order decided by coin flips.

    Each comparison the sort makes consumes one flip, so the order depends on
    both the generator state and the input length.
    """

    return sorted(items, key=cmp_to_key(lambda _a, _b: rng.random_comparison()))


def chi_square(counts: Mapping[Any, int], limit: int) -> float:
    """Pearson statistic of ``{result: count}`` against uniform over ``range(limit)``.

    Keys may be ints or their string form, as found in a JSON report.
    """

    limit = normalize_limit(limit)
    tally = {int(result): n for result, n in counts.items()}
    outside = [result for result in tally if not 0 <= result < limit]
    if outside:
        raise ValueError(f"results {outside} fall outside range({limit})")

    total = sum(tally.values())
    if total == 0:
        return 0.0

    expected = total / limit
    observed = sum((n - expected) ** 2 / expected for n in tally.values())
    # Each result never drawn contributes (0 - expected)**2 / expected.
    return observed + (limit - len(tally)) * expected
