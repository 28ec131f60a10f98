"""Dual-lattice PRNG with reproducible, unbiased bounded draws.

Two multiplicative congruential generators are stepped together and their sum
is reduced by the requested limit. Only plain integer arithmetic is involved, so
the exact sequence can be rebuilt on any platform from the seeds alone.
"""

import logging
import math
import numbers
from typing import Any, Dict, List, Optional, Tuple

from .models import (
    HEADS,
    MAX_LIMIT,
    REAL_RESOLUTION,
    TAILS,
    LatticeState,
    SampleRecord,
)
from .seeding import resolve_seeds

logger = logging.getLogger(__name__)


class InvalidLimitError(ValueError):
    """Raised when a draw limit falls outside ``1..MAX_LIMIT`` after normalization."""


class DiagnosticsDisabledError(RuntimeError):
    """Raised when the sample log is read from a generator built with ``record=False``."""


def normalize_limit(limit: Any) -> int:
    """Return ``abs(floor(limit))`` or raise :class:`InvalidLimitError`."""

    if not isinstance(limit, numbers.Real) or isinstance(limit, bool):
        raise InvalidLimitError(f"limit must be a number, got {limit!r}")
    if isinstance(limit, float) and not math.isfinite(limit):
        raise InvalidLimitError(f"limit must be finite, got {limit!r}")

    normalized = abs(math.floor(limit))
    if normalized < 1:
        raise InvalidLimitError(f"limit {limit!r} normalizes to 0; draws need a limit of at least 1")
    if normalized > MAX_LIMIT:
        raise InvalidLimitError(f"limit {limit!r} exceeds the supported maximum {MAX_LIMIT}")
    return normalized


class DualLatticePRNG:
    """Seeded generator; one instance per reproducible stream.

    Instances are not thread-safe. Pass ``record=True`` to keep a log of every
    accepted draw for :meth:`summarize`; the log is never trimmed.
    """

    def __init__(self, seed_a: Any = None, seed_b: Any = None, *, record: bool = False) -> None:
        state1, state2 = resolve_seeds(seed_a, seed_b)
        self._state = LatticeState(state1, state2)
        self._records: Optional[List[SampleRecord]] = [] if record else None
        logger.debug("seeded generator state1=%d state2=%d record=%s", state1, state2, record)

    @property
    def state(self) -> LatticeState:
        return self._state

    @property
    def recording(self) -> bool:
        return self._records is not None

    @property
    def records(self) -> Tuple[SampleRecord, ...]:
        return tuple(self._require_records())

    def random_up_to(self, limit: Any) -> int:
        """Return an integer uniformly distributed over ``range(limit)``."""

        limit = normalize_limit(limit)

        rejected = 0
        while True:
            self._state = state = self._state.advance()
            if not (
                state.state1 < limit
                and state.state2 < limit
                and state.state1 < state.mod1 % limit
                and state.state2 < state.mod2 % limit
            ):
                break
            rejected += 1

        if rejected:
            logger.debug("limit %d: rejected %d draw(s)", limit, rejected)

        result = (state.state1 + state.state2) % limit
        if self._records is not None:
            self._records.append(SampleRecord(limit=limit, result=result))
        return result

    def random(self) -> float:
        """Like :func:`random.random`: a float in ``[0, 1)``."""
        return self.random_up_to(REAL_RESOLUTION) / REAL_RESOLUTION

    def coin_flip(self) -> int:
        """Return ``HEADS`` (1) or ``TAILS`` (-1); never 0."""
        return TAILS if self.random_up_to(2) else HEADS

    # Three-way comparator form used for randomized sort order.
    random_comparison = coin_flip

    def summarize(self) -> Dict[int, Dict[int, int]]:
        """Tally the sample log as ``{limit: {result: count}}``."""

        summary: Dict[int, Dict[int, int]] = {}
        for record in self._require_records():
            counts = summary.setdefault(record.limit, {})
            counts[record.result] = counts.get(record.result, 0) + 1
        return summary

    def _require_records(self) -> List[SampleRecord]:
        if self._records is None:
            raise DiagnosticsDisabledError(
                "sample log is disabled; construct the generator with record=True"
            )
        return self._records
