"""Seed normalization for the dual-lattice generator.

Seeding never fails: anything that does not resolve to a positive integer
falls back to the wall clock (first seed) or to the first seed (second seed).
"""

import logging
import math
import numbers
import re
import time
from typing import Any, Optional, Tuple

from .models import MOD1, MOD2

logger = logging.getLogger(__name__)

_PREFIXED = re.compile(r"0([xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)")
_DECIMAL = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")
_PREFIXED_BASES = {"x": 16, "o": 8, "b": 2}


def _now_millis() -> int:
    return time.time_ns() // 1_000_000


def _text_to_number(text: str) -> Optional[float]:
    text = text.strip()
    if not text:
        return 0

    if _PREFIXED.fullmatch(text):
        return int(text[2:], _PREFIXED_BASES[text[1].lower()])
    if not _DECIMAL.fullmatch(text):
        return None
    if text.lstrip("+-").isdigit():
        return int(text)
    return float(text)


def parse_seed(value: Any) -> Optional[int]:
    """Return ``abs(floor(value))`` as a seed, or ``None`` when a default applies.

    Text is read the way a form field would be: surrounding whitespace is
    ignored, empty text counts as zero and ``0x``/``0o``/``0b`` prefixes select
    the base. Only ASCII digits are accepted, and a prefix may not be followed
    by a sign or space. Non-finite, unparseable or sub-1 results all mean "use
    the default".

    Integer text is kept exact at any length. A double-based implementation
    rounds seeds above 2**53 (``"9007199254740993"`` becomes ``...992``), so
    such seeds give different states there; keep stored seeds below 2**53 when
    they must reproduce across platforms.
    """

    if isinstance(value, str):
        value = _text_to_number(value)
    if not isinstance(value, numbers.Real):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None

    seed = abs(math.floor(value))
    return seed if seed >= 1 else None


def reduce_seed(raw: int, modulus: int) -> int:
    """Map a non-negative integer into the lattice range ``[1, modulus)``."""
    return raw % (modulus - 1) + 1


def resolve_seeds(seed_a: Any = None, seed_b: Any = None) -> Tuple[int, int]:
    first = parse_seed(seed_a)
    if first is None:
        first = _now_millis()
        logger.debug("seed_a %r unusable, seeding from clock: %d", seed_a, first)

    second = parse_seed(seed_b)
    if second is None:
        second = first
        if seed_b is not None:
            logger.debug("seed_b %r unusable, reusing seed_a", seed_b)

    return reduce_seed(first, MOD1), reduce_seed(second, MOD2)
