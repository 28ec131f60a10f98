"""Public package surface for the reproducible caucus random number generator."""

from .draws import DrawConfig, chi_square, random_order, run_draws
from .models import HEADS, MAX_LIMIT, REAL_RESOLUTION, TAILS, LatticeState, SampleRecord
from .prng import (
    DiagnosticsDisabledError,
    DualLatticePRNG,
    InvalidLimitError,
    normalize_limit,
)
from .seeding import parse_seed, resolve_seeds

__all__ = [
    "DiagnosticsDisabledError",
    "DrawConfig",
    "DualLatticePRNG",
    "HEADS",
    "InvalidLimitError",
    "LatticeState",
    "MAX_LIMIT",
    "REAL_RESOLUTION",
    "SampleRecord",
    "TAILS",
    "chi_square",
    "normalize_limit",
    "parse_seed",
    "random_order",
    "resolve_seeds",
    "run_draws",
]
