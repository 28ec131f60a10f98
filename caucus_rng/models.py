from dataclasses import dataclass, replace

# Lattice constants: primes just below 2**32 with coprime periods.
MOD1 = 4294967087
MUL1 = 65539
MOD2 = 4294965887
MUL2 = 65537

MAX_LIMIT = MOD2 - 1
REAL_RESOLUTION = 4294965885

HEADS = 1
TAILS = -1


@dataclass(frozen=True)
class LatticeState:
    """Both LCG values plus the constants that advance them."""

    state1: int
    state2: int
    mod1: int = MOD1
    mul1: int = MUL1
    mod2: int = MOD2
    mul2: int = MUL2

    def __post_init__(self) -> None:
        if not 1 <= self.state1 < self.mod1:
            raise ValueError(f"state1 must be in [1, {self.mod1}), got {self.state1}")
        if not 1 <= self.state2 < self.mod2:
            raise ValueError(f"state2 must be in [1, {self.mod2}), got {self.state2}")

    def advance(self) -> "LatticeState":
        # One step of each lattice; a prime modulus never maps a non-zero state to zero.
        return replace(
            self,
            state1=(self.state1 * self.mul1) % self.mod1,
            state2=(self.state2 * self.mul2) % self.mod2,
        )


@dataclass(frozen=True)
class SampleRecord:
    limit: int
    result: int
