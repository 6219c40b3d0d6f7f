"""
Deterministic random number generation for world building.

Provides a small counter-based 32-bit generator (mulberry32 mixing) and a
stable FNV-1a string hash so that the same seed produces the same world on
every platform and every run.
"""

import math
import numbers
from typing import Any, Sequence, TypeVar, Union

T = TypeVar("T")

UINT32_MASK = 0xFFFFFFFF
UINT32_RANGE = 4294967296.0

FNV_OFFSET_BASIS = 2166136261
FNV_PRIME = 16777619

MULBERRY_INCREMENT = 0x6D2B79F5

FALLBACK_SEED_TEXT = "default"


def _imul(a: int, b: int) -> int:
    """32-bit multiply, wrapping like a uint32 register."""
    return (a * b) & UINT32_MASK


def hash_string_to_uint32(text: str) -> int:
    """
    FNV-1a hash of the UTF-8 bytes of a string.

    Args:
        text: Any string, including the empty string

    Returns:
        Unsigned 32-bit hash value
    """

    h = FNV_OFFSET_BASIS
    for byte in text.encode("utf-8"):
        h ^= byte
        h = _imul(h, FNV_PRIME)
    return h


FALLBACK_SEED = hash_string_to_uint32(FALLBACK_SEED_TEXT)


def resolve_seed(seed: Any) -> int:
    """
    Turn a user supplied seed into an unsigned 32-bit integer.

    Integers wrap modulo 2^32, strings are hashed and finite floats are
    truncated toward zero. Anything else (None, empty strings, booleans,
    NaN, infinities, other objects) resolves to the fallback seed instead
    of raising.
    """

    if isinstance(seed, bool) or seed is None:
        return FALLBACK_SEED
    if isinstance(seed, numbers.Integral):
        return int(seed) & UINT32_MASK
    if isinstance(seed, numbers.Real):
        if not math.isfinite(seed):
            return FALLBACK_SEED
        return int(seed) & UINT32_MASK
    if isinstance(seed, str):
        if seed == "":
            return FALLBACK_SEED
        return hash_string_to_uint32(seed)
    return FALLBACK_SEED


class SeededRNG:
    """
    Reproducible stream of floats, ints and choices.

    The only state is a 32-bit counter advanced on every draw. Instances are
    passed explicitly into every generator; there is no module level
    generator.
    """

    def __init__(self, seed: Any = FALLBACK_SEED_TEXT):
        self._seed = resolve_seed(seed)
        self._state = self._seed
        self._draws = 0

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def draws(self) -> int:
        """Number of values drawn so far."""
        return self._draws

    def next(self) -> float:
        """Advance the counter and return a float in [0, 1)."""

        self._state = (self._state + MULBERRY_INCREMENT) & UINT32_MASK
        self._draws += 1

        t = self._state
        x = _imul(t ^ (t >> 15), 1 | t)
        x ^= (x + _imul(x ^ (x >> 7), 61 | x)) & UINT32_MASK
        return ((x ^ (x >> 14)) & UINT32_MASK) / UINT32_RANGE

    def float(self, min_val: float = 0.0, max_val: float = 1.0) -> float:
        """Uniform float in [min_val, max_val)."""
        return min_val + (max_val - min_val) * self.next()

    def int(self, min_inclusive: int, max_inclusive: int) -> int:
        """Uniform integer in [min_inclusive, max_inclusive]."""
        r = self.next()
        return math.floor(min_inclusive + r * (max_inclusive - min_inclusive + 1))

    def pick(self, sequence: Sequence[T]) -> T:
        """Uniform choice from a non-empty sequence."""

        if len(sequence) == 0:
            raise ValueError("Cannot pick from an empty sequence")
        return sequence[math.floor(self.next() * len(sequence))]

    def __repr__(self) -> str:
        return f"SeededRNG(seed={self._seed}, draws={self._draws})"


def parse_seed_text(text: str) -> Union[int, str]:
    """Seed typed on a command line or query string: digit strings become integers."""

    stripped = text.strip()
    if stripped.lstrip("-").isdigit():
        return int(stripped)
    return text
