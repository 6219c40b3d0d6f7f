"""
Base feature generator and common utilities.
"""

from abc import ABC, abstractmethod
from typing import Any

from ...procgen.rng import SeededRNG


class FeatureGenerator(ABC):
    """
    Base class for all world feature generators.

    Generators never own a random source: the caller passes the shared
    SeededRNG in, and the order of calls decides every downstream value.
    """

    # Whether generate() advances the shared RNG
    consumes_rng = True

    @abstractmethod
    def generate(self, rng: SeededRNG, *args, **kwargs) -> Any:
        """Produce this feature's data from the shared RNG."""
        pass


def centered(rng: SeededRNG, spread: float) -> float:
    """Uniform coordinate in [-spread/2, spread/2)."""
    return (rng.next() - 0.5) * spread
