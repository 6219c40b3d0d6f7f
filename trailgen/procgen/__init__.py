"""
Seeded randomness and parameter specifications.

This module provides:
- SeededRNG: Reproducible float / int / choice stream from a seed
- hash_string_to_uint32: Stable FNV-1a hash for string seeds
- ParameterSpec: Range validation for generation parameters
"""

from .rng import SeededRNG, hash_string_to_uint32, resolve_seed, parse_seed_text, FALLBACK_SEED
from .grammar import ParameterSpec, WORLD_PARAMETERS, PATH_PARAMETERS, CORRIDOR_PARAMETERS

__all__ = [
    "SeededRNG",
    "hash_string_to_uint32",
    "resolve_seed",
    "parse_seed_text",
    "FALLBACK_SEED",
    "ParameterSpec",
    "WORLD_PARAMETERS",
    "PATH_PARAMETERS",
    "CORRIDOR_PARAMETERS"
]
