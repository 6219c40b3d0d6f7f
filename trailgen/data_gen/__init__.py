"""
Batch world generation.

Generates worlds for many seeds by:
1. Validating the configuration once
2. Building each world with the composer
3. Validating the renderer JSON
4. Writing JSON (and optional map images) plus a manifest with analysis
"""

from .generator import WorldDatasetGenerator, main
from .validate_determinism import check_seed

__all__ = ["WorldDatasetGenerator", "check_seed", "main"]
