"""
Parameter specification for world generation.

This module defines:
- ParameterSpec: Range validation and default extraction for scalar parameters
- WORLD_PARAMETERS: The scalar parameter ranges accepted by the world builder
"""

import math
import numbers
from typing import Dict, Any, Tuple, List, Iterable, Optional


class ParameterSpec:
    """
    Specification for scalar parameters with validation and defaults.

    Each parameter has:
    - min_val: Minimum allowed value (inclusive unless listed in strict_min)
    - max_val: Maximum allowed value (inclusive)
    - default: Default value if not specified
    """

    def __init__(
        self,
        params: Dict[str, Tuple[float, float, Any]],
        strict_min: Iterable[str] = (),
        integers: Iterable[str] = ()
    ):
        """
        Initialize parameter specification.

        Args:
            params: Dict mapping param_name -> (min_val, max_val, default)
            strict_min: Parameters whose value must be strictly above min_val
            integers: Parameters that must be whole numbers
        """
        self.params = params
        self.strict_min = frozenset(strict_min)
        self.integers = frozenset(integers)

    def validate(self, values: Dict[str, Any]) -> List[str]:
        """
        Check present parameters against their ranges.

        Missing parameters are not errors (defaults apply). NaN and
        infinities never pass.

        Returns:
            List of error messages, empty when everything is valid
        """

        errors = []
        for param_name, (min_val, max_val, _) in self.params.items():
            if param_name not in values:
                continue

            value = values[param_name]
            error = self.check(param_name, value, min_val, max_val)
            if error:
                errors.append(error)

        return errors

    def check(
        self,
        name: str,
        value: Any,
        min_val: float,
        max_val: float
    ) -> Optional[str]:
        """Return an error message for a single value, or None."""

        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            return f"{name} must be a number, got {type(value).__name__}"
        if not math.isfinite(value):
            return f"{name} must be finite, got {value}"
        if name in self.integers and value != int(value):
            return f"{name} must be a whole number, got {value}"
        if name in self.strict_min:
            if not value > min_val:
                return f"{name} must be > {min_val}, got {value}"
        elif value < min_val:
            return f"{name} must be >= {min_val}, got {value}"
        if value > max_val:
            return f"{name} must be <= {max_val}, got {value}"
        return None

    def extract_params(self, values: Dict[str, Any]) -> Dict[str, Any]:
        """Extract parameters for this spec, filling in defaults."""

        result = {}
        for param_name, (_, _, default) in self.params.items():
            result[param_name] = values.get(param_name, default)

        return result

    def get_param_names(self) -> List[str]:
        """Get list of parameter names."""
        return list(self.params.keys())

    def get_param_ranges(self) -> Dict[str, Tuple[float, float]]:
        """Get parameter ranges (min, max) for each parameter."""
        return {name: (min_val, max_val) for name, (min_val, max_val, _) in self.params.items()}


INF = float("inf")

WORLD_PARAMETERS = ParameterSpec(
    {
        "world_size": (0.0, INF, 500.0),
        "bounds": (0.0, INF, 240.0),
        "patch_count": (0, INF, 70),
        "patch_spread": (0.0, INF, 350.0),
        "patch_color": (0, 0xFFFFFF, 0x2B5F34),
        "tree_count": (0, INF, 650),
        "tree_spread": (0.0, INF, 360.0),
        "thin_chance": (0.0, 1.0, 0.75),
    },
    strict_min=("world_size", "bounds", "patch_spread", "tree_spread"),
    integers=("patch_count", "tree_count", "patch_color"),
)

PATH_PARAMETERS = ParameterSpec(
    {
        "start_x": (-INF, INF, 0.0),
        "start_z": (-INF, INF, 0.0),
        "steps": (0, INF, 75),
        "step_len": (0.0, INF, 7.0),
        "width": (0.0, INF, 5.0),
        "turn_chance": (0.0, 1.0, 0.12),
    },
    strict_min=("step_len", "width"),
    integers=("steps",),
)

CORRIDOR_PARAMETERS = ParameterSpec(
    {
        "x": (-INF, INF, 0.0),
        "z": (-INF, INF, 0.0),
        "r": (0.0, INF, 20.0),
    },
)
