"""
World generation configuration.

All values are plain parameters with documented defaults. A configuration
can be built in code, from a dict, or from a JSON file, and is validated
before any random draw happens.
"""

import json
from dataclasses import dataclass, field, asdict, fields, replace
from pathlib import Path as FilePath
from typing import Any, Dict, List, Optional, Tuple, Union

from .procgen.grammar import WORLD_PARAMETERS, PATH_PARAMETERS, CORRIDOR_PARAMETERS
from .types import Landmark, LANDMARK_TYPES


class WorldConfigError(ValueError):
    """Raised when a configuration cannot produce a valid world."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("Invalid world configuration: " + "; ".join(self.errors))


@dataclass(frozen=True)
class PathSpec:
    start_x: float
    start_z: float
    steps: int
    step_len: float
    width: float = 5.0
    turn_chance: float = 0.12


@dataclass(frozen=True)
class Corridor:
    """Circular exclusion zone where scatter is thinned."""
    x: float
    z: float
    r: float

    def contains(self, x: float, z: float) -> bool:
        dx = x - self.x
        dz = z - self.z
        return dx * dx + dz * dz <= self.r * self.r


DEFAULT_PATHS = (
    PathSpec(start_x=-60, start_z=20, steps=75, step_len=7, width=5.0),
    PathSpec(start_x=40, start_z=-30, steps=75, step_len=7, width=5.0),
    PathSpec(start_x=0, start_z=0, steps=55, step_len=8, width=5.2),
)

# Kept clear around the path start areas for readability
DEFAULT_CORRIDORS = (
    Corridor(x=-60, z=20, r=22),
    Corridor(x=40, z=-30, r=22),
    Corridor(x=0, z=0, r=20),
)


@dataclass(frozen=True)
class WorldConfig:
    """
    Everything the world builder needs besides the seed.

    `bounds` (map normalization) and the patch / tree spreads are separate
    values on purpose. `landmarks=None` means the registry's default set.
    `patch_radius` and `tree_scale` are (base, span) pairs: the drawn value
    is base + next() * span.
    """
    seed: Union[str, int, None] = "default"
    world_size: float = 500.0
    bounds: float = 240.0
    patch_count: int = 70
    patch_spread: float = 350.0
    patch_radius: Tuple[float, float] = (6.0, 14.0)
    patch_color: int = 0x2B5F34
    paths: Tuple[PathSpec, ...] = DEFAULT_PATHS
    tree_count: int = 650
    tree_spread: float = 360.0
    tree_scale: Tuple[float, float] = (0.75, 0.9)
    corridors: Tuple[Corridor, ...] = DEFAULT_CORRIDORS
    thin_chance: float = 0.75
    landmarks: Optional[Tuple[Landmark, ...]] = field(default=None)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WorldConfig":
        """
        Build a configuration from plain JSON-like data.

        Missing keys take their defaults; unknown keys are rejected.
        """

        if not isinstance(data, dict):
            raise WorldConfigError([f"configuration must be an object, got {type(data).__name__}"])

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise WorldConfigError([f"unknown configuration key: {key}" for key in unknown])

        values = dict(data)
        try:
            if "paths" in values:
                values["paths"] = tuple(PathSpec(**p) for p in values["paths"])
            if "corridors" in values:
                values["corridors"] = tuple(Corridor(**c) for c in values["corridors"])
            if values.get("landmarks") is not None:
                values["landmarks"] = tuple(Landmark(**lm) for lm in values["landmarks"])
        except TypeError as e:
            raise WorldConfigError([f"malformed entry: {e}"]) from e

        for key in ("patch_radius", "tree_scale"):
            if key in values and isinstance(values[key], list):
                values[key] = tuple(values[key])

        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Plain JSON-compatible form; lists everywhere, so it survives a JSON round trip."""

        data = asdict(self)
        data["patch_radius"] = list(self.patch_radius)
        data["tree_scale"] = list(self.tree_scale)
        data["paths"] = [asdict(p) for p in self.paths]
        data["corridors"] = [asdict(c) for c in self.corridors]
        if self.landmarks is not None:
            data["landmarks"] = [asdict(lm) for lm in self.landmarks]
        return data

    def with_overrides(self, **overrides) -> "WorldConfig":
        return replace(self, **overrides)


def load_config(path: Union[str, FilePath]) -> WorldConfig:
    """Load a configuration from a JSON file."""

    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return WorldConfig.from_dict(data)


def _check_base_span(name: str, value: Any) -> List[str]:
    if not isinstance(value, (tuple, list)) or len(value) != 2:
        return [f"{name} must be a (base, span) pair"]

    spec = WORLD_PARAMETERS
    errors = []
    for i, v in enumerate(value):
        error = spec.check(f"{name}[{i}]", v, 0.0, float("inf"))
        if error:
            errors.append(error)
    if not errors and value[0] <= 0:
        errors.append(f"{name} base must be > 0, got {value[0]}")
    return errors


def validate_config(config: WorldConfig) -> List[str]:
    """
    Collect every problem with a configuration.

    Returns:
        List of error messages, empty when the configuration is usable
    """

    errors = WORLD_PARAMETERS.validate({
        name: getattr(config, name) for name in WORLD_PARAMETERS.get_param_names()
    })

    errors.extend(_check_base_span("patch_radius", config.patch_radius))
    errors.extend(_check_base_span("tree_scale", config.tree_scale))

    for i, spec in enumerate(config.paths):
        if not isinstance(spec, PathSpec):
            errors.append(f"paths[{i}] must be a PathSpec")
            continue
        for error in PATH_PARAMETERS.validate(asdict(spec)):
            errors.append(f"paths[{i}].{error}")

    for i, corridor in enumerate(config.corridors):
        if not isinstance(corridor, Corridor):
            errors.append(f"corridors[{i}] must be a Corridor")
            continue
        for error in CORRIDOR_PARAMETERS.validate(asdict(corridor)):
            errors.append(f"corridors[{i}].{error}")

    if config.landmarks is not None:
        seen = set()
        for i, lm in enumerate(config.landmarks):
            if not isinstance(lm, Landmark):
                errors.append(f"landmarks[{i}] must be a Landmark")
                continue
            if not isinstance(lm.id, str) or not lm.id:
                errors.append(f"landmarks[{i}].id must be a non-empty string, got {lm.id!r}")
            elif lm.id in seen:
                errors.append(f"duplicate landmark id: {lm.id}")
            else:
                seen.add(lm.id)
            if not isinstance(lm.name, str):
                errors.append(f"landmarks[{i}].name must be a string, got {lm.name!r}")
            if lm.type not in LANDMARK_TYPES:
                errors.append(f"landmarks[{i}] has unknown type: {lm.type}")
            for axis in ("x", "z"):
                error = CORRIDOR_PARAMETERS.check(
                    f"landmarks[{i}].{axis}", getattr(lm, axis), -float("inf"), float("inf")
                )
                if error:
                    errors.append(error)

    return errors
