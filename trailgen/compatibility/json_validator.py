"""
JSON format validator for world data.

Ensures world JSON matches what the renderers expect.
"""

import math
import numbers
from typing import Dict, Any, List, Tuple

from ..types import LANDMARK_TYPES


class WorldValidator:
    """
    Validates world JSON for renderer compatibility.

    Checks field presence, types and value sanity. Returns every problem
    found instead of stopping at the first one.
    """

    def __init__(self):
        self.required_fields = ["bounds", "patches", "paths", "landmarks"]
        self.required_patch_fields = ["x", "z", "r", "color"]
        self.required_landmark_fields = ["id", "name", "type", "x", "z"]
        self.required_tree_fields = ["x", "z", "scale"]
        self.valid_landmark_types = list(LANDMARK_TYPES)

    def validate(self, data: Dict[str, Any]) -> Tuple[bool, List[str]]:
        """
        Validate world JSON.

        Args:
            data: Parsed JSON data

        Returns:
            Tuple of (is_valid, error_messages)
        """

        if not isinstance(data, dict):
            return False, [f"World data must be an object, got {type(data).__name__}"]

        errors = []

        # Check required fields
        for field in self.required_fields:
            if field not in data:
                errors.append(f"Missing required field: {field}")

        if errors:
            return False, errors

        errors.extend(self._validate_bounds(data["bounds"]))
        errors.extend(self._validate_patches(data["patches"]))
        errors.extend(self._validate_paths(data["paths"]))
        errors.extend(self._validate_landmarks(data["landmarks"]))

        if "trees" in data:
            errors.extend(self._validate_records("trees", data["trees"], self.required_tree_fields))

        return len(errors) == 0, errors

    def _validate_bounds(self, bounds: Any) -> List[str]:

        if not self._is_number(bounds):
            return [f"bounds must be a finite number, got {bounds!r}"]
        if bounds <= 0:
            return [f"bounds must be positive, got {bounds}"]
        return []

    def _validate_patches(self, patches: Any) -> List[str]:

        errors = self._validate_records("patches", patches, self.required_patch_fields)
        if errors:
            return errors

        for i, patch in enumerate(patches):
            if patch["r"] <= 0:
                errors.append(f"patches[{i}].r must be positive")
            if not isinstance(patch["color"], int) or not 0 <= patch["color"] <= 0xFFFFFF:
                errors.append(f"patches[{i}].color must be a 24-bit integer")
        return errors

    def _validate_paths(self, paths: Any) -> List[str]:
        """Validate path widths and point lists."""

        if not isinstance(paths, list):
            return ["paths must be a list"]

        errors = []
        for i, path in enumerate(paths):
            if not isinstance(path, dict):
                errors.append(f"paths[{i}] must be an object")
                continue

            if "width" not in path:
                errors.append(f"paths[{i}] missing width")
            elif not self._is_number(path["width"]) or path["width"] <= 0:
                errors.append(f"paths[{i}].width must be a positive number")

            points = path.get("points")
            if not isinstance(points, list):
                errors.append(f"paths[{i}].points must be a list")
                continue
            if len(points) == 0:
                errors.append(f"paths[{i}].points cannot be empty")

            for j, pt in enumerate(points):
                if not isinstance(pt, dict) or not self._is_number(pt.get("x")) or not self._is_number(pt.get("z")):
                    errors.append(f"paths[{i}].points[{j}] must have numeric x and z")

        return errors

    def _validate_landmarks(self, landmarks: Any) -> List[str]:
        """Validate landmark records, id uniqueness and type tags."""

        errors = self._validate_records("landmarks", landmarks, self.required_landmark_fields)
        if errors:
            return errors

        seen = set()
        for i, lm in enumerate(landmarks):
            if not isinstance(lm["id"], str) or not lm["id"]:
                errors.append(f"landmarks[{i}].id must be a non-empty string")
            elif lm["id"] in seen:
                errors.append(f"Duplicate landmark id: {lm['id']}")
            seen.add(lm["id"])

            if lm["type"] not in self.valid_landmark_types:
                errors.append(
                    f"landmarks[{i}].type '{lm['type']}' is not valid "
                    f"(must be one of {', '.join(self.valid_landmark_types)})"
                )

        return errors

    def _validate_records(self, name: str, records: Any, required: List[str]) -> List[str]:
        """Common checks for lists of flat records with numeric coordinates."""

        if not isinstance(records, list):
            return [f"{name} must be a list"]

        errors = []
        for i, record in enumerate(records):
            if not isinstance(record, dict):
                errors.append(f"{name}[{i}] must be an object")
                continue
            for field in required:
                if field not in record:
                    errors.append(f"{name}[{i}] missing {field}")
                elif field in ("x", "z", "r", "scale") and not self._is_number(record[field]):
                    errors.append(f"{name}[{i}].{field} must be a finite number")

        return errors

    @staticmethod
    def _is_number(value: Any) -> bool:
        return (
            isinstance(value, numbers.Real)
            and not isinstance(value, bool)
            and math.isfinite(value)
        )
