"""
Interchange layer between the generator and renderers.

Converts worlds to the JSON structure renderers consume and validates it.
"""

from .world_adapter import WorldAdapter
from .json_validator import WorldValidator

__all__ = ["WorldAdapter", "WorldValidator"]
