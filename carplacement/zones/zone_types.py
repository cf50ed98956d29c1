"""
Zone Type Definitions

Strict enumeration of zone shapes and validation modes.
No ambiguity, no fallbacks.
"""

from enum import Enum


class ZoneShape(Enum):
    """
    Supported zone shapes.

    - BOX: Axis-aligned box (center + half extents)
    - SPHERE: Ball around a center point
    - CYLINDER: Upright cylinder, axis fixed to the body's vertical (Y) axis
    """
    BOX = "box"
    SPHERE = "sphere"
    CYLINDER = "cylinder"

    @classmethod
    def from_string(cls, value: str) -> "ZoneShape":
        """Parse zone shape from string (case-insensitive)."""
        normalized = value.lower().strip()
        for member in cls:
            if member.value == normalized:
                return member
        raise ValueError(
            f"Invalid zone shape: '{value}'. "
            f"Valid shapes: {[m.value for m in cls]}"
        )


class ValidationMode(Enum):
    """
    How the caller treats a rejected placement.

    STRICT: Rejected placements are blocked
    WARNING: Rejected placements are allowed with a warning

    The validator itself is always strict; the mode is caller policy.
    """
    STRICT = "strict"
    WARNING = "warning"

    @classmethod
    def from_string(cls, value: str) -> "ValidationMode":
        """Parse validation mode from string (case-insensitive)."""
        normalized = value.lower().strip()
        for member in cls:
            if member.value == normalized:
                return member
        raise ValueError(
            f"Invalid validation mode: '{value}'. "
            f"Valid modes: {[m.value for m in cls]}"
        )
