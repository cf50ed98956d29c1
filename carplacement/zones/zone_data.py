"""
Zone Data Structures

Immutable data classes representing zones and their geometry.
Zones are static, author-defined primitives in the car's local frame:
- X axis: front (-) to rear (+)
- Y axis: ground (-) to roof (+), the vertical axis
- Z axis: left (-) to right (+)
"""

import math
from dataclasses import dataclass, field
from typing import Optional, Sequence, Union

import numpy as np

from .zone_types import ZoneShape


@dataclass(frozen=True)
class Vector3:
    """Immutable 3D vector."""
    x: float
    y: float
    z: float

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "z": self.z}

    @classmethod
    def from_dict(cls, data: Union[dict, Sequence[float]]) -> "Vector3":
        """Build from a mapping ``{x, y, z}`` or a 3-element sequence."""
        if isinstance(data, dict):
            return cls(
                x=float(data.get("x", 0)),
                y=float(data.get("y", 0)),
                z=float(data.get("z", 0)),
            )
        values = list(data)
        if len(values) != 3:
            raise ValueError(f"Vector3 needs 3 components, got {len(values)}: {values}")
        return cls(float(values[0]), float(values[1]), float(values[2]))

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)

    def __add__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def scale(self, factor: float) -> "Vector3":
        return Vector3(self.x * factor, self.y * factor, self.z * factor)

    def dot(self, other: "Vector3") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def length(self) -> float:
        return math.sqrt(self.dot(self))

    def is_finite(self) -> bool:
        return all(math.isfinite(v) for v in (self.x, self.y, self.z))


@dataclass(frozen=True)
class ZoneBounds:
    """
    Base zone geometry. Each shape subclass carries only its own fields.

    Dispatch from manifest data goes through ``ZoneBounds.from_dict``.
    """
    center: Vector3

    @property
    def shape(self) -> ZoneShape:
        raise NotImplementedError

    def dimensions(self) -> dict[str, float]:
        """Named size parameters, used by load-time validation."""
        raise NotImplementedError

    def to_dict(self) -> dict:
        return {"shape": self.shape.value, "center": self.center.to_dict()}

    @classmethod
    def from_dict(cls, data: dict) -> "ZoneBounds":
        shape = ZoneShape.from_string(data.get("shape", "box"))
        if "center" not in data:
            raise ValueError(f"{shape.value} bounds require 'center'")
        center = Vector3.from_dict(data["center"])

        if shape == ZoneShape.BOX:
            if "half_extents" in data:
                half_extents = Vector3.from_dict(data["half_extents"])
            elif "size" in data:
                half_extents = Vector3.from_dict(data["size"]).scale(0.5)
            else:
                raise ValueError("box bounds require 'size' or 'half_extents'")
            return BoxBounds(center=center, half_extents=half_extents)

        if "radius" not in data:
            raise ValueError(f"{shape.value} bounds require 'radius'")

        if shape == ZoneShape.SPHERE:
            return SphereBounds(center=center, radius=float(data["radius"]))

        if "height" not in data:
            raise ValueError("cylinder bounds require 'height'")
        return CylinderBounds(
            center=center,
            radius=float(data["radius"]),
            height=float(data["height"]),
        )


@dataclass(frozen=True)
class BoxBounds(ZoneBounds):
    """Axis-aligned box. ``half_extents`` is size / 2 on each axis."""
    half_extents: Vector3

    @property
    def shape(self) -> ZoneShape:
        return ZoneShape.BOX

    @property
    def size(self) -> Vector3:
        return self.half_extents.scale(2.0)

    def dimensions(self) -> dict[str, float]:
        return {
            "half_extents.x": self.half_extents.x,
            "half_extents.y": self.half_extents.y,
            "half_extents.z": self.half_extents.z,
        }

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["size"] = self.size.to_dict()
        return data


@dataclass(frozen=True)
class SphereBounds(ZoneBounds):
    radius: float

    @property
    def shape(self) -> ZoneShape:
        return ZoneShape.SPHERE

    def dimensions(self) -> dict[str, float]:
        return {"radius": self.radius}

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["radius"] = self.radius
        return data


@dataclass(frozen=True)
class CylinderBounds(ZoneBounds):
    """Upright cylinder; ``height`` spans center.y +/- height / 2."""
    radius: float
    height: float

    @property
    def shape(self) -> ZoneShape:
        return ZoneShape.CYLINDER

    def dimensions(self) -> dict[str, float]:
        return {"radius": self.radius, "height": self.height}

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["radius"] = self.radius
        data["height"] = self.height
        return data


@dataclass(frozen=True)
class NormalConstraint:
    """
    Preferred attachment direction for a zone.

    ``tolerance`` is the minimum absolute cosine similarity (0-1) between a
    surface normal and ``preferred_direction``. The direction does not need
    to be normalized.
    """
    preferred_direction: Vector3
    tolerance: float

    def to_dict(self) -> dict:
        return {
            "preferred_direction": self.preferred_direction.to_dict(),
            "tolerance": self.tolerance,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "NormalConstraint":
        return cls(
            preferred_direction=Vector3.from_dict(data["preferred_direction"]),
            tolerance=float(data["tolerance"]),
        )


@dataclass(frozen=True)
class Zone:
    """
    A static named region on the car.

    All zones have:
    - Unique key (stable across the catalog's lifetime)
    - Display name (presentation only)
    - Bounds
    - Optional normal constraint
    - Category tags (grouping/filtering only)
    """
    key: str
    display_name: str
    bounds: ZoneBounds
    normal_constraint: Optional[NormalConstraint] = None
    category_tags: frozenset[str] = field(default_factory=frozenset)

    @property
    def center(self) -> Vector3:
        return self.bounds.center

    @property
    def shape(self) -> ZoneShape:
        return self.bounds.shape

    def to_dict(self) -> dict:
        return {
            "key": self.key,
            "display_name": self.display_name,
            "bounds": self.bounds.to_dict(),
            "normal_constraint": (
                self.normal_constraint.to_dict() if self.normal_constraint else None
            ),
            "tags": sorted(self.category_tags),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Zone":
        constraint = data.get("normal_constraint")
        return cls(
            key=data["key"],
            display_name=data.get("display_name", data["key"]),
            bounds=ZoneBounds.from_dict(data["bounds"]),
            normal_constraint=NormalConstraint.from_dict(constraint) if constraint else None,
            category_tags=frozenset(data.get("tags", [])),
        )
