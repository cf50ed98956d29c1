"""
Geometric Predicates

Pure, stateless functions used by the placement validator:
- point-in-zone containment per shape (inclusive boundaries)
- point to zone center distance
- surface normal compatibility against a zone's normal constraint

Nothing here logs or mutates state.
"""

import math
from typing import Optional

import numpy as np

from .zone_data import (
    Vector3,
    Zone,
    ZoneBounds,
    BoxBounds,
    SphereBounds,
    CylinderBounds,
)


def point_in_zone(point: Vector3, zone: Zone) -> bool:
    """Check if a point is inside the zone's shape (boundary counts as inside)."""
    return point_in_bounds(point, zone.bounds)


def point_in_bounds(point: Vector3, bounds: ZoneBounds) -> bool:
    if isinstance(bounds, BoxBounds):
        return _box_contains(point, bounds)
    if isinstance(bounds, SphereBounds):
        return _sphere_contains(point, bounds)
    if isinstance(bounds, CylinderBounds):
        return _cylinder_contains(point, bounds)
    return False


def _box_contains(point: Vector3, bounds: BoxBounds) -> bool:
    center = bounds.center
    half = bounds.half_extents
    return (
        abs(point.x - center.x) <= half.x and
        abs(point.y - center.y) <= half.y and
        abs(point.z - center.z) <= half.z
    )


def _sphere_contains(point: Vector3, bounds: SphereBounds) -> bool:
    dx = point.x - bounds.center.x
    dy = point.y - bounds.center.y
    dz = point.z - bounds.center.z
    return dx * dx + dy * dy + dz * dz <= bounds.radius * bounds.radius


def _cylinder_contains(point: Vector3, bounds: CylinderBounds) -> bool:
    # Vertical axis is Y; radial distance is measured in the XZ plane
    dx = point.x - bounds.center.x
    dy = point.y - bounds.center.y
    dz = point.z - bounds.center.z
    return (
        dx * dx + dz * dz <= bounds.radius * bounds.radius and
        abs(dy) <= bounds.height / 2
    )


def distance_to_zone_center(point: Vector3, zone: Zone) -> float:
    """
    Euclidean distance from ``point`` to the zone center.

    This is center distance, not surface distance. For elongated boxes the
    nearest zone by center is not always the nearest by surface.
    """
    dx = point.x - zone.center.x
    dy = point.y - zone.center.y
    dz = point.z - zone.center.z
    return math.sqrt(dx * dx + dy * dy + dz * dz)


def _unit(vector: Vector3) -> Optional[np.ndarray]:
    """Normalized copy of ``vector``, or None when it has no direction."""
    arr = vector.to_array()
    norm = float(np.linalg.norm(arr))
    if not math.isfinite(norm) or norm == 0.0:
        return None
    return arr / norm


def is_normal_compatible(normal: Optional[Vector3], zone: Zone) -> bool:
    """
    Check a surface normal against the zone's normal constraint.

    Compatible when the zone has no constraint, when no normal is given, or
    when ``|n . d| >= tolerance`` for the normalized vectors. The absolute
    value accepts a direction and its exact opposite (double-sided surfaces).

    Zero-length or non-finite vectors are incompatible.
    """
    constraint = zone.normal_constraint
    if constraint is None or normal is None:
        return True

    n = _unit(normal)
    d = _unit(constraint.preferred_direction)
    if n is None or d is None:
        return False

    similarity = abs(float(np.dot(n, d)))
    return similarity >= constraint.tolerance
