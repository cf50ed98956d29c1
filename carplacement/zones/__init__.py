"""
Zone System

Zone-based placement validation for decorative car components.

Zones are DATA, NOT LOGIC:
- Zones are static, author-defined primitives (box, sphere, cylinder)
- Assets reference zones by key
- An asset without zones may be placed anywhere

Usage:
    from carplacement.zones import ZoneCatalog, PlacementValidator, Vector3

    catalog = ZoneCatalog.from_manifest("configs/zones/car.zones.yaml")
    validator = PlacementValidator(catalog)

    result = validator.validate(asset, Vector3(0.1, 1.2, 0.0), normal=Vector3(0, 1, 0))
    if not result.accepted:
        print(result.message, result.suggested_zone_key)
"""

from .zone_types import ZoneShape, ValidationMode
from .zone_data import (
    Vector3,
    ZoneBounds,
    BoxBounds,
    SphereBounds,
    CylinderBounds,
    NormalConstraint,
    Zone,
)
from .predicates import (
    point_in_zone,
    point_in_bounds,
    distance_to_zone_center,
    is_normal_compatible,
)
from .zone_catalog import ZoneCatalog
from .validator import PlacementValidator, ValidationResult, ClosestZone

__all__ = [
    # Types
    "ZoneShape",
    "ValidationMode",
    # Geometry
    "Vector3",
    "ZoneBounds",
    "BoxBounds",
    "SphereBounds",
    "CylinderBounds",
    "NormalConstraint",
    "Zone",
    # Predicates
    "point_in_zone",
    "point_in_bounds",
    "distance_to_zone_center",
    "is_normal_compatible",
    # Catalog
    "ZoneCatalog",
    # Validation
    "PlacementValidator",
    "ValidationResult",
    "ClosestZone",
]
