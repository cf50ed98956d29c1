#==============================================================================
# CarPlacement - Package Initialization
#==============================================================================
# File: __init__.py
# Description: Package initialization for the car component placement engine
#==============================================================================

"""
CarPlacement: Zone-Based Placement Validation for Car Customization

Validates where decorative components may be attached to a car body.
Zones (box, sphere, cylinder) are static configuration; assets reference
them by key; the validator accepts or rejects a candidate position and
suggests the nearest valid zone.
"""

__version__ = "0.1.0"

from .config import PlacementConfig, load_or_create_config
from .logging_utils import PlacementLogger, LogLevel
from .assets import AssetPlacementSpec, AssetCatalog, AssetCategory
from .zones import (
    Vector3,
    Zone,
    ZoneCatalog,
    PlacementValidator,
    ValidationResult,
    ValidationMode,
)
from .loader import PlacementEngine, load_engine

__all__ = [
    "PlacementConfig",
    "load_or_create_config",
    "PlacementLogger",
    "LogLevel",
    "AssetPlacementSpec",
    "AssetCatalog",
    "AssetCategory",
    "Vector3",
    "Zone",
    "ZoneCatalog",
    "PlacementValidator",
    "ValidationResult",
    "ValidationMode",
    "PlacementEngine",
    "load_engine",
]
