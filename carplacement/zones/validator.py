"""
Placement Validator

Decides whether a candidate position (and optional surface normal) is an
acceptable placement for an asset, and suggests the nearest valid zone
when it is not.

The verdict is always strict. ValidationMode.WARNING is applied by the
caller, which may let a rejected drop through with a warning.
"""

import math
from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

from .zone_catalog import ZoneCatalog
from .zone_data import Vector3, Zone
from .predicates import (
    point_in_zone,
    distance_to_zone_center,
    is_normal_compatible,
)
from ..logging_utils import PlacementLogger

if TYPE_CHECKING:
    from ..assets import AssetPlacementSpec


UNRESTRICTED_MESSAGE = "No placement restrictions"
PLACED_MESSAGE = "Placed in {name}"
REJECTED_MESSAGE = "Not in valid zone. Try {name}"
FALLBACK_SUGGESTION = "a valid zone"

# Distance reported when no valid zone resolved
UNBOUNDED_DISTANCE = math.inf


@dataclass(frozen=True)
class ValidationResult:
    """Verdict for one candidate placement."""
    accepted: bool
    matched_zone_key: Optional[str]
    distance: float  # to matched zone center, or nearest valid zone center
    message: str
    suggested_zone_key: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "accepted": self.accepted,
            "matched_zone_key": self.matched_zone_key,
            "distance": self.distance,
            "suggested_zone_key": self.suggested_zone_key,
            "message": self.message,
        }


@dataclass(frozen=True)
class ClosestZone:
    """Nearest valid zone and its center distance."""
    zone: Zone
    distance: float

    def to_dict(self) -> dict:
        return {"zone_key": self.zone.key, "distance": self.distance}


class PlacementValidator:
    """
    Validates asset placements against the zone catalog.

    Shares the catalog read-only; holds no per-call state, so identical
    arguments always give identical results.
    """

    MODULE_NAME = "PlacementValidator"

    def __init__(
        self,
        catalog: ZoneCatalog,
        logger: Optional[PlacementLogger] = None,
    ):
        self.catalog = catalog
        self.logger = logger or PlacementLogger(self.MODULE_NAME)

        self.logger.log_init(zone_count=len(catalog))

    def valid_zones_for_asset(self, asset: "AssetPlacementSpec") -> list[Zone]:
        """Zones the asset may occupy, in declared order (unknown keys dropped)."""
        return self.catalog.resolve_keys(asset.valid_zone_keys)

    def preferred_zones_for_asset(self, asset: "AssetPlacementSpec") -> list[Zone]:
        """Best-fit zones; all valid zones when none are preferred."""
        return self.catalog.resolve_keys(asset.effective_preferred_zone_keys)

    def find_zones_at_point(self, point: Vector3) -> list[Zone]:
        """All catalog zones containing ``point``, regardless of asset."""
        return [z for z in self.catalog if point_in_zone(point, z)]

    def closest_valid_zone(
        self,
        asset: "AssetPlacementSpec",
        position: Vector3,
    ) -> Optional[ClosestZone]:
        """
        Nearest valid zone by center distance.

        Ties keep the zone declared first. None when the asset is
        unrestricted or none of its keys resolve.
        """
        closest: Optional[ClosestZone] = None
        for zone in self.valid_zones_for_asset(asset):
            distance = distance_to_zone_center(position, zone)
            if closest is None or distance < closest.distance:
                closest = ClosestZone(zone=zone, distance=distance)
        return closest

    def validate(
        self,
        asset: "AssetPlacementSpec",
        position: Vector3,
        normal: Optional[Vector3] = None,
    ) -> ValidationResult:
        """
        Validate a candidate placement.

        Args:
            asset: Asset being placed
            position: Candidate position in the car's local frame
            normal: Optional surface normal at the candidate position

        Returns:
            ValidationResult. Never raises for degenerate input.
        """
        self.logger.log_input(
            "placement candidate",
            asset_id=asset.asset_id,
            position=position.to_dict(),
            normal=normal.to_dict() if normal else None,
        )

        if asset.is_unrestricted:
            result = ValidationResult(
                accepted=True,
                matched_zone_key=None,
                distance=0.0,
                message=UNRESTRICTED_MESSAGE,
            )
            self.logger.log_output("unrestricted", asset_id=asset.asset_id)
            return result

        valid_zones = self.valid_zones_for_asset(asset)
        containing = [z for z in valid_zones if point_in_zone(position, z)]

        if containing:
            if normal is not None:
                # Stable: compatible zones first, declared order within each group
                containing = sorted(
                    containing,
                    key=lambda z: not is_normal_compatible(normal, z),
                )
            match = containing[0]
            result = ValidationResult(
                accepted=True,
                matched_zone_key=match.key,
                distance=distance_to_zone_center(position, match),
                message=PLACED_MESSAGE.format(name=match.display_name),
            )
        else:
            closest = self.closest_valid_zone(asset, position)
            if closest is None:
                result = ValidationResult(
                    accepted=False,
                    matched_zone_key=None,
                    distance=UNBOUNDED_DISTANCE,
                    message=REJECTED_MESSAGE.format(name=FALLBACK_SUGGESTION),
                )
            else:
                result = ValidationResult(
                    accepted=False,
                    matched_zone_key=None,
                    distance=closest.distance,
                    message=REJECTED_MESSAGE.format(name=closest.zone.display_name),
                    suggested_zone_key=closest.zone.key,
                )

        self.logger.log_output("validation result", asset_id=asset.asset_id, result=result)
        return result
