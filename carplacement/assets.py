"""
Asset Descriptors

Placeable decorative components and the zones they may occupy.
Zone association is by key, so asset and zone manifests can be edited
independently of each other and of the code.
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, Iterator, Optional, Union, TYPE_CHECKING

import yaml

from .logging_utils import PlacementLogger
from .zones.zone_types import ValidationMode

if TYPE_CHECKING:
    from .zones.zone_catalog import ZoneCatalog


class AssetCategory(Enum):
    SPOILERS = "spoilers"
    DECALS = "decals"
    ACCESSORIES = "accessories"
    LIGHTS = "lights"
    WHEELS = "wheels"
    ENGINE = "engine"
    INTERIOR = "interior"
    STYLING = "styling"

    @classmethod
    def from_string(cls, value: str) -> "AssetCategory":
        """Parse asset category from string (case-insensitive)."""
        normalized = value.lower().strip()
        for member in cls:
            if member.value == normalized:
                return member
        raise ValueError(
            f"Invalid asset category: '{value}'. "
            f"Valid categories: {[m.value for m in cls]}"
        )


@dataclass(frozen=True)
class AssetPlacementSpec:
    """
    How one placeable component relates to zones.

    - valid_zone_keys: zones the asset may occupy (empty = unrestricted)
    - preferred_zone_keys: best-fit subset of valid_zone_keys
      (empty = all valid zones)
    - validation_mode: caller policy for rejected placements
    - marker_name: model marker the component auto-attaches to, if any
    """
    asset_id: str
    name: str
    category: AssetCategory = AssetCategory.DECALS
    valid_zone_keys: tuple[str, ...] = ()
    preferred_zone_keys: tuple[str, ...] = ()
    validation_mode: ValidationMode = ValidationMode.STRICT
    marker_name: Optional[str] = None
    scale: float = 1.0
    color: str = "#ffffff"
    description: str = ""

    @property
    def is_unrestricted(self) -> bool:
        return not self.valid_zone_keys

    @property
    def effective_preferred_zone_keys(self) -> tuple[str, ...]:
        return self.preferred_zone_keys or self.valid_zone_keys

    def to_dict(self) -> dict:
        return {
            "asset_id": self.asset_id,
            "name": self.name,
            "category": self.category.value,
            "valid_zones": list(self.valid_zone_keys),
            "preferred_zones": list(self.preferred_zone_keys),
            "validation_mode": self.validation_mode.value,
            "marker_name": self.marker_name,
            "scale": self.scale,
            "color": self.color,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AssetPlacementSpec":
        return cls(
            asset_id=data["asset_id"],
            name=data.get("name", data["asset_id"]),
            category=AssetCategory.from_string(data.get("category", "decals")),
            valid_zone_keys=tuple(data.get("valid_zones") or ()),
            preferred_zone_keys=tuple(data.get("preferred_zones") or ()),
            validation_mode=ValidationMode.from_string(data.get("validation_mode", "strict")),
            marker_name=data.get("marker_name"),
            scale=float(data.get("scale", 1.0)),
            color=data.get("color", "#ffffff"),
            description=data.get("description", ""),
        )


class AssetCatalog:
    """
    Ordered, read-only collection of asset descriptors.

    Built once from static configuration, like the zone catalog.
    """

    MODULE_NAME = "AssetCatalog"

    def __init__(
        self,
        assets: Iterable[AssetPlacementSpec] = (),
        logger: Optional[PlacementLogger] = None,
    ):
        self.logger = logger or PlacementLogger(self.MODULE_NAME)
        ordered: list[AssetPlacementSpec] = []
        by_id: dict[str, AssetPlacementSpec] = {}
        for asset in assets:
            if asset.asset_id in by_id:
                self.logger.warning("Duplicate asset id ignored", asset_id=asset.asset_id)
                continue
            by_id[asset.asset_id] = asset
            ordered.append(asset)
        self._assets = tuple(ordered)
        self._by_id = by_id

    @classmethod
    def from_dict(
        cls,
        data: dict,
        logger: Optional[PlacementLogger] = None,
    ) -> "AssetCatalog":
        """
        Build from ``{"assets": [ {asset record}, ... ]}``.

        Raises:
            ValueError: if an asset record is malformed
        """
        logger = logger or PlacementLogger(cls.MODULE_NAME)
        assets = []
        for index, asset_data in enumerate(data.get("assets") or []):
            try:
                assets.append(AssetPlacementSpec.from_dict(asset_data))
            except (KeyError, TypeError, ValueError) as e:
                logger.error(
                    "Malformed asset record",
                    index=index,
                    error=str(e),
                    suggested_fix="Check asset_id, category and validation_mode",
                )
                raise ValueError(f"Malformed asset record at index {index}: {e}") from e
        return cls(assets, logger=logger)

    @classmethod
    def from_manifest(
        cls,
        manifest_path: Union[str, Path],
        logger: Optional[PlacementLogger] = None,
    ) -> "AssetCatalog":
        """
        Load assets from a YAML/JSON manifest file.

        Raises:
            FileNotFoundError: if the manifest does not exist
            ValueError: if the manifest cannot be parsed
        """
        logger = logger or PlacementLogger(cls.MODULE_NAME)
        path = Path(manifest_path)
        if not path.exists():
            logger.error(
                "Asset manifest not found",
                path=str(path),
                suggested_fix="Create asset manifest file or check catalog.assets_manifest",
            )
            raise FileNotFoundError(f"Asset manifest not found: {path}")

        with open(path, encoding="utf-8") as f:
            try:
                if path.suffix in (".yaml", ".yml"):
                    data = yaml.safe_load(f)
                else:
                    data = json.load(f)
            except (yaml.YAMLError, json.JSONDecodeError) as e:
                logger.error("Failed to parse asset manifest", path=str(path), error=str(e))
                raise ValueError(f"Failed to parse asset manifest {path}: {e}") from e

        catalog = cls.from_dict(data or {}, logger=logger)
        logger.info("Assets loaded from manifest", source=str(path), assets_loaded=len(catalog))
        return catalog

    def by_id(self, asset_id: str) -> Optional[AssetPlacementSpec]:
        return self._by_id.get(asset_id)

    def all(self) -> tuple[AssetPlacementSpec, ...]:
        return self._assets

    def by_category(self, category: AssetCategory) -> list[AssetPlacementSpec]:
        return [a for a in self._assets if a.category == category]

    def by_marker(self, marker_name: str) -> Optional[AssetPlacementSpec]:
        """First asset attached to ``marker_name``."""
        for asset in self._assets:
            if asset.marker_name == marker_name:
                return asset
        return None

    def __iter__(self) -> Iterator[AssetPlacementSpec]:
        return iter(self._assets)

    def __len__(self) -> int:
        return len(self._assets)

    def check_zone_references(self, zones: "ZoneCatalog") -> list[str]:
        """
        Diagnostics for zone keys that the zone catalog cannot resolve.

        The validator drops unknown keys silently; this is the place to
        surface them once at load time.
        """
        issues = []
        for asset in self._assets:
            for key in zones.unresolved_keys(asset.valid_zone_keys):
                issues.append(f"Asset {asset.asset_id} references unknown zone '{key}'")
            valid = set(asset.valid_zone_keys)
            for key in asset.preferred_zone_keys:
                if key not in valid:
                    issues.append(
                        f"Asset {asset.asset_id} prefers zone '{key}' that is not in its valid zones"
                    )
        for issue in issues:
            self.logger.warning("Unresolved zone reference", issue=issue)
        return issues
