"""
Zone Catalog

Single source of truth for zone queries.

The catalog is built once from static configuration and is read-only
afterwards: no registration, no removal. Every validation call shares
the same instance without locking.
"""

import json
import math
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Iterator, Optional, Union

import yaml

from .zone_data import Zone, NormalConstraint
from ..logging_utils import PlacementLogger


class ZoneCatalog:
    """
    Immutable, insertion-ordered collection of zones.

    Responsibilities:
    - Load zone definitions from manifests
    - Query zones by key, category tag, or a list of keys
    - Validate zone configuration once at load time

    Queries never raise; unknown keys simply contribute no result.
    """

    MODULE_NAME = "ZoneCatalog"

    def __init__(
        self,
        zones: Iterable[Zone] = (),
        logger: Optional[PlacementLogger] = None,
    ):
        self.logger = logger or PlacementLogger(self.MODULE_NAME)

        ordered: list[Zone] = []
        by_key: dict[str, Zone] = {}
        duplicates: list[str] = []

        for zone in zones:
            if zone.key in by_key:
                # First definition wins
                duplicates.append(zone.key)
                self.logger.warning(
                    "Duplicate zone key ignored",
                    zone_key=zone.key,
                    kept=by_key[zone.key].display_name,
                    ignored=zone.display_name,
                )
                continue
            by_key[zone.key] = zone
            ordered.append(zone)

        self._zones: tuple[Zone, ...] = tuple(ordered)
        self._by_key = MappingProxyType(by_key)
        self._duplicate_keys: tuple[str, ...] = tuple(duplicates)

        by_tag: dict[str, list[Zone]] = {}
        for zone in self._zones:
            for tag in sorted(zone.category_tags):
                by_tag.setdefault(tag, []).append(zone)
        self._by_tag = MappingProxyType({t: tuple(z) for t, z in by_tag.items()})

        self.logger.debug(
            "ZoneCatalog built",
            zone_count=len(self._zones),
            categories=sorted(self._by_tag),
        )

    # ========================================
    # LOADING
    # ========================================

    @classmethod
    def from_dict(
        cls,
        data: dict,
        logger: Optional[PlacementLogger] = None,
    ) -> "ZoneCatalog":
        """
        Build a catalog from a dictionary.

        Expected format:
        {
            "zones": [
                {
                    "key": "roof-center",
                    "display_name": "Roof Center",
                    "tags": ["roof"],
                    "bounds": {"shape": "box", "center": {...}, "size": {...}},
                    "normal_constraint": {"preferred_direction": {...}, "tolerance": 0.8}
                },
                ...
            ]
        }

        Raises:
            ValueError: if a zone record is malformed
        """
        logger = logger or PlacementLogger(cls.MODULE_NAME)
        zones = []
        for index, zone_data in enumerate(data.get("zones") or []):
            try:
                zones.append(Zone.from_dict(zone_data))
            except (KeyError, TypeError, ValueError) as e:
                logger.error(
                    "Malformed zone record",
                    index=index,
                    error=str(e),
                    suggested_fix="Check key, bounds.shape and shape dimensions",
                )
                raise ValueError(f"Malformed zone record at index {index}: {e}") from e
        return cls(zones, logger=logger)

    @classmethod
    def from_manifest(
        cls,
        manifest_path: Union[str, Path],
        logger: Optional[PlacementLogger] = None,
    ) -> "ZoneCatalog":
        """
        Load zones from a YAML/JSON manifest file.

        Raises:
            FileNotFoundError: if the manifest does not exist
            ValueError: if the manifest cannot be parsed
        """
        logger = logger or PlacementLogger(cls.MODULE_NAME)
        path = Path(manifest_path)
        if not path.exists():
            logger.error(
                "Zone manifest not found",
                path=str(path),
                suggested_fix="Create zone manifest file or check catalog.zones_manifest",
            )
            raise FileNotFoundError(f"Zone manifest not found: {path}")

        with open(path, encoding="utf-8") as f:
            try:
                if path.suffix in (".yaml", ".yml"):
                    data = yaml.safe_load(f)
                else:
                    data = json.load(f)
            except (yaml.YAMLError, json.JSONDecodeError) as e:
                logger.error("Failed to parse zone manifest", path=str(path), error=str(e))
                raise ValueError(f"Failed to parse zone manifest {path}: {e}") from e

        catalog = cls.from_dict(data or {}, logger=logger)
        logger.info(
            "Zones loaded from manifest",
            source=str(path),
            zones_loaded=len(catalog),
        )
        return catalog

    # ========================================
    # QUERIES
    # ========================================

    def by_key(self, key: str) -> Optional[Zone]:
        """Get a zone by key."""
        return self._by_key.get(key)

    def all(self) -> tuple[Zone, ...]:
        """All zones in insertion order."""
        return self._zones

    def by_category(self, tag: str) -> list[Zone]:
        """Zones carrying ``tag``, in insertion order."""
        return list(self._by_tag.get(tag, ()))

    def resolve_keys(self, keys: Iterable[str]) -> list[Zone]:
        """Resolve keys to zones in the given order, dropping unknown keys."""
        return [self._by_key[k] for k in keys if k in self._by_key]

    def unresolved_keys(self, keys: Iterable[str]) -> list[str]:
        """Keys with no matching zone (diagnostics for configuration authors)."""
        return [k for k in keys if k not in self._by_key]

    def categories(self) -> list[str]:
        return sorted(self._by_tag)

    @property
    def duplicate_keys(self) -> tuple[str, ...]:
        return self._duplicate_keys

    def __iter__(self) -> Iterator[Zone]:
        return iter(self._zones)

    def __len__(self) -> int:
        return len(self._zones)

    def __contains__(self, key: object) -> bool:
        return key in self._by_key

    # ========================================
    # VALIDATION
    # ========================================

    def validate(self) -> tuple[bool, list[str]]:
        """
        Validate zone configuration.

        Checks:
        - Keys are non-empty and unique
        - Centers are finite
        - Shape dimensions are strictly positive
        - Normal constraint tolerance lies in [0, 1]

        Returns:
            (is_valid, list of error messages)
        """
        errors: list[str] = []

        for key in self._duplicate_keys:
            errors.append(f"Duplicate zone key: {key}")

        for zone in self._zones:
            errors.extend(self._validate_zone(zone))

        if errors:
            self.logger.error(
                "Zone validation failed",
                error_count=len(errors),
                errors=errors,
            )
        else:
            self.logger.info("Zone validation passed", zone_count=len(self._zones))

        return not errors, errors

    def _validate_zone(self, zone: Zone) -> list[str]:
        errors = []
        label = zone.key or "<empty>"

        if not zone.key:
            errors.append(f"Zone has empty key: {zone.display_name}")

        if not zone.center.is_finite():
            errors.append(f"Zone {label} has a non-finite center")

        for name, value in zone.bounds.dimensions().items():
            if not math.isfinite(value) or value <= 0:
                errors.append(f"Zone {label} {name} must be positive, got {value}")

        if zone.normal_constraint is not None:
            errors.extend(self._validate_constraint(label, zone.normal_constraint))

        return errors

    @staticmethod
    def _validate_constraint(label: str, constraint: NormalConstraint) -> list[str]:
        errors = []
        if not 0.0 <= constraint.tolerance <= 1.0:
            errors.append(
                f"Zone {label} normal tolerance must be in [0, 1], got {constraint.tolerance}"
            )
        direction = constraint.preferred_direction
        if not direction.is_finite() or direction.length() == 0.0:
            errors.append(f"Zone {label} preferred direction must be a non-zero vector")
        return errors

    # ========================================
    # SERIALIZATION
    # ========================================

    def to_dict(self) -> dict:
        return {"zones": [z.to_dict() for z in self._zones]}

    def get_statistics(self) -> dict:
        shapes: dict[str, int] = {}
        for zone in self._zones:
            shapes[zone.shape.value] = shapes.get(zone.shape.value, 0) + 1
        return {
            "total_zones": len(self._zones),
            "by_shape": shapes,
            "categories": {t: len(z) for t, z in sorted(self._by_tag.items())},
            "constrained_zones": sum(1 for z in self._zones if z.normal_constraint),
            "duplicate_keys": list(self._duplicate_keys),
        }
