"""
Engine Loader

Builds the zone catalog, asset catalog and validator from configuration.
Configuration is validated here, once, so per-frame validation calls
never need to.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .assets import AssetCatalog
from .config import PlacementConfig
from .logging_utils import PlacementLogger, get_logger
from .zones.zone_catalog import ZoneCatalog
from .zones.validator import PlacementValidator


@dataclass
class PlacementEngine:
    zones: ZoneCatalog
    assets: AssetCatalog
    validator: PlacementValidator
    issues: list[str] = field(default_factory=list)

    def get_statistics(self) -> dict:
        return {
            "zones": self.zones.get_statistics(),
            "asset_count": len(self.assets),
            "issues": list(self.issues),
        }


def load_engine(
    config: Optional[PlacementConfig] = None,
    base_dir: Optional[Path] = None,
    logger: Optional[PlacementLogger] = None,
) -> PlacementEngine:
    """
    Load manifests named by ``config`` and build the engine.

    Raises:
        FileNotFoundError: if a manifest is missing
        ValueError: if configuration or manifests are invalid and
            ``catalog.strict_validation`` is set
    """
    config = config or PlacementConfig()
    logger = logger or get_logger("PlacementEngine", config.logging)

    config_issues = config.validate()
    if config_issues:
        logger.error(
            "Invalid configuration",
            issues=config_issues,
            suggested_fix="Fix the listed fields in the placement config",
        )
        raise ValueError(f"Invalid configuration: {config_issues}")

    catalog_config = config.catalog
    zones = ZoneCatalog.from_manifest(
        catalog_config.get_zones_path(base_dir),
        logger=get_logger(ZoneCatalog.MODULE_NAME, config.logging),
    )
    assets = AssetCatalog.from_manifest(
        catalog_config.get_assets_path(base_dir),
        logger=get_logger(AssetCatalog.MODULE_NAME, config.logging),
    )

    issues: list[str] = []
    if catalog_config.validate_on_load:
        _, zone_errors = zones.validate()
        issues.extend(zone_errors)
    if catalog_config.report_unresolved_keys:
        issues.extend(assets.check_zone_references(zones))

    if issues and catalog_config.strict_validation:
        logger.critical(
            "Placement configuration rejected",
            issue_count=len(issues),
            issues=issues,
            suggested_fix="Fix zone/asset manifests or disable catalog.strict_validation",
        )
        raise ValueError(f"Placement configuration has {len(issues)} issue(s): {issues}")

    validator = PlacementValidator(
        zones,
        logger=get_logger(PlacementValidator.MODULE_NAME, config.logging),
    )
    logger.info(
        "Placement engine ready",
        zone_count=len(zones),
        asset_count=len(assets),
        issue_count=len(issues),
    )
    return PlacementEngine(zones=zones, assets=assets, validator=validator, issues=issues)
