"""
Shared fixtures for the placement engine tests.
"""

from pathlib import Path

import pytest

from carplacement.assets import AssetCatalog, AssetPlacementSpec
from carplacement.config import PlacementConfig
from carplacement.logging_utils import PlacementLogger
from carplacement.zones import ZoneCatalog, PlacementValidator

PROJECT_ROOT = Path(__file__).resolve().parent.parent
ZONES_MANIFEST = PROJECT_ROOT / "configs" / "zones" / "car.zones.yaml"
ASSETS_MANIFEST = PROJECT_ROOT / "configs" / "assets" / "car.assets.yaml"


def quiet_logger(name: str = "Test") -> PlacementLogger:
    return PlacementLogger(name, console_output=False)


def box_zone(key, center, size, tags=(), constraint=None, name=None) -> dict:
    data = {
        "key": key,
        "display_name": name or key.replace("-", " ").title(),
        "tags": list(tags),
        "bounds": {"shape": "box", "center": list(center), "size": list(size)},
    }
    if constraint:
        direction, tolerance = constraint
        data["normal_constraint"] = {
            "preferred_direction": list(direction),
            "tolerance": tolerance,
        }
    return data


def asset(asset_id="test-asset", valid=(), preferred=(), mode="strict", **kwargs) -> AssetPlacementSpec:
    return AssetPlacementSpec.from_dict({
        "asset_id": asset_id,
        "valid_zones": list(valid),
        "preferred_zones": list(preferred),
        "validation_mode": mode,
        **kwargs,
    })


@pytest.fixture
def logger() -> PlacementLogger:
    return quiet_logger()


@pytest.fixture
def car_zones() -> ZoneCatalog:
    return ZoneCatalog.from_manifest(ZONES_MANIFEST, logger=quiet_logger("ZoneCatalog"))


@pytest.fixture
def car_assets() -> AssetCatalog:
    return AssetCatalog.from_manifest(ASSETS_MANIFEST, logger=quiet_logger("AssetCatalog"))


@pytest.fixture
def car_validator(car_zones) -> PlacementValidator:
    return PlacementValidator(car_zones, logger=quiet_logger("PlacementValidator"))


@pytest.fixture
def quiet_config() -> PlacementConfig:
    config = PlacementConfig()
    config.logging.console_output = False
    return config
