"""
Zone Catalog Tests

Loading, ordered queries, silent key resolution and load-time validation.
"""

import json
import logging

import pytest

from carplacement.zones import ZoneCatalog, ZoneShape

from conftest import ZONES_MANIFEST, box_zone, quiet_logger

logging.basicConfig(level=logging.INFO, format='[%(levelname)s] %(message)s')
logger = logging.getLogger(__name__)


def small_catalog() -> ZoneCatalog:
    return ZoneCatalog.from_dict({
        "zones": [
            box_zone("roof-center", (0.1, 1.2, 0.0), (1.0, 0.3, 1.0), tags=["roof"]),
            box_zone("hood-center", (-1.1, 0.75, 0.0), (0.8, 0.5, 1.2), tags=["hood"]),
            box_zone("roof-rear", (0.7, 1.2, 0.0), (0.6, 0.5, 1.0), tags=["roof", "rear"]),
        ]
    }, logger=quiet_logger())


def test_shipped_manifest_loads() -> None:
    """
    Validates:
        - All car zones load from the YAML manifest
        - Box and sphere shapes are both present
        - Category tags group zones
    """
    catalog = ZoneCatalog.from_manifest(ZONES_MANIFEST, logger=quiet_logger())
    assert len(catalog) == 23, f"Expected 23 car zones, got {len(catalog)}"
    assert catalog.by_key("wheel-front-left").shape == ZoneShape.SPHERE
    assert catalog.by_key("roof-center").shape == ZoneShape.BOX
    assert [z.key for z in catalog.by_category("roof")] == ["roof-center", "roof-front", "roof-rear"]
    assert len(catalog.by_category("wheels")) == 4
    assert catalog.categories() == ["front", "hood", "rear", "roof", "side", "undercar", "wheels"]

    valid, errors = catalog.validate()
    assert valid, f"Shipped zones failed validation: {errors}"
    logger.info(f"  PASS: Loaded {len(catalog)} zones")


def test_queries_preserve_insertion_order() -> None:
    catalog = small_catalog()
    assert [z.key for z in catalog.all()] == ["roof-center", "hood-center", "roof-rear"]
    assert [z.key for z in catalog] == ["roof-center", "hood-center", "roof-rear"]
    assert [z.key for z in catalog.by_category("roof")] == ["roof-center", "roof-rear"]
    assert catalog.by_category("wheels") == []


def test_by_key_returns_none_for_unknown_key() -> None:
    catalog = small_catalog()
    assert catalog.by_key("hood-center").display_name == "Hood Center"
    assert catalog.by_key("spoiler-mount") is None
    assert "hood-center" in catalog
    assert "spoiler-mount" not in catalog


def test_resolve_keys_drops_unknown_keys_silently() -> None:
    catalog = small_catalog()
    resolved = catalog.resolve_keys(["roof-rear", "renamed-zone", "roof-center"])
    assert [z.key for z in resolved] == ["roof-rear", "roof-center"], "Requested order is kept"
    assert catalog.resolve_keys([]) == []
    assert catalog.resolve_keys(["nope"]) == []
    assert catalog.unresolved_keys(["roof-rear", "renamed-zone"]) == ["renamed-zone"]


def test_duplicate_keys_keep_first_definition() -> None:
    log = quiet_logger()
    catalog = ZoneCatalog.from_dict({
        "zones": [
            box_zone("roof-center", (0.0, 0.0, 0.0), (1.0, 1.0, 1.0), name="First"),
            box_zone("roof-center", (5.0, 5.0, 5.0), (1.0, 1.0, 1.0), name="Second"),
        ]
    }, logger=log)
    assert len(catalog) == 1
    assert catalog.by_key("roof-center").display_name == "First"
    assert catalog.duplicate_keys == ("roof-center",)
    assert len(log.get_entries()) >= 1

    valid, errors = catalog.validate()
    assert not valid
    assert errors == ["Duplicate zone key: roof-center"]


def test_validate_reports_invariant_violations() -> None:
    """
    Validates:
        - Non-positive dimensions are reported
        - Tolerance outside [0, 1] is reported
        - Zero preferred direction is reported
    """
    catalog = ZoneCatalog.from_dict({
        "zones": [
            box_zone("flat", (0, 0, 0), (1.0, 0.0, 1.0)),
            {"key": "ball", "bounds": {"shape": "sphere", "center": [0, 0, 0], "radius": -1}},
            {"key": "can", "bounds": {"shape": "cylinder", "center": [0, 0, 0], "radius": 1, "height": 0}},
            box_zone("loose", (0, 0, 0), (1, 1, 1), constraint=((0, 1, 0), 1.5)),
            box_zone("pointless", (0, 0, 0), (1, 1, 1), constraint=((0, 0, 0), 0.5)),
        ]
    }, logger=quiet_logger())

    valid, errors = catalog.validate()
    assert not valid
    assert len(errors) == 5, errors
    assert any("flat half_extents.y" in e for e in errors)
    assert any("ball radius" in e for e in errors)
    assert any("can height" in e for e in errors)
    assert any("loose normal tolerance" in e for e in errors)
    assert any("pointless preferred direction" in e for e in errors)


def test_cylinder_and_sequence_vectors_load() -> None:
    catalog = ZoneCatalog.from_dict({
        "zones": [{
            "key": "antenna",
            "display_name": "Antenna Mount",
            "bounds": {"shape": "Cylinder", "center": [0.4, 1.35, 0.0], "radius": 0.1, "height": 0.3},
        }]
    }, logger=quiet_logger())
    zone = catalog.by_key("antenna")
    assert zone.shape == ZoneShape.CYLINDER
    assert zone.bounds.radius == 0.1
    assert zone.bounds.height == 0.3
    assert zone.normal_constraint is None
    assert zone.category_tags == frozenset()


def test_malformed_records_raise_value_error() -> None:
    with pytest.raises(ValueError):
        ZoneCatalog.from_dict({"zones": [{"key": "x", "bounds": {"shape": "cone", "center": [0, 0, 0]}}]},
                              logger=quiet_logger())
    with pytest.raises(ValueError):
        ZoneCatalog.from_dict({"zones": [{"key": "x", "bounds": {"shape": "sphere", "center": [0, 0, 0]}}]},
                              logger=quiet_logger())
    with pytest.raises(ValueError):
        ZoneCatalog.from_dict({"zones": [{"display_name": "No key", "bounds": {"shape": "box"}}]},
                              logger=quiet_logger())


def test_missing_manifest_raises_file_not_found(tmp_path) -> None:
    log = quiet_logger()
    with pytest.raises(FileNotFoundError):
        ZoneCatalog.from_manifest(tmp_path / "missing.yaml", logger=log)
    assert log.get_error_count() == 1


def test_json_manifest_round_trips_to_dict(tmp_path) -> None:
    source = small_catalog()
    path = tmp_path / "zones.json"
    path.write_text(json.dumps(source.to_dict()), encoding="utf-8")

    loaded = ZoneCatalog.from_manifest(path, logger=quiet_logger())
    assert [z.key for z in loaded] == [z.key for z in source]
    assert loaded.by_key("roof-rear") == source.by_key("roof-rear")


def test_empty_catalog_is_valid_and_queryable() -> None:
    catalog = ZoneCatalog(logger=quiet_logger())
    assert len(catalog) == 0
    assert catalog.by_key("anything") is None
    assert catalog.resolve_keys(["a", "b"]) == []
    assert catalog.validate() == (True, [])
    assert catalog.get_statistics()["total_zones"] == 0
