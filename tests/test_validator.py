"""
Placement Validator Tests

End-to-end verdicts: unrestricted assets, matches, rejections with
suggestions, normal-based tie breaking and the nearest-zone search.
"""

import logging
import math

import pytest

from carplacement.zones import (
    PlacementValidator,
    ValidationResult,
    Vector3,
    ZoneCatalog,
)

from conftest import asset, box_zone, quiet_logger

logging.basicConfig(level=logging.INFO, format='[%(levelname)s] %(message)s')
logger = logging.getLogger(__name__)


def validator_for(*zones) -> PlacementValidator:
    catalog = ZoneCatalog.from_dict({"zones": list(zones)}, logger=quiet_logger())
    return PlacementValidator(catalog, logger=quiet_logger())


ROOF_CENTER = box_zone("roof-center", (0.1, 1.2, 0.0), (1.0, 0.3, 1.0), name="Roof Center")


@pytest.mark.parametrize("position", [
    Vector3(0.0, 0.0, 0.0),
    Vector3(100.0, -50.0, 3.0),
    Vector3(math.inf, 0.0, 0.0),
])
def test_unrestricted_asset_is_always_accepted(position) -> None:
    validator = validator_for(ROOF_CENTER)
    result = validator.validate(asset(valid=()), position, Vector3(0.0, 0.0, 0.0))
    assert result == ValidationResult(
        accepted=True,
        matched_zone_key=None,
        distance=0.0,
        message="No placement restrictions",
    )


def test_position_at_zone_center_is_matched() -> None:
    validator = validator_for(ROOF_CENTER)
    result = validator.validate(asset(valid=["roof-center"]), Vector3(0.1, 1.2, 0.0))

    assert result.accepted
    assert result.matched_zone_key == "roof-center"
    assert result.distance == 0.0
    assert result.suggested_zone_key is None
    assert result.message == "Placed in Roof Center"
    logger.info("  PASS: Center placement matched")


def test_far_position_is_rejected_with_suggestion() -> None:
    validator = validator_for(ROOF_CENTER)
    result = validator.validate(asset(valid=["roof-center"]), Vector3(5.0, 5.0, 5.0))

    expected = math.sqrt((5.0 - 0.1) ** 2 + (5.0 - 1.2) ** 2 + 5.0 ** 2)
    assert not result.accepted
    assert result.matched_zone_key is None
    assert result.suggested_zone_key == "roof-center"
    assert result.distance == pytest.approx(expected)
    assert result.message == "Not in valid zone. Try Roof Center"


def test_unresolved_keys_reject_without_suggestion() -> None:
    """
    Validates:
        - An asset whose zone keys all miss the catalog is rejected
        - No suggestion is available and the distance is unbounded
    """
    validator = validator_for(ROOF_CENTER)
    result = validator.validate(asset(valid=["renamed-zone", "old-zone"]), Vector3(0.1, 1.2, 0.0))

    assert not result.accepted
    assert result.matched_zone_key is None
    assert result.suggested_zone_key is None
    assert math.isinf(result.distance)
    assert result.message == "Not in valid zone. Try a valid zone"


def test_unknown_keys_are_ignored_alongside_known_ones() -> None:
    validator = validator_for(ROOF_CENTER)
    result = validator.validate(asset(valid=["renamed-zone", "roof-center"]), Vector3(0.1, 1.2, 0.0))
    assert result.accepted
    assert result.matched_zone_key == "roof-center"


def test_empty_catalog_rejects_restricted_asset() -> None:
    validator = PlacementValidator(ZoneCatalog(logger=quiet_logger()), logger=quiet_logger())
    result = validator.validate(asset(valid=["roof-center"]), Vector3(0.0, 0.0, 0.0))
    assert not result.accepted
    assert result.suggested_zone_key is None


def overlapping_validator() -> PlacementValidator:
    # Same box; "top" prefers +Y normals, "side" prefers +X normals
    return validator_for(
        box_zone("top", (0, 0, 0), (2, 2, 2), constraint=((0, 1, 0), 0.9), name="Top"),
        box_zone("side", (0, 0, 0), (2, 2, 2), constraint=((1, 0, 0), 0.9), name="Side"),
    )


def test_normal_selects_compatible_zone_listed_second() -> None:
    """
    Validates:
        - When the point lies in two valid zones, the one whose normal
          constraint is satisfied wins even if listed second
    """
    validator = overlapping_validator()
    spec = asset(valid=["top", "side"])

    result = validator.validate(spec, Vector3(0.0, 0.0, 0.0), Vector3(-1.0, 0.0, 0.0))
    assert result.matched_zone_key == "side"
    assert result.message == "Placed in Side"
    logger.info("  PASS: Normal-compatible zone selected")


def test_declared_order_breaks_normal_ties() -> None:
    validator = overlapping_validator()
    spec = asset(valid=["top", "side"])

    assert validator.validate(spec, Vector3(0, 0, 0)).matched_zone_key == "top"
    assert validator.validate(spec, Vector3(0, 0, 0), Vector3(0, 1, 0)).matched_zone_key == "top"
    # Compatible with neither: still first declared
    assert validator.validate(spec, Vector3(0, 0, 0), Vector3(0, 0, 1)).matched_zone_key == "top"
    # Degenerate normal is incompatible with both
    assert validator.validate(spec, Vector3(0, 0, 0), Vector3(0, 0, 0)).matched_zone_key == "top"


def test_incompatible_normal_does_not_reject_contained_point() -> None:
    validator = overlapping_validator()
    result = validator.validate(asset(valid=["top"]), Vector3(0.5, 0.5, 0.5), Vector3(0, 0, 1))
    assert result.accepted
    assert result.matched_zone_key == "top"
    assert result.distance == pytest.approx(math.sqrt(0.75))


def test_closest_valid_zone_prefers_nearest_then_first_declared() -> None:
    validator = validator_for(
        box_zone("left", (-1, 0, 0), (0.2, 0.2, 0.2)),
        box_zone("right", (1, 0, 0), (0.2, 0.2, 0.2)),
        box_zone("far", (10, 0, 0), (0.2, 0.2, 0.2)),
    )

    nearest = validator.closest_valid_zone(asset(valid=["far", "right"]), Vector3(0.5, 0, 0))
    assert nearest.zone.key == "right"
    assert nearest.distance == pytest.approx(0.5)

    # Equidistant: first in the asset's declared order
    tie_point = Vector3(0.0, 5.0, 0.0)
    assert validator.closest_valid_zone(asset(valid=["left", "right"]), tie_point).zone.key == "left"
    assert validator.closest_valid_zone(asset(valid=["right", "left"]), tie_point).zone.key == "right"

    assert validator.closest_valid_zone(asset(valid=()), tie_point) is None
    assert validator.closest_valid_zone(asset(valid=["missing"]), tie_point) is None


def test_nearest_uses_center_distance_not_surface_distance() -> None:
    """
    Known approximation: ranking uses zone centers. A long flat box whose
    surface is closest still loses to a small zone whose center is nearer.
    """
    validator = validator_for(
        box_zone("long-strip", (0, 0, 0), (10.0, 0.2, 0.2), name="Long Strip"),
        box_zone("badge", (2, 2, 0), (0.2, 0.2, 0.2), name="Badge"),
    )
    result = validator.validate(asset(valid=["long-strip", "badge"]), Vector3(4.5, 0.5, 0.0))

    assert not result.accepted
    assert result.suggested_zone_key == "badge"
    assert result.distance == pytest.approx(math.sqrt(2.5 ** 2 + 1.5 ** 2))


def test_validate_is_repeatable() -> None:
    validator = overlapping_validator()
    spec = asset(valid=["top", "side", "missing"])
    for position in (Vector3(0, 0, 0), Vector3(3, -2, 7)):
        first = validator.validate(spec, position, Vector3(1, 0, 0))
        second = validator.validate(spec, position, Vector3(1, 0, 0))
        assert first == second
        assert first.distance.hex() == second.distance.hex()


def test_warning_mode_does_not_soften_verdict() -> None:
    validator = validator_for(ROOF_CENTER)
    result = validator.validate(asset(valid=["roof-center"], mode="warning"), Vector3(5, 5, 5))
    assert not result.accepted


def test_zone_helpers_on_car_catalog(car_validator, car_assets) -> None:
    """
    Validates:
        - Zones at the roof center point
        - Preferred zones fall back to valid zones
        - Shipped assets validate at their zone centers
    """
    assert [z.key for z in car_validator.find_zones_at_point(Vector3(0.1, 1.2, 0.0))] == ["roof-center"]
    assert car_validator.find_zones_at_point(Vector3(0.0, 10.0, 0.0)) == []

    spec = asset(valid=["hood-left", "hood-right"], preferred=())
    assert [z.key for z in car_validator.preferred_zones_for_asset(spec)] == ["hood-left", "hood-right"]
    spec = asset(valid=["hood-left", "hood-right"], preferred=["hood-right"])
    assert [z.key for z in car_validator.preferred_zones_for_asset(spec)] == ["hood-right"]
    assert [z.key for z in car_validator.valid_zones_for_asset(spec)] == ["hood-left", "hood-right"]

    for item in car_assets:
        zone = car_validator.catalog.by_key(item.valid_zone_keys[0])
        result = car_validator.validate(item, zone.center)
        assert result.accepted, f"{item.asset_id} rejected at its own zone center"
        assert result.distance == 0.0


def test_result_serializes_to_dict() -> None:
    validator = validator_for(ROOF_CENTER)
    data = validator.validate(asset(valid=["roof-center"]), Vector3(5, 5, 5)).to_dict()
    assert data["accepted"] is False
    assert data["suggested_zone_key"] == "roof-center"
    assert data["message"] == "Not in valid zone. Try Roof Center"
