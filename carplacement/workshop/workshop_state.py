"""
Workshop State

Drag bookkeeping and the set of components placed on the car.

While an asset is dragged over the car, every hover update with a known
world position re-runs the placement validator and keeps the verdict on
the drag state for UI hinting. On drop, the asset's validation mode
decides what a rejected verdict means:
- STRICT: the drop is refused
- WARNING: the component is placed and the rejection message kept as a warning
"""

import itertools
from dataclasses import dataclass, field, replace
from typing import Optional

from .observable import Observable
from ..assets import AssetPlacementSpec
from ..config import WorkshopConfig
from ..logging_utils import PlacementLogger
from ..zones.validator import PlacementValidator, ValidationResult
from ..zones.zone_data import Vector3
from ..zones.zone_types import ValidationMode


@dataclass(frozen=True)
class DragState:
    is_dragging: bool = False
    asset: Optional[AssetPlacementSpec] = None
    mouse_position: tuple[float, float] = (0.0, 0.0)
    world_position: Optional[Vector3] = None
    surface_normal: Optional[Vector3] = None
    validation_result: Optional[ValidationResult] = None


IDLE_DRAG = DragState()


@dataclass(frozen=True)
class PlacedAsset:
    """A component instance placed on the car."""
    placement_id: str
    asset_id: str
    position: Vector3
    rotation: Vector3
    scale: float
    color: str
    zone_key: Optional[str] = None
    warning: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "placement_id": self.placement_id,
            "asset_id": self.asset_id,
            "position": self.position.to_dict(),
            "rotation": self.rotation.to_dict(),
            "scale": self.scale,
            "color": self.color,
            "zone_key": self.zone_key,
            "warning": self.warning,
        }


@dataclass
class CarState:
    rotation: float = 0.0
    color: str = "#1a1a2e"
    placed_assets: list[PlacedAsset] = field(default_factory=list)


def allows_drop(asset: AssetPlacementSpec, result: ValidationResult) -> bool:
    """Caller-side mode policy: warning-mode assets may drop anywhere."""
    return result.accepted or asset.validation_mode == ValidationMode.WARNING


class WorkshopState(Observable):
    """
    Explicit state container for the car workshop UI.

    Every mutation notifies subscribers.
    """

    MODULE_NAME = "WorkshopState"

    def __init__(
        self,
        validator: PlacementValidator,
        config: Optional[WorkshopConfig] = None,
        logger: Optional[PlacementLogger] = None,
    ):
        super().__init__()
        self.validator = validator
        self.config = config or WorkshopConfig()
        self.logger = logger or PlacementLogger(self.MODULE_NAME)

        self.drag: DragState = IDLE_DRAG
        self.car = CarState(color=self.config.car_color)
        self.selected_placement_id: Optional[str] = None
        self.show_grid = self.config.show_grid
        self.auto_rotate = self.config.auto_rotate

        self._placement_counter = itertools.count(1)

    @property
    def placed_assets(self) -> list[PlacedAsset]:
        return list(self.car.placed_assets)

    @property
    def is_dragging(self) -> bool:
        return self.drag.is_dragging

    # ========================================
    # DRAG
    # ========================================

    def start_drag(self, asset: AssetPlacementSpec, mouse_x: float, mouse_y: float) -> None:
        self.drag = DragState(
            is_dragging=True,
            asset=asset,
            mouse_position=(mouse_x, mouse_y),
        )
        self.auto_rotate = False
        self.logger.debug("Drag started", asset_id=asset.asset_id)
        self._notify()

    def update_drag(
        self,
        mouse_x: float,
        mouse_y: float,
        world_position: Optional[Vector3] = None,
        surface_normal: Optional[Vector3] = None,
    ) -> Optional[ValidationResult]:
        """
        Record a hover update. Positions and normals not supplied keep their
        previous values.

        Returns the current validation verdict, if a world position is known.
        """
        if not self.drag.is_dragging:
            return None

        position = world_position if world_position is not None else self.drag.world_position
        normal = surface_normal if surface_normal is not None else self.drag.surface_normal

        result = None
        if position is not None and self.drag.asset is not None:
            result = self.validator.validate(self.drag.asset, position, normal)

        self.drag = replace(
            self.drag,
            mouse_position=(mouse_x, mouse_y),
            world_position=position,
            surface_normal=normal,
            validation_result=result,
        )
        self._notify()
        return result

    def end_drag(self) -> None:
        self.drag = IDLE_DRAG
        self.auto_rotate = True
        self._notify()

    def drop(self, rotation: Optional[Vector3] = None) -> Optional[PlacedAsset]:
        """
        Finish the drag at the last hover position.

        Returns the placed component, or None when nothing was placed.
        """
        drag = self.drag
        if not drag.is_dragging or drag.asset is None or drag.world_position is None:
            self.end_drag()
            return None

        result = drag.validation_result or self.validator.validate(
            drag.asset, drag.world_position, drag.surface_normal
        )

        if not allows_drop(drag.asset, result):
            self.logger.info(
                "Drop refused",
                asset_id=drag.asset.asset_id,
                reason=result.message,
                suggested_zone=result.suggested_zone_key,
            )
            self.end_drag()
            return None

        warning = None if result.accepted else result.message
        if warning:
            self.logger.warning("Placed outside valid zones", asset_id=drag.asset.asset_id, reason=warning)

        return self.place_asset(
            drag.asset,
            drag.world_position,
            rotation=rotation,
            zone_key=result.matched_zone_key,
            warning=warning,
        )

    # ========================================
    # CAR
    # ========================================

    def place_asset(
        self,
        asset: AssetPlacementSpec,
        position: Vector3,
        rotation: Optional[Vector3] = None,
        zone_key: Optional[str] = None,
        warning: Optional[str] = None,
    ) -> PlacedAsset:
        placed = PlacedAsset(
            placement_id=f"{asset.asset_id}-{next(self._placement_counter)}",
            asset_id=asset.asset_id,
            position=position,
            rotation=rotation or Vector3(0.0, 0.0, 0.0),
            scale=asset.scale,
            color=asset.color,
            zone_key=zone_key,
            warning=warning,
        )
        self.car.placed_assets.append(placed)
        self.drag = IDLE_DRAG
        self.auto_rotate = True
        self.logger.info("Asset placed", placed=placed)
        self._notify()
        return placed

    def remove_asset(self, placement_id: str) -> bool:
        remaining = [p for p in self.car.placed_assets if p.placement_id != placement_id]
        if len(remaining) == len(self.car.placed_assets):
            return False
        self.car.placed_assets = remaining
        if self.selected_placement_id == placement_id:
            self.selected_placement_id = None
        self._notify()
        return True

    def select_asset(self, placement_id: Optional[str]) -> None:
        self.selected_placement_id = placement_id
        self._notify()

    def toggle_grid(self) -> None:
        self.show_grid = not self.show_grid
        self._notify()

    def toggle_auto_rotate(self) -> None:
        self.auto_rotate = not self.auto_rotate
        self._notify()

    def set_car_color(self, color: str) -> None:
        self.car.color = color
        self._notify()

    def clear_all(self) -> None:
        self.car.placed_assets = []
        self.selected_placement_id = None
        self._notify()
