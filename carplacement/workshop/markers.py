"""
Marker Board

Tracks attachment markers discovered on the car model and the components
auto-attached to them. A component attaches when its asset declares a
``marker_name`` that exists among the discovered markers; attached
components start hidden and are toggled by the UI.
"""

from dataclasses import dataclass, replace
from typing import Optional

from .observable import Observable
from ..assets import AssetCatalog, AssetPlacementSpec
from ..logging_utils import PlacementLogger
from ..zones.zone_data import Vector3


@dataclass(frozen=True)
class MarkerData:
    """Transform of a named marker in the car model."""
    name: str
    position: Vector3
    rotation: Vector3 = Vector3(0.0, 0.0, 0.0)
    scale: Vector3 = Vector3(1.0, 1.0, 1.0)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "position": self.position.to_dict(),
            "rotation": self.rotation.to_dict(),
            "scale": self.scale.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "MarkerData":
        return cls(
            name=data["name"],
            position=Vector3.from_dict(data.get("position", {})),
            rotation=Vector3.from_dict(data.get("rotation", {})),
            scale=Vector3.from_dict(data.get("scale", {"x": 1, "y": 1, "z": 1})),
        )


@dataclass(frozen=True)
class AttachedComponent:
    asset_id: str
    marker_name: str
    visible: bool = False


@dataclass(frozen=True)
class VisibleComponent:
    """A visible attached component joined with its marker and asset."""
    component: AttachedComponent
    marker: MarkerData
    asset: AssetPlacementSpec


class MarkerBoard(Observable):
    """
    Marker discovery and component auto-attachment.

    Operations on unknown asset ids are no-ops returning False.
    """

    MODULE_NAME = "MarkerBoard"

    def __init__(
        self,
        assets: AssetCatalog,
        logger: Optional[PlacementLogger] = None,
    ):
        super().__init__()
        self.assets = assets
        self.logger = logger or PlacementLogger(self.MODULE_NAME)

        self._markers: dict[str, MarkerData] = {}
        self._attached: list[AttachedComponent] = []
        self.markers_ready = False

    @property
    def markers(self) -> dict[str, MarkerData]:
        return dict(self._markers)

    @property
    def attached_components(self) -> list[AttachedComponent]:
        return list(self._attached)

    def set_markers(self, markers: dict[str, MarkerData]) -> list[AttachedComponent]:
        """
        Replace discovered markers and re-run auto-attachment.

        Returns the newly attached components (all hidden).
        """
        self._markers = dict(markers)
        self._attached = [
            AttachedComponent(asset_id=asset.asset_id, marker_name=asset.marker_name)
            for asset in self.assets
            if asset.marker_name and asset.marker_name in self._markers
        ]
        self.markers_ready = True

        unmatched = [
            a.asset_id for a in self.assets
            if a.marker_name and a.marker_name not in self._markers
        ]
        self.logger.info(
            "Markers discovered",
            marker_count=len(self._markers),
            attached=[c.asset_id for c in self._attached],
            unmatched_assets=unmatched,
        )
        self._notify()
        return list(self._attached)

    def _update(self, asset_id: str, visible: Optional[bool]) -> bool:
        found = False
        updated = []
        for component in self._attached:
            if component.asset_id == asset_id:
                found = True
                new_visible = (not component.visible) if visible is None else visible
                component = replace(component, visible=new_visible)
            updated.append(component)
        if not found:
            return False
        self._attached = updated
        self._notify()
        return True

    def toggle_component(self, asset_id: str) -> bool:
        return self._update(asset_id, None)

    def set_component_visibility(self, asset_id: str, visible: bool) -> bool:
        return self._update(asset_id, visible)

    def show_all(self) -> None:
        self._attached = [replace(c, visible=True) for c in self._attached]
        self._notify()

    def hide_all(self) -> None:
        self._attached = [replace(c, visible=False) for c in self._attached]
        self._notify()

    def get_marker(self, name: str) -> Optional[MarkerData]:
        return self._markers.get(name)

    def visible_components(self) -> list[VisibleComponent]:
        """Visible components whose marker and asset both still exist."""
        result = []
        for component in self._attached:
            if not component.visible:
                continue
            marker = self._markers.get(component.marker_name)
            asset = self.assets.by_id(component.asset_id)
            if marker and asset:
                result.append(VisibleComponent(component=component, marker=marker, asset=asset))
        return result

    def reset(self) -> None:
        self._markers = {}
        self._attached = []
        self.markers_ready = False
        self._notify()
