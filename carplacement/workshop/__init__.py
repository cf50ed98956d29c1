"""
Workshop

UI-side state that consumes the placement engine: drag bookkeeping,
placed components, marker auto-attachment and game progress.
"""

from .observable import Observable
from .markers import MarkerBoard, MarkerData, AttachedComponent, VisibleComponent
from .workshop_state import (
    WorkshopState,
    DragState,
    PlacedAsset,
    CarState,
    allows_drop,
)
from .game_progress import GameProgress

__all__ = [
    "Observable",
    "MarkerBoard",
    "MarkerData",
    "AttachedComponent",
    "VisibleComponent",
    "WorkshopState",
    "DragState",
    "PlacedAsset",
    "CarState",
    "allows_drop",
    "GameProgress",
]
