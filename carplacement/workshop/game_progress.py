"""
Game Progress

Start/complete flags for the customization game and the count of
components mounted on the car.
"""

from typing import Callable, Optional

from .observable import Observable
from .workshop_state import WorkshopState


class GameProgress(Observable):

    def __init__(self, required_components: int = 6):
        super().__init__()
        self.required_components = required_components
        self.started = False
        self.completed = False
        self.show_congrats = False
        self.mounted_count = 0
        self._untrack: Optional[Callable[[], None]] = None

    @property
    def all_mounted(self) -> bool:
        return self.mounted_count >= self.required_components

    def start_game(self) -> None:
        self.started = True
        self._notify()

    def complete_game(self) -> None:
        self.completed = True
        self.show_congrats = True
        self._notify()

    def close_congrats(self) -> None:
        self.show_congrats = False
        self._notify()

    def reset(self) -> None:
        self.started = False
        self.completed = False
        self.show_congrats = False
        self._notify()

    def track(self, workshop: WorkshopState) -> None:
        """Follow the number of components placed in ``workshop``."""
        if self._untrack:
            self._untrack()
        self._set_mounted(len(workshop.placed_assets))
        self._untrack = workshop.subscribe(
            lambda state: self._set_mounted(len(state.placed_assets))
        )

    def _set_mounted(self, count: int) -> None:
        if count != self.mounted_count:
            self.mounted_count = count
            self._notify()
