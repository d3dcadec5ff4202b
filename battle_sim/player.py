"""A player: owns a primary unit and respawns it after it dies."""

from __future__ import annotations

from typing import Any

from battle_sim.entities import TICK_PER_SECOND, InputData

RESPAWN_TICKS = TICK_PER_SECOND * 5


class Player:
    """A participant controlling one primary unit at a time."""

    def __init__(self, game_core: Any, id: int) -> None:
        self.game_core = game_core
        self.id = id
        self.input_data = InputData()
        self.primary_unit_id = 0
        self.resurrection_count_down = 1
        self.selected_unit = 0

    def update(self) -> None:
        """Count down while the primary unit is dead and respawn it at zero."""
        if self.game_core.get_unit(self.primary_unit_id) is not None:
            return
        if not self.resurrection_count_down:
            self.resurrection_count_down = RESPAWN_TICKS
        self.resurrection_count_down -= 1
        if not self.resurrection_count_down:
            self.primary_unit_id = self.game_core.allocate_primary_unit(self.id)