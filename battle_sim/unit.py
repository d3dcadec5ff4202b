"""The controllable unit base class with health and life-bar state."""

from __future__ import annotations

from abc import abstractmethod
from typing import Any

from battle_sim.entities import GameObject, Skill
from battle_sim.geometry import Vec2


class Unit(GameObject):
    """A unit owned by a player; health is stored as a fraction in [0, 1]."""

    def __init__(self, game_core: Any, id: int, player_id: int) -> None:
        super().__init__(game_core, id)
        self.player_id = player_id
        self.skills: list[Skill] = []
        self._health = 1.0
        self.lifebar_display = True
        self.lifebar_offset = Vec2(0.0, 1.0)
        self._lifebar_length = 2.4
        self.front_lifebar_color = (0.0, 1.0, 0.0, 0.9)
        self.background_lifebar_color = (1.0, 0.0, 0.0, 0.9)
        self.fadeout_lifebar_color = (1.0, 1.0, 1.0, 0.5)

    def damage_scale(self) -> float:
        """Multiplier applied to damage dealt by this unit's bullets."""
        return 1.0

    def speed_scale(self) -> float:
        """Multiplier applied to this unit's movement speed."""
        return 1.0

    def basic_max_health(self) -> float:
        """Maximum health before scaling."""
        return 100.0

    def health_scale(self) -> float:
        """Multiplier applied to the basic maximum health."""
        return 1.0

    def max_health(self) -> float:
        """Effective maximum health, never below 1."""
        return max(self.health_scale() * self.basic_max_health(), 1.0)

    @property
    def health(self) -> float:
        """Remaining health as a fraction of the maximum."""
        return self._health

    @health.setter
    def health(self, value: float) -> None:
        self._health = min(max(value, 0.0), 1.0)

    @property
    def life_bar_length(self) -> float:
        """Length of the rendered life bar."""
        return self._lifebar_length

    @life_bar_length.setter
    def life_bar_length(self, value: float) -> None:
        self._lifebar_length = min(value, 0.0)

    def show_life_bar(self) -> None:
        """Display the life bar above the unit."""
        self.lifebar_display = True

    def hide_life_bar(self) -> None:
        """Hide the life bar above the unit."""
        self.lifebar_display = False

    @abstractmethod
    def is_hit(self, position: Vec2) -> bool:
        """Whether a bullet at ``position`` hits this unit."""

    def unit_name(self) -> str:
        """Display name of the unit kind."""
        return "Unknown Unit"

    def author(self) -> str:
        """Author credited for the unit kind."""
        return "Unknown Author"

    def selectable_name(self) -> str:
        """The entry shown in the unit selection list."""
        return f"{self.unit_name()} - By {self.author()}"

    def generate_bullet(
        self,
        bullet_type: type,
        position: Vec2,
        rotation: float,
        damage_scale: float = 1.0,
        *args: Any,
    ) -> None:
        """Queue a bullet of ``bullet_type`` fired by this unit."""
        self.game_core.push_event_generate_bullet(
            bullet_type, self.id, self.player_id, position, rotation, damage_scale, *args
        )