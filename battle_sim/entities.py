"""Base game objects: shared object state, obstacles, particles, bullets, skills and input."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from battle_sim.geometry import Vec2, local_to_world, world_to_local

TICK_PER_SECOND = 60
SECOND_PER_TICK = 1.0 / TICK_PER_SECOND


class SkillType(enum.Enum):
    """How a skill is triggered: E, Q or R key, passive, or bullet switching."""

    E = 0
    Q = 1
    R = 2
    P = 3
    B = 4


@dataclass
class Skill:
    """Description of a unit skill as shown to the player."""

    name: str = ""
    type: SkillType = SkillType.P
    time_remain: int = 0
    time_total: int = 0
    bullet_type: int = 0
    bullet_total_number: int = 0
    description: str = ""
    src: str = ""
    function: Optional[Callable[[], None]] = None
    switch_bullet: Optional[Callable[[int], None]] = None


@dataclass
class InputData:
    """A snapshot of a player's input: pressed keys and buttons, and cursor position."""

    key_down: set[int] = field(default_factory=set)
    mouse_button_down: set[int] = field(default_factory=set)
    mouse_button_clicked: set[int] = field(default_factory=set)
    mouse_cursor_position: Vec2 = field(default_factory=Vec2)


class GameObject(ABC):
    """Anything placed in the world with an id, a position and a rotation."""

    def __init__(
        self,
        game_core: Any,
        id: int,
        position: Vec2 = Vec2(),
        rotation: float = 0.0,
    ) -> None:
        self.game_core = game_core
        self.id = id
        self.position = position
        self.rotation = rotation

    def local_to_world(self, p: Vec2) -> Vec2:
        """Map a point from this object's frame into world space."""
        return local_to_world(p, self.position, self.rotation)

    def world_to_local(self, p: Vec2) -> Vec2:
        """Map a world point into this object's frame."""
        return world_to_local(p, self.position, self.rotation)

    @abstractmethod
    def update(self) -> None:
        """Advance the object by one game tick."""


class Obstacle(GameObject):
    """A static piece of the world that blocks movement and projectiles."""

    @abstractmethod
    def is_blocked(self, p: Vec2) -> bool:
        """Whether the world point ``p`` lies inside the obstacle."""

    def update(self) -> None:
        """Obstacles are static unless a subclass says otherwise."""

    def get_surface_normal(self, origin: Vec2, terminus: Vec2) -> tuple[Vec2, Vec2]:
        """Intersection point and outward normal of a segment with the surface.

        The base obstacle reports no surface: both vectors are zero.
        """
        return Vec2(), Vec2()


class Particle(GameObject):
    """A purely visual or short-lived effect in the world."""

    def __init__(
        self,
        game_core: Any,
        id: int,
        position: Vec2,
        rotation: float = 0.0,
    ) -> None:
        super().__init__(game_core, id, position, rotation)


class Bullet(GameObject):
    """A projectile fired by a unit on behalf of a player."""

    def __init__(
        self,
        game_core: Any,
        id: int,
        unit_id: int,
        player_id: int,
        position: Vec2,
        rotation: float,
        damage_scale: float,
    ) -> None:
        super().__init__(game_core, id, position, rotation)
        self.unit_id = unit_id
        self.player_id = player_id
        self.damage_scale = damage_scale

    def on_destroy(self) -> None:
        """Called once when the bullet is removed from the game."""