"""Particles: bullet holes, explosions, smoke puffs and thunderbolts."""

from __future__ import annotations

from typing import Any

from battle_sim.entities import SECOND_PER_TICK, Particle
from battle_sim.geometry import Vec2

EXPLOSION_DAMAGE = 10.0


class _TimedParticle(Particle):
    """A particle that removes itself after a fixed number of ticks."""

    def __init__(
        self,
        game_core: Any,
        id: int,
        position: Vec2,
        rotation: float,
        duration: int,
    ) -> None:
        super().__init__(game_core, id, position, rotation)
        self.duration = duration

    def _tick_down(self) -> None:
        self.duration -= 1
        if self.duration <= 0:
            self.game_core.push_event_remove_particle(self.id)

    def update(self) -> None:
        self._tick_down()


class BulletHole(_TimedParticle):
    """A mark left by a critical hit."""

    def __init__(
        self,
        game_core: Any,
        id: int,
        position: Vec2,
        rotation: float,
        duration: int,
    ) -> None:
        super().__init__(game_core, id, position, rotation, duration)

    def update(self) -> None:
        """Count down and ask for removal when the time is up."""
        self._tick_down()


class Explosion(_TimedParticle):
    """A blast that damages units inside it on its first tick."""

    def __init__(
        self,
        game_core: Any,
        id: int,
        position: Vec2,
        rotation: float,
        duration: int,
    ) -> None:
        super().__init__(game_core, id, position, rotation, duration)
        self.should_damage = True

    def update(self) -> None:
        """Damage every unit in the blast once, then count down."""
        if self.should_damage:
            for unit_id, unit in self.game_core.units.items():
                if self.is_in_explosion(unit.position):
                    self.game_core.push_event_deal_damage(unit_id, self.id, EXPLOSION_DAMAGE)
            self.should_damage = False
        self._tick_down()

    def is_in_explosion(self, position: Vec2) -> bool:
        """Whether a world point lies within the blast's clipped shape."""
        p = self.world_to_local(position)
        return (
            -1.6 < p.x < 1.6
            and -2.0 < p.y < 2.0
            and p.x + p.y < 3.2
            and p.y - p.x < 3.2
        )


class Smoke(Particle):
    """A drifting puff that fades out at ``decay_scale`` strength per second."""

    def __init__(
        self,
        game_core: Any,
        id: int,
        position: Vec2,
        rotation: float,
        velocity: Vec2,
        size: float = 0.2,
        color: tuple[float, float, float, float] = (1.0, 1.0, 1.0, 1.0),
        decay_scale: float = 1.0,
    ) -> None:
        super().__init__(game_core, id, position, rotation)
        self.velocity = velocity
        self.size = size
        self.color = color
        self.decay_scale = decay_scale
        self.strength = 1.0

    @property
    def tint(self) -> tuple[float, float, float, float]:
        """The colour with its alpha scaled by the remaining strength."""
        r, g, b, a = self.color
        return (r, g, b, a * self.strength)

    def update(self) -> None:
        """Drift, fade, and ask for removal once fully faded."""
        self.position = self.position + self.velocity * SECOND_PER_TICK
        self.strength -= SECOND_PER_TICK * self.decay_scale
        if self.strength < 0.0:
            self.game_core.push_event_remove_particle(self.id)


class Thunderbolt(_TimedParticle):
    """A brief lightning flash."""

    def __init__(
        self,
        game_core: Any,
        id: int,
        position: Vec2,
        rotation: float,
        duration: int,
    ) -> None:
        super().__init__(game_core, id, position, rotation, duration)

    def update(self) -> None:
        """Count down and ask for removal when the time is up."""
        self._tick_down()