"""Straight-flying projectiles: cannon balls, coins, critical bullets, mines and the like."""

from __future__ import annotations

from typing import Any, Callable, Iterator, Optional

from battle_sim.entities import SECOND_PER_TICK, TICK_PER_SECOND, Bullet
from battle_sim.geometry import Vec2
from battle_sim.particles import BulletHole, Explosion, Smoke
from battle_sim.unit import Unit

SMOKE_COLOR = (0.0, 0.0, 0.0, 1.0)
SMOKE_DECAY = 3.0
SMOKE_PUFFS = 5
COIN_EXPLOSION_TICKS = 30
MINE_ARMING_TICKS = TICK_PER_SECOND * 2

DamageRule = Optional[Callable[[Unit], float]]


class _Projectile(Bullet):
    """A bullet moving at constant velocity that strikes the units it touches."""

    def __init__(
        self,
        game_core: Any,
        id: int,
        unit_id: int,
        player_id: int,
        position: Vec2,
        rotation: float,
        damage_scale: float,
        velocity: Vec2,
    ) -> None:
        super().__init__(game_core, id, unit_id, player_id, position, rotation, damage_scale)
        self.velocity = velocity

    def _advance(self) -> None:
        self.position = self.position + self.velocity * SECOND_PER_TICK

    def _units_hit(self, skip_id: int) -> Iterator[tuple[int, Unit]]:
        for unit_id, unit in list(self.game_core.units.items()):
            if unit_id == skip_id:
                continue
            if unit.is_hit(self.position):
                yield unit_id, unit

    def _remove(self) -> None:
        self.game_core.push_event_remove_bullet(self.id)

    def _emit_smoke(self, spread: float, size: float = 0.2) -> None:
        for _ in range(SMOKE_PUFFS):
            self.game_core.push_event_generate_particle(
                Smoke,
                self.position,
                self.rotation,
                self.game_core.random_in_circle() * spread,
                size,
                SMOKE_COLOR,
                SMOKE_DECAY,
            )

    def _fly_and_strike(self, skip_id: int, damage_of: DamageRule) -> None:
        """Move, then die on obstacles or on any unit hit, damaging it if a rule is given."""
        self._advance()
        should_die = self.game_core.is_blocked_by_obstacles(self.position)
        for unit_id, unit in self._units_hit(skip_id):
            if damage_of is not None:
                self.game_core.push_event_deal_damage(unit_id, self.id, damage_of(unit))
            should_die = True
        if should_die:
            self._remove()


class CannonBall(_Projectile):
    """A plain shell dealing 10 damage."""

    def __init__(
        self,
        game_core: Any,
        id: int,
        unit_id: int,
        player_id: int,
        position: Vec2,
        rotation: float,
        damage_scale: float,
        velocity: Vec2,
    ) -> None:
        super().__init__(game_core, id, unit_id, player_id, position, rotation, damage_scale, velocity)

    def update(self) -> None:
        """Fly one tick and hit any unit other than the shooter."""
        self._fly_and_strike(self.unit_id, lambda unit: self.damage_scale * 10.0)

    def on_destroy(self) -> None:
        """Leave a small puff of smoke."""
        self._emit_smoke(2.0)


class Coin(_Projectile):
    """A short-lived coin whose damage fades with its remaining life; it passes through units."""

    def __init__(
        self,
        game_core: Any,
        id: int,
        unit_id: int,
        player_id: int,
        position: Vec2,
        rotation: float,
        damage_scale: float,
        velocity: Vec2,
        life_time: int,
    ) -> None:
        super().__init__(game_core, id, unit_id, player_id, position, rotation, damage_scale, velocity)
        self.life_time = life_time
        self.total_time = life_time

    def update(self) -> None:
        """Fly one tick, damaging and exploding on each unit touched, until life runs out."""
        if not self.life_time:
            self._remove()
            return
        self.life_time -= 1
        self._advance()
        should_die = self.game_core.is_blocked_by_obstacles(self.position)
        for unit_id, unit in self._units_hit(self.unit_id):
            damage = self.damage_scale * 100.0 * self.life_time / self.total_time
            self.game_core.push_event_deal_damage(unit_id, self.id, damage)
            self.game_core.push_event_generate_particle(
                Explosion, unit.position, 0.0, COIN_EXPLOSION_TICKS
            )
        if should_die:
            self._remove()

    def on_destroy(self) -> None:
        """Leave a small puff of smoke."""
        self._emit_smoke(2.0)


class CritBullet(_Projectile):
    """A bullet that may land a critical hit for extra damage."""

    def __init__(
        self,
        game_core: Any,
        id: int,
        unit_id: int,
        player_id: int,
        position: Vec2,
        rotation: float,
        damage_scale: float,
        velocity: Vec2,
        crit_chance: float,
        crit_damage: float,
    ) -> None:
        super().__init__(game_core, id, unit_id, player_id, position, rotation, damage_scale, velocity)
        self.crit_chance = crit_chance
        self.crit_damage = crit_damage

    def update(self) -> None:
        """Fly one tick; on a hit roll for a critical strike, which also leaves a bullet hole.

        Units are skipped when their id equals the owning player's id.
        """
        self._advance()
        should_die = self.game_core.is_blocked_by_obstacles(self.position)
        for unit_id, _unit in self._units_hit(self.player_id):
            base = self.damage_scale * 10.0
            if self.game_core.random_float() >= self.crit_chance:
                self.game_core.push_event_deal_damage(unit_id, self.id, base)
            else:
                self.game_core.push_event_deal_damage(
                    unit_id, self.id, base * (1.0 + self.crit_damage)
                )
                self.game_core.push_event_generate_particle(
                    BulletHole, self.position, self.rotation, TICK_PER_SECOND
                )
            should_die = True
        if should_die:
            self._remove()

    def on_destroy(self) -> None:
        """Leave a small puff of smoke."""
        self._emit_smoke(2.0)


class ElectricBall(_Projectile):
    """A heavy charged ball dealing 63 damage."""

    def __init__(
        self,
        game_core: Any,
        id: int,
        unit_id: int,
        player_id: int,
        position: Vec2,
        rotation: float,
        damage_scale: float,
        velocity: Vec2,
    ) -> None:
        super().__init__(game_core, id, unit_id, player_id, position, rotation, damage_scale, velocity)

    def update(self) -> None:
        """Fly one tick and hit any unit other than the shooter."""
        self._fly_and_strike(self.unit_id, lambda unit: self.damage_scale * 63.0)

    def on_destroy(self) -> None:
        """Leave a wide burst of large smoke puffs."""
        self._emit_smoke(8.0, 0.8)


class Mine(_Projectile):
    """A stationary mine that arms after two seconds and then destroys whatever touches it."""

    def __init__(
        self,
        game_core: Any,
        id: int,
        unit_id: int,
        player_id: int,
        position: Vec2,
        rotation: float,
        damage_scale: float,
        velocity: Vec2,
    ) -> None:
        super().__init__(game_core, id, unit_id, player_id, position, rotation, damage_scale, velocity)
        self.ready_count_down = MINE_ARMING_TICKS

    def update(self) -> None:
        """Count down while arming; once armed, deal a unit's full health to it on contact.

        Units are skipped when their id equals the owning player's id.
        """
        if self.ready_count_down:
            self.ready_count_down -= 1
            return
        should_die = False
        for unit_id, unit in self._units_hit(self.player_id):
            self.game_core.push_event_deal_damage(unit_id, self.id, unit.max_health())
            should_die = True
        if should_die:
            self._remove()

    def on_destroy(self) -> None:
        """Leave a burst of smoke."""
        self._emit_smoke(5.0)


class SweatySoybean(_Projectile):
    """A bean dealing 10 damage; units whose id equals the owner's player id are spared."""

    def __init__(
        self,
        game_core: Any,
        id: int,
        unit_id: int,
        player_id: int,
        position: Vec2,
        rotation: float,
        damage_scale: float,
        velocity: Vec2,
    ) -> None:
        super().__init__(game_core, id, unit_id, player_id, position, rotation, damage_scale, velocity)

    def update(self) -> None:
        """Fly one tick and hit units."""
        self._fly_and_strike(self.player_id, lambda unit: self.damage_scale * 10.0)

    def on_destroy(self) -> None:
        """Leave a small puff of smoke."""
        self._emit_smoke(2.0)


class UdongeinDirectionalBullet(_Projectile):
    """A light bullet dealing 2 damage, fired in dense volleys."""

    def __init__(
        self,
        game_core: Any,
        id: int,
        unit_id: int,
        player_id: int,
        position: Vec2,
        rotation: float,
        damage_scale: float,
        velocity: Vec2,
    ) -> None:
        super().__init__(game_core, id, unit_id, player_id, position, rotation, damage_scale, velocity)

    def update(self) -> None:
        """Fly one tick and hit any unit other than the shooter."""
        self._fly_and_strike(self.unit_id, lambda unit: self.damage_scale * 2.0)


class WarningLine(_Projectile):
    """A harmless tracer that vanishes on contact."""

    def __init__(
        self,
        game_core: Any,
        id: int,
        unit_id: int,
        player_id: int,
        position: Vec2,
        rotation: float,
        damage_scale: float,
        velocity: Vec2,
    ) -> None:
        super().__init__(game_core, id, unit_id, player_id, position, rotation, damage_scale, velocity)

    def update(self) -> None:
        """Fly one tick and disappear on obstacles or units, dealing no damage."""
        self._fly_and_strike(self.player_id, None)


class WaterDrop(_Projectile):
    """A drop that destroys any unit it touches outright."""

    def __init__(
        self,
        game_core: Any,
        id: int,
        unit_id: int,
        player_id: int,
        position: Vec2,
        rotation: float,
        damage_scale: float,
        velocity: Vec2,
    ) -> None:
        super().__init__(game_core, id, unit_id, player_id, position, rotation, damage_scale, velocity)

    def update(self) -> None:
        """Fly one tick and deal a hit unit's full health."""
        self._fly_and_strike(self.player_id, lambda unit: unit.max_health())

    def on_destroy(self) -> None:
        """Leave a small puff of smoke."""
        self._emit_smoke(2.0)