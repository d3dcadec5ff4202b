"""Bullets that sweep, steer or bounce: energy beams, lasers, missiles, rebounding balls, rockets and smoke bombs."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import Any, Optional

from battle_sim.entities import SECOND_PER_TICK, TICK_PER_SECOND, Bullet
from battle_sim.geometry import Vec2, rotate
from battle_sim.particles import Smoke
from battle_sim.projectiles import SMOKE_COLOR, SMOKE_DECAY
from battle_sim.unit import Unit

BEAM_STEPS = 100
BEAM_STEP = Vec2(0.0, 0.1)
BEAM_DAMAGE_PER_SECOND = 10.0
BEAM_SPARK_CHANCE = 0.2

LASER_FLY_TIME = 3.0
LASER_DAMAGE = 10.0

MISSILE_DAMAGE = 10.0
MISSILE_RESISTANCE = 0.02
MISSILE_SEEK_RANGE = 12.0
MISSILE_PROXIMITY = 1.0
MISSILE_NO_TARGET_COST = 500.0

REBOUND_DAMAGE = 10.0

ROCKET_START_DAMAGE = 5.0
ROCKET_MAX_DAMAGE = 20.0
ROCKET_GROWTH = 1.02

SMOKE_BOMB_SPIN = 5.0
SMOKE_BOMB_PULSES = 5


def _emit_smoke(
    bullet: Bullet,
    puffs: int,
    spread: float,
    size: float = 0.2,
    color: tuple[float, float, float, float] = SMOKE_COLOR,
) -> None:
    core = bullet.game_core
    for _ in range(puffs):
        core.push_event_generate_particle(
            Smoke,
            bullet.position,
            bullet.rotation,
            core.random_in_circle() * spread,
            size,
            color,
            SMOKE_DECAY,
        )


def _clamp_unit(value: float) -> float:
    return min(max(value, -1.0), 1.0)


def _laser_heading(velocity: Vec2) -> float:
    """Rotation of a laser sprite flying along ``velocity``."""
    if velocity.x == 0.0:
        slope_angle = math.copysign(math.pi / 2, velocity.y) if velocity.y else 0.0
    else:
        slope_angle = math.atan(velocity.y / velocity.x)
    return slope_angle + math.pi / 2


class HitResultType(enum.Enum):
    """What an energy beam ran into."""

    MISS = 0
    OBSTACLE = 1
    UNIT = 2


@dataclass(frozen=True)
class HitResult:
    """Where a beam stops and what, if anything, it struck."""

    hit_type: HitResultType
    unit: Optional[Unit]
    position: Vec2


class EnergyBeam(Bullet):
    """An instantaneous beam that lives for a single tick."""

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
        super().__init__(game_core, id, unit_id, player_id, position, rotation, damage_scale)

    def target(self) -> HitResult:
        """March along the beam until it meets an obstacle, a unit, or its full length."""
        current = self.position
        step = rotate(BEAM_STEP, self.rotation)
        units = self.game_core.units
        for _ in range(BEAM_STEPS):
            if self.game_core.is_blocked_by_obstacles(current):
                return HitResult(HitResultType.OBSTACLE, None, current)
            for unit_id, unit in units.items():
                if unit_id != self.unit_id and unit.is_hit(current):
                    return HitResult(HitResultType.UNIT, unit, current)
            current = current + step
        return HitResult(HitResultType.MISS, None, current)

    def update(self) -> None:
        """Damage the struck unit, maybe throw a spark, and remove the beam."""
        result = self.target()
        core = self.game_core
        if result.hit_type is HitResultType.UNIT:
            core.push_event_deal_damage(
                result.unit.id, self.id, self.damage_scale * BEAM_DAMAGE_PER_SECOND * SECOND_PER_TICK
            )
        if result.hit_type is not HitResultType.MISS and core.random_float() < BEAM_SPARK_CHANCE:
            core.push_event_generate_particle(
                Smoke,
                result.position,
                self.rotation,
                core.random_in_circle() * 2.0,
                0.2,
                core.get_player_color(self.player_id),
                SMOKE_DECAY,
            )
        core.push_event_remove_bullet(self.id)


class Laser(Bullet):
    """A bolt that reflects off obstacles and fades after three seconds."""

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
        self.reflected = False
        self.fly_time = LASER_FLY_TIME
        self.rotation = _laser_heading(velocity)

    def update(self) -> None:
        """Fly, mirror off the first obstacle surface entered, and strike units."""
        core = self.game_core
        self.fly_time -= SECOND_PER_TICK
        old_position = self.position
        self.position = self.position + self.velocity * SECOND_PER_TICK
        if core.is_blocked_by_obstacles(self.position):
            if not self.reflected:
                normal = core.get_unit_normal_vec2_of_surface(self.position)
                self.velocity = self.velocity - normal * (2.0 * normal.dot(self.velocity))
                self.rotation = _laser_heading(self.velocity)
                self.reflected = True
        elif self.reflected:
            self.reflected = False
        if core.is_out_of_range(self.position):
            self.position = old_position

        should_die = self.fly_time <= 0
        for unit_id, unit in list(core.units.items()):
            if unit_id == self.unit_id:
                continue
            if unit.is_hit(self.position):
                core.push_event_deal_damage(unit_id, self.id, self.damage_scale * LASER_DAMAGE)
                should_die = True
        if should_die:
            core.push_event_remove_bullet(self.id)

    def on_destroy(self) -> None:
        """Leave a small puff of smoke."""
        _emit_smoke(self, 5, 2.0)


class Missile(Bullet):
    """A homing missile that steers towards the cheapest enemy within range."""

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
        max_velocity: float,
    ) -> None:
        super().__init__(game_core, id, unit_id, player_id, position, rotation, damage_scale)
        self.velocity = velocity
        self._max_velocity = max(1.0, max_velocity)
        self.resistance = MISSILE_RESISTANCE

    def max_velocity(self) -> float:
        """Top speed, never below 1."""
        return self._max_velocity

    def _is_enemy(self, unit_id: int, unit: Unit) -> bool:
        return unit_id != self.unit_id and unit.player_id != self.player_id

    def update(self) -> None:
        """Fly, strike enemies, detonate near them, or steer towards the best target."""
        core = self.game_core
        self.position = self.position + self.velocity * SECOND_PER_TICK
        self.rotation = math.atan2(self.velocity.y, self.velocity.x) - math.radians(90.0)
        should_die = core.is_blocked_by_obstacles(self.position)

        units = list(core.units.items())
        for unit_id, unit in units:
            if not self._is_enemy(unit_id, unit):
                continue
            if unit.is_hit(self.position):
                core.push_event_deal_damage(unit_id, self.id, self.damage_scale * MISSILE_DAMAGE)
                should_die = True

        if should_die:
            core.push_event_remove_bullet(self.id)
            return

        best_diff = self.velocity
        best_cost = MISSILE_NO_TARGET_COST
        for unit_id, unit in units:
            if not self._is_enemy(unit_id, unit):
                continue
            diff = unit.position - self.position
            distance = diff.length()
            if distance > MISSILE_SEEK_RANGE:
                continue
            if distance < MISSILE_PROXIMITY:
                core.push_event_deal_damage(unit_id, self.id, self.damage_scale * MISSILE_DAMAGE)
                core.push_event_remove_bullet(self.id)
                return
            cost = self.calc_cost(diff)
            if cost < best_cost:
                best_cost = cost
                best_diff = diff

        fix = self.calc_fix(best_diff)
        max_v = self._max_velocity
        self.velocity = self.velocity * (1 - self.resistance * self.velocity.length() / max_v)
        self.velocity = self.velocity + fix
        if self.velocity.length() > max_v:
            self.velocity = self.velocity.normalized() * max_v

    def calc_cost(self, diff: Vec2) -> float:
        """Distance to a target, discounted when the missile already heads towards it."""
        distance = diff.length()
        speed = self.velocity.length()
        if speed < 1e-3:
            return distance
        direction = diff.normalized()
        cos_angle = _clamp_unit(direction.dot(self.velocity.normalized()))
        return distance * (1 - speed * cos_angle / self._max_velocity)

    def calc_fix(self, diff: Vec2) -> Vec2:
        """Velocity correction that turns the missile towards ``diff``."""
        if diff.length() == 0.0:
            return Vec2()
        push = self.resistance * self._max_velocity
        direction = diff.normalized()
        speed = self.velocity.length()
        if speed < 1e-3:
            return direction * (2 * push)
        v = self.velocity.normalized()
        angle = math.acos(_clamp_unit(direction.dot(v)))
        reachable = math.atan2(push, (1 - self.resistance * speed / self._max_velocity) * speed)
        if angle < reachable:
            return direction * push
        turn = math.radians(60.0)
        if rotate(v, math.radians(90.0)).dot(direction) < 0:
            turn = -turn
        return rotate(v * push, turn) + v * (math.sin(angle) * push)

    def on_destroy(self) -> None:
        """Leave a burst of smoke."""
        _emit_smoke(self, 6, 3.0)


class ReboundingBall(Bullet):
    """A ball that bounces off surfaces a limited number of times."""

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
        rebounding_times: int = 1,
    ) -> None:
        super().__init__(game_core, id, unit_id, player_id, position, rotation, damage_scale)
        self.velocity = velocity
        self.rebounding_times_left = rebounding_times

    def update(self) -> None:
        """Fly; on entering an obstacle, mirror off its surface if bounces remain, else die."""
        core = self.game_core
        last_position = self.position
        self.position = self.position + self.velocity * SECOND_PER_TICK
        should_die = False
        if core.is_blocked_by_obstacles(self.position):
            should_die = True
            obstacle = core.get_blocked_obstacle(self.position)
            if obstacle is not None and self.rebounding_times_left:
                point, normal = obstacle.get_surface_normal(last_position, self.position)
                if normal != Vec2():
                    self.rebounding_times_left -= 1
                    self.position = self.position - normal * (
                        normal.dot(self.position - point) * 2.0
                    )
                    self.velocity = self.velocity - normal * (normal.dot(self.velocity) * 2.0)
                    should_die = False

        for unit_id, unit in list(core.units.items()):
            if unit_id == self.unit_id:
                continue
            if unit.is_hit(self.position):
                core.push_event_deal_damage(unit_id, self.id, self.damage_scale * REBOUND_DAMAGE)
                should_die = True
        if should_die:
            core.push_event_remove_bullet(self.id)

    def on_destroy(self) -> None:
        """Leave a small puff of smoke."""
        _emit_smoke(self, 5, 2.0)


class Rocket(Bullet):
    """A rocket locked onto the unit nearest the owner's cursor, growing stronger in flight."""

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
        self.harmful = ROCKET_START_DAMAGE
        self.locked_unit_id = 0
        player = game_core.get_player(player_id)
        if player is None:
            raise LookupError(f"no player with id {player_id}")
        cursor = player.input_data.mouse_cursor_position
        best = 1e30
        for other_id, unit in game_core.units.items():
            if other_id == unit_id:
                continue
            distance = (cursor - unit.position).length()
            if distance < best:
                best = distance
                self.locked_unit_id = other_id

    def update(self) -> None:
        """Chase the locked unit; vanish if it is gone."""
        core = self.game_core
        target = core.get_unit(self.locked_unit_id)
        if target is None:
            core.push_event_remove_bullet(self.id)
            return
        if self.harmful < ROCKET_MAX_DAMAGE:
            self.harmful *= ROCKET_GROWTH
        diff = target.position - self.position
        distance = diff.length()
        diff = Vec2() if distance == 0.0 else diff * (0.25 * self.harmful / distance)
        self.velocity = diff
        self.position = self.position + self.velocity * SECOND_PER_TICK
        self.rotation = math.atan2(-diff.x, diff.y) % (2 * math.pi)

        should_die = core.is_blocked_by_obstacles(self.position)
        for unit_id, unit in list(core.units.items()):
            if unit_id == self.unit_id:
                continue
            if unit.is_hit(self.position):
                core.push_event_deal_damage(unit_id, self.id, self.damage_scale * self.harmful)
                should_die = True
        if should_die:
            core.push_event_remove_bullet(self.id)

    def on_destroy(self) -> None:
        """Leave a small puff of smoke."""
        _emit_smoke(self, 5, 2.0)


class SmokeBomb(Bullet):
    """A thrown bomb that lands on a target and releases a damaging cloud in pulses."""

    def __init__(
        self,
        game_core: Any,
        id: int,
        unit_id: int,
        player_id: int,
        position: Vec2,
        rotation: float,
        damage_scale: float,
        target: Vec2,
        radius: float,
        duration: float,
        damage_duration: float,
    ) -> None:
        super().__init__(game_core, id, unit_id, player_id, position, rotation, damage_scale)
        if duration <= 0:
            raise ValueError("flight duration must be positive")
        pulse_ticks = int(damage_duration * TICK_PER_SECOND + 0.5)
        if pulse_ticks < 1:
            raise ValueError("damage duration must last at least one tick")
        self.target = target
        self.velocity = (target - position) * (1.0 / duration)
        self.radius = radius
        self.duration = int(duration * TICK_PER_SECOND + 0.5)
        self.damage_duration = pulse_ticks
        self.current_time = 0

    def update(self) -> None:
        """Fly to the target, then pulse decreasing damage to every unit in the cloud."""
        core = self.game_core
        self.current_time += 1
        if self.current_time < self.duration:
            self.position = self.position + self.velocity * SECOND_PER_TICK
            self.rotation += SMOKE_BOMB_SPIN * SECOND_PER_TICK
        elif self.current_time < self.duration + self.damage_duration * SMOKE_BOMB_PULSES:
            self.position = self.target
            elapsed = self.current_time - self.duration
            if elapsed == 0:
                core.push_event_generate_particle(
                    Smoke,
                    self.target,
                    self.rotation,
                    Vec2(),
                    self.radius,
                    SMOKE_COLOR,
                    TICK_PER_SECOND / (self.damage_duration * 8.0),
                )
            if elapsed % self.damage_duration == 0:
                damage = self.damage_scale * (10.0 - 2.0 * (elapsed // self.damage_duration))
                for unit_id, unit in list(core.units.items()):
                    if (unit.position - self.position).length() <= self.radius:
                        amount = damage * 0.5 if unit_id == self.unit_id else damage
                        core.push_event_deal_damage(unit_id, self.id, amount)
        else:
            core.push_event_remove_bullet(self.id)