# battle_sim

A headless, tick-based 2D battle simulation. A `GameCore` owns players,
units, bullets, obstacles and particles, advances them one tick at a time
(60 ticks per second) and applies changes through an event queue, so that
nothing is added or removed while the world is being iterated.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `battle_sim.geometry` – `Vec2`, an immutable 2D vector with `+`, `-`,
  scalar `*` and `/`, negation, `dot`, `cross`, `length`, `normalized`
  (raises `ValueError` for the zero vector) and `rotated`, plus the
  functions `rotate`, `local_to_world` and `world_to_local`.
- `battle_sim.entities` – the shared base types `GameObject`, `Obstacle`,
  `Particle` and `Bullet`, together with `Skill`, `SkillType` and
  `InputData`, and the constants `TICK_PER_SECOND` and `SECOND_PER_TICK`.
- `battle_sim.unit` – `Unit`, the abstract base for anything that can be
  hit. Its `health` property is a fraction clamped to `[0, 1]` of
  `max_health()`. Subclasses must define `is_hit(position)` and `update()`.
- `battle_sim.player` – `Player`, which counts down five seconds while its
  primary unit is missing and then asks the core for a new one.
- `battle_sim.obstacles` – `Block`, `ReboundingBlock` (with
  `get_surface_normal` for bouncing), `River` and `SafetyDeclaration`
  (removes itself after three seconds), plus `segments_intersect`.
- `battle_sim.particles` – `BulletHole`, `Explosion` (damages units inside
  it once), `Smoke` and `Thunderbolt`.
- `battle_sim.projectiles` – straight-flying bullets: `CannonBall`, `Coin`,
  `CritBullet`, `ElectricBall`, `Mine`, `SweatySoybean`,
  `UdongeinDirectionalBullet`, `WarningLine` and `WaterDrop`.
- `battle_sim.guided` – bullets with more involved behaviour: `EnergyBeam`
  (with `HitResult` and `HitResultType`), `Laser`, `Missile`,
  `ReboundingBall`, `Rocket` and `SmokeBomb`.
- `battle_sim.game_core` – `GameCore`, which ties everything together.

## Example

```python
from battle_sim.game_core import GameCore
from battle_sim.geometry import Vec2
from battle_sim.projectiles import CannonBall
from battle_sim.unit import Unit


class Dummy(Unit):
    def is_hit(self, position):
        return (position - self.position).length() < 0.5

    def update(self):
        pass

    def unit_name(self):
        return "Dummy"


core = GameCore(seed=0)
core.register_selectable_unit(Dummy, False)

me = core.add_player()
core.set_render_perspective(me)

target = core.add_unit(Dummy, me)
core.get_unit(target).position = Vec2(5.0, -5.0)

core.add_bullet(CannonBall, 0, me, Vec2(0.0, -5.0), 0.0, 1.0, Vec2(10.0, 0.0))

for _ in range(60):
    core.update()

print(core.get_unit(target).health)  # a cannon ball deals 10 of 100 health
```

Each call to `GameCore.update()` advances the world by one tick: players
first, then obstacles, bullets, units and particles, after which the queued
events run in the order they were pushed. Bullets and particles that leave
the boundary are removed. `GameCore.set_scene()` places the default
obstacles and respawn points and is called by the constructor. Randomness
comes from a generator seeded by the `seed` argument, so a run can be
repeated exactly.

## What the package does not do

- It draws nothing: there is no window, no rendering and no user interface.
  `GameCore.get_player_color` and `update_camera` only compute values that a
  display could use.
- It reads no keyboard or mouse. `Player.input_data` holds an `InputData`
  that the caller fills in.
- It ships no playable unit types. Define `Unit` subclasses and make them
  selectable with `GameCore.register_selectable_unit`; until one is
  registered, `allocate_primary_unit` raises `LookupError`.
- It has no command-line program.