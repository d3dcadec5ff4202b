import pytest

from battle_sim.entities import TICK_PER_SECOND
from battle_sim.game_core import GameCore
from battle_sim.geometry import Vec2
from battle_sim.particles import BulletHole, Explosion, Smoke
from battle_sim.projectiles import (
    SMOKE_COLOR,
    SMOKE_PUFFS,
    CannonBall,
    Coin,
    CritBullet,
    ElectricBall,
    Mine,
    SweatySoybean,
    UdongeinDirectionalBullet,
    WarningLine,
    WaterDrop,
)
from battle_sim.unit import Unit

FREE = Vec2(0.0, -5.0)
FAR = Vec2(0.0, -8.0)
EAST = Vec2(6.0, 0.0)


class Target(Unit):
    def is_hit(self, position):
        return (position - self.position).length() < 0.5

    def update(self):
        pass


def spawn(core, player_id, position):
    unit_id = core.add_unit(Target, player_id)
    core.units[unit_id].position = position
    return unit_id


def setup_duel():
    core = GameCore(seed=0)
    shooter = spawn(core, 1, FAR)
    target = spawn(core, 2, FREE + Vec2(0.1, 0.0))
    return core, shooter, target


def fire(core, bullet_type, shooter, player_id, *args, damage_scale=1.0, position=FREE):
    bullet_id = core.add_bullet(bullet_type, shooter, player_id, position, 0.0, damage_scale, *args)
    return bullet_id, core.bullets[bullet_id]


def loss_after_one_hit(bullet_type, *args, damage_scale=1.0):
    core, shooter, target = setup_duel()
    _, bullet = fire(core, bullet_type, shooter, 1, *args, damage_scale=damage_scale)
    bullet.update()
    core.process_event_queue()
    return 1.0 - core.units[target].health


def test_cannon_ball_moves_along_velocity_in_open_space():
    core = GameCore(seed=0)
    bullet_id, bullet = fire(core, CannonBall, 0, 1, EAST)
    bullet.update()
    core.process_event_queue()
    assert bullet_id in core.bullets
    assert bullet.position.x > FREE.x
    assert bullet.position.y == FREE.y


def test_cannon_ball_damages_target_and_is_removed():
    core, shooter, target = setup_duel()
    bullet_id, bullet = fire(core, CannonBall, shooter, 1, EAST)
    bullet.update()
    core.process_event_queue()
    assert core.units[target].health < 1.0
    assert core.units[shooter].health == 1.0
    assert bullet_id not in core.bullets


def test_damage_scales_linearly():
    single = loss_after_one_hit(CannonBall, EAST)
    double = loss_after_one_hit(CannonBall, EAST, damage_scale=2.0)
    assert double == pytest.approx(2.0 * single)


def test_relative_damage_of_bullet_kinds():
    cannon = loss_after_one_hit(CannonBall, EAST)
    electric = loss_after_one_hit(ElectricBall, EAST)
    udongein = loss_after_one_hit(UdongeinDirectionalBullet, EAST)
    assert electric > cannon > udongein > 0.0


def test_cannon_ball_leaves_smoke_when_destroyed():
    core = GameCore(seed=0)
    bullet_id, _ = fire(core, CannonBall, 0, 1, EAST)
    core.push_event_remove_bullet(bullet_id)
    core.process_event_queue()
    smokes = [p for p in core.particles.values() if isinstance(p, Smoke)]
    assert len(smokes) == SMOKE_PUFFS
    assert all(s.color == SMOKE_COLOR for s in smokes)


def test_electric_ball_smoke_is_large():
    core = GameCore(seed=0)
    bullet_id, _ = fire(core, ElectricBall, 0, 1, EAST)
    core.push_event_remove_bullet(bullet_id)
    core.process_event_queue()
    sizes = {p.size for p in core.particles.values()}
    assert sizes == {0.8}


def test_udongein_bullet_leaves_no_particles():
    core = GameCore(seed=0)
    bullet_id, _ = fire(core, UdongeinDirectionalBullet, 0, 1, EAST)
    core.push_event_remove_bullet(bullet_id)
    core.process_event_queue()
    assert bullet_id not in core.bullets
    assert len(core.particles) == 0


def test_bullet_dies_on_obstacle():
    core = GameCore(seed=0)
    start = Vec2(-3.0, 2.05)
    bullet_id = core.add_bullet(SweatySoybean, 0, 1, start, 0.0, 1.0, Vec2(0.0, 60.0))
    core.bullets[bullet_id].update()
    core.process_event_queue()
    assert bullet_id not in core.bullets


def test_coin_passes_through_and_explodes_on_target():
    core, shooter, target = setup_duel()
    bullet_id, bullet = fire(core, Coin, shooter, 1, EAST, 10)
    bullet.update()
    core.process_event_queue()
    assert bullet_id in core.bullets
    assert core.units[target].health < 1.0
    explosions = [p for p in core.particles.values() if isinstance(p, Explosion)]
    assert len(explosions) == 1
    assert explosions[0].position == core.units[target].position


def test_coin_expires_after_life_time():
    core = GameCore(seed=0)
    bullet_id, bullet = fire(core, Coin, 0, 1, Vec2(), 2)
    for _ in range(2):
        bullet.update()
        core.process_event_queue()
        assert bullet_id in core.bullets
    bullet.update()
    core.process_event_queue()
    assert bullet_id not in core.bullets
    assert bullet.life_time == 0


def test_crit_bullet_certain_crit_doubles_damage_and_leaves_hole():
    crit_core, shooter, target = setup_duel()
    _, bullet = fire(crit_core, CritBullet, shooter, 1, EAST, 1.0, 1.0)
    bullet.update()
    crit_core.process_event_queue()
    crit_loss = 1.0 - crit_core.units[target].health
    assert any(isinstance(p, BulletHole) for p in crit_core.particles.values())

    plain_core, shooter, target = setup_duel()
    _, bullet = fire(plain_core, CritBullet, shooter, 1, EAST, 0.0, 1.0)
    bullet.update()
    plain_core.process_event_queue()
    plain_loss = 1.0 - plain_core.units[target].health
    assert not any(isinstance(p, BulletHole) for p in plain_core.particles.values())

    assert crit_loss == pytest.approx(2.0 * plain_loss)


def test_crit_bullet_skips_unit_whose_id_matches_player_id():
    core, shooter, target = setup_duel()
    bullet_id, bullet = fire(core, CritBullet, shooter, target, EAST, 0.0, 1.0)
    bullet.update()
    core.process_event_queue()
    assert core.units[target].health == 1.0
    assert bullet_id in core.bullets


def test_mine_arms_then_destroys_target():
    core = GameCore(seed=0)
    target = spawn(core, 2, FREE)
    bullet_id, mine = fire(core, Mine, 0, 99, Vec2())
    for _ in range(TICK_PER_SECOND * 2):
        mine.update()
        core.process_event_queue()
    assert target in core.units
    assert core.units[target].health == 1.0
    mine.update()
    core.process_event_queue()
    assert target not in core.units
    assert bullet_id not in core.bullets


def test_water_drop_destroys_target():
    core, shooter, target = setup_duel()
    bullet_id, bullet = fire(core, WaterDrop, shooter, 1, EAST)
    bullet.update()
    core.process_event_queue()
    assert target not in core.units
    assert bullet_id not in core.bullets


def test_warning_line_vanishes_without_damage():
    core, shooter, target = setup_duel()
    bullet_id, bullet = fire(core, WarningLine, shooter, 1, EAST)
    bullet.update()
    core.process_event_queue()
    assert core.units[target].health == 1.0
    assert bullet_id not in core.bullets
    assert len(core.particles) == 0