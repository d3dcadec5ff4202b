import math

import pytest

from battle_sim.entities import (
    Bullet,
    GameObject,
    InputData,
    Obstacle,
    Particle,
    Skill,
    SkillType,
)
from battle_sim.geometry import Vec2


class _Thing(GameObject):
    def update(self):
        self.rotation += 1.0


class _Wall(Obstacle):
    def is_blocked(self, p):
        return p.x > 0


class _Spark(Particle):
    def update(self):
        self.position = self.position + Vec2(1.0, 0.0)


class _Shot(Bullet):
    def update(self):
        self.position = self.position + Vec2(0.0, 1.0)


class _RecordingCore:
    def __init__(self):
        self.events = []


def test_skill_type_order():
    assert [m.name for m in SkillType] == ["E", "Q", "R", "P", "B"]
    skill = Skill("Swap", SkillType.B)
    assert skill.type is list(SkillType)[-1]


def test_skill_defaults():
    skill = Skill("Dash", SkillType.E)
    assert skill.name == "Dash"
    assert skill.type is SkillType.E
    assert skill.time_remain == 0
    assert skill.function is None


def test_skill_full_fields():
    called = []
    skill = Skill("Burst", SkillType.B, 10, 20, 1, 3, "desc", "src", lambda: called.append(1))
    skill.function()
    assert (skill.time_remain, skill.time_total, skill.bullet_type, skill.bullet_total_number) == (10, 20, 1, 3)
    assert called == [1]


def test_input_data_defaults_are_independent():
    first, second = InputData(), InputData()
    first.key_down.add(65)
    assert second.key_down == set()
    assert first.mouse_cursor_position == Vec2()


def test_game_object_is_abstract():
    with pytest.raises(TypeError):
        GameObject(None, 1)


def test_game_object_state_and_transforms():
    thing = _Thing("core", 7, Vec2(2.0, 3.0), 0.4)
    assert (thing.game_core, thing.id) == ("core", 7)
    p = Vec2(0.5, -1.5)
    assert tuple(thing.world_to_local(thing.local_to_world(p))) == pytest.approx(tuple(p))
    thing.update()
    assert thing.rotation == pytest.approx(1.4)


def test_game_object_default_pose():
    thing = _Thing(None, 1)
    assert thing.position == Vec2()
    assert thing.local_to_world(Vec2(1.0, 2.0)) == Vec2(1.0, 2.0)


def test_obstacle_defaults():
    wall = _Wall(None, 2, Vec2(1.0, 1.0), math.pi)
    assert wall.get_surface_normal(Vec2(), Vec2(1.0, 1.0)) == (Vec2(), Vec2())
    wall.update()
    assert wall.position == Vec2(1.0, 1.0)
    assert wall.is_blocked(Vec2(1.0, 0.0)) is True


def test_obstacle_needs_is_blocked():
    class Incomplete(Obstacle):
        pass

    with pytest.raises(TypeError):
        Incomplete(None, 1, Vec2())


def test_particle_keeps_pose():
    spark = _Spark(None, 3, Vec2(1.0, 2.0), 0.3)
    assert spark.rotation == 0.3
    spark.update()
    assert spark.position == Vec2(2.0, 2.0)


def test_bullet_fields_and_destroy():
    core = _RecordingCore()
    shot = _Shot(core, 4, 9, 2, Vec2(1.0, 1.0), 0.5, 1.5)
    assert (shot.unit_id, shot.player_id, shot.damage_scale) == (9, 2, 1.5)
    shot.on_destroy()
    assert core.events == []
    assert shot.position == Vec2(1.0, 1.0)