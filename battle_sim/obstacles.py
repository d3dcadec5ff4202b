"""Concrete obstacles: solid blocks, rebounding blocks, rivers and temporary safety zones."""

from __future__ import annotations

from typing import Any

from battle_sim.entities import TICK_PER_SECOND, Obstacle
from battle_sim.geometry import Vec2

SAFETY_DECLARATION_TICKS = 3 * TICK_PER_SECOND


def segments_intersect(a: Vec2, b: Vec2, c: Vec2, d: Vec2) -> bool:
    """Whether segment ``ab`` touches or crosses segment ``cd``."""
    if (
        max(c.x, d.x) < min(a.x, b.x)
        or max(c.y, d.y) < min(a.y, b.y)
        or max(a.x, b.x) < min(c.x, d.x)
        or max(a.y, b.y) < min(c.y, d.y)
    ):
        return False
    if (a - d).cross(c - d) * (b - d).cross(c - d) > 0:
        return False
    if (c - a).cross(b - a) * (d - a).cross(b - a) > 0:
        return False
    return True


class _RectangularObstacle(Obstacle):
    """An obstacle covering an axis-aligned rectangle in its own frame."""

    def __init__(
        self,
        game_core: Any,
        id: int,
        position: Vec2,
        rotation: float = 0.0,
        scale: Vec2 = Vec2(1.0, 1.0),
    ) -> None:
        super().__init__(game_core, id, position, rotation)
        self.scale = scale

    def _contains(self, p: Vec2) -> bool:
        local = self.world_to_local(p)
        return -self.scale.x <= local.x <= self.scale.x and -self.scale.y <= local.y <= self.scale.y

    def is_blocked(self, p: Vec2) -> bool:
        return self._contains(p)


class Block(_RectangularObstacle):
    """A solid rectangular wall."""

    def __init__(
        self,
        game_core: Any,
        id: int,
        position: Vec2,
        rotation: float = 0.0,
        scale: Vec2 = Vec2(1.0, 1.0),
    ) -> None:
        super().__init__(game_core, id, position, rotation, scale)

    def is_blocked(self, p: Vec2) -> bool:
        """Whether ``p`` lies inside the block, edges included."""
        return self._contains(p)


class ReboundingBlock(_RectangularObstacle):
    """A rectangular block off which bullets can bounce."""

    def __init__(
        self,
        game_core: Any,
        id: int,
        position: Vec2,
        rotation: float = 0.0,
        scale: Vec2 = Vec2(1.0, 1.0),
    ) -> None:
        super().__init__(game_core, id, position, rotation, scale)

    def is_blocked(self, p: Vec2) -> bool:
        """Whether ``p`` lies inside the block, edges included."""
        return self._contains(p)

    def get_surface_normal(self, origin: Vec2, terminus: Vec2) -> tuple[Vec2, Vec2]:
        """World intersection point and unit outward normal of the first edge crossed.

        Edges are tried left, right, bottom, top. If the segment crosses none,
        both returned vectors are zero.
        """
        o = self.world_to_local(origin)
        t = self.world_to_local(terminus)
        sx, sy = self.scale.x, self.scale.y
        edges = (
            (Vec2(-sx, -sy), Vec2(-sx, sy), Vec2(-1.0, 0.0)),
            (Vec2(sx, -sy), Vec2(sx, sy), Vec2(1.0, 0.0)),
            (Vec2(-sx, -sy), Vec2(sx, -sy), Vec2(0.0, -1.0)),
            (Vec2(-sx, sy), Vec2(sx, sy), Vec2(0.0, 1.0)),
        )
        for c, d, normal in edges:
            if not segments_intersect(o, t, c, d):
                continue
            delta = t - o
            if normal.x:
                span, offset = delta.x, c.x - o.x
            else:
                span, offset = delta.y, c.y - o.y
            local_hit = o if span == 0 else o + delta * (offset / span)
            direction = self.local_to_world(local_hit + normal) - self.local_to_world(local_hit)
            return self.local_to_world(local_hit), direction.normalized()
        return Vec2(), Vec2()


class River(_RectangularObstacle):
    """Water that blocks units but lets bullets standing on it pass."""

    def __init__(
        self,
        game_core: Any,
        id: int,
        position: Vec2,
        rotation: float = 0.0,
        scale: Vec2 = Vec2(1.0, 1.0),
    ) -> None:
        super().__init__(game_core, id, position, rotation, scale)

    def is_blocked(self, p: Vec2) -> bool:
        """Inside the river, unless a bullet sits exactly at ``p``."""
        if not self._contains(p):
            return False
        return not any(bullet.position == p for bullet in self.game_core.bullets.values())


class SafetyDeclaration(_RectangularObstacle):
    """A temporary square shelter that disappears after three seconds."""

    def __init__(
        self,
        game_core: Any,
        id: int,
        position: Vec2,
        rotation: float = 0.0,
        scale: Vec2 = Vec2(3.0, 3.0),
    ) -> None:
        super().__init__(game_core, id, position, rotation, scale)
        self.valid_time = SAFETY_DECLARATION_TICKS

    def is_blocked(self, p: Vec2) -> bool:
        """Whether ``p`` lies inside the shelter, edges included."""
        return self._contains(p)

    def update(self) -> None:
        """Count down the remaining lifetime and ask for removal when it runs out."""
        if self.valid_time:
            self.valid_time -= 1
        else:
            self.game_core.push_event_remove_obstacle(self.id)