"""Headless tick-based 2D battle simulation: units, bullets, obstacles, particles and a game core."""

__version__ = "0.1.0"
__all__ = [
    "entities",
    "game_core",
    "geometry",
    "guided",
    "obstacles",
    "particles",
    "player",
    "projectiles",
    "unit",
]