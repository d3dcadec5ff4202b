[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "battle_sim"
version = "0.1.0"
description = "Tick-based 2D battle simulation: units, bullets, obstacles, particles and an event-driven game core."
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "simulation", "arcade", "2d", "bullets", "tanks"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Arcade",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["battle_sim"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
