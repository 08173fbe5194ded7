"""Test configuration and fixtures for the river raid engine tests."""

import pytest

from game.raider import EngineConfig, RaiderEngine
from game.raider.engine import new_events
from game.raider.entities import Obstacle, Projectile
from game.raider.utils import make_rng


@pytest.fixture
def config():
    """Default engine configuration."""
    return EngineConfig()


@pytest.fixture
def engine(config):
    """A freshly seeded engine."""
    return RaiderEngine(config=config, seed=1234)


@pytest.fixture
def rng():
    return make_rng(7)


@pytest.fixture
def events():
    return new_events()


def place(engine, obstacle_type, x, y, width=40.0, height=40.0, **kwargs):
    """Helper to put an obstacle straight into the registry."""
    return engine.registry.add_obstacle(
        Obstacle(type=obstacle_type, x=x, y=y, width=width, height=height, **kwargs)
    )


def shoot(engine, x, y, vx=0.0, vy=-12.0, **kwargs):
    """Helper to put a projectile straight into the registry."""
    return engine.registry.add_projectile(Projectile(x=x, y=y, vx=vx, vy=vy, **kwargs))


def move_player(engine, x, y):
    engine.player.x = x
    engine.player.y = y
