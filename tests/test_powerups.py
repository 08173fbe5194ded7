"""Tests for timed power-up effects and escorts."""

import pytest

from game.raider.entities import EffectType
from game.raider.powerups import PowerUpManager


@pytest.fixture
def manager(config):
    return PowerUpManager(config)


def test_recollection_extends_not_stacks(manager, config):
    manager.activate(EffectType.SHIELD, 0)
    manager.activate(EffectType.SHIELD, 100)
    assert len(manager.effects) == 1
    assert manager.effects[EffectType.SHIELD].expires_at == 100 + config.shield_ticks


def test_expiry(manager, config):
    manager.activate(EffectType.GUIDED, 10)
    end = 10 + config.guided_ticks
    assert manager.is_active(EffectType.GUIDED, end - 1)
    assert manager.expire(end - 1) == []
    assert manager.expire(end) == [EffectType.GUIDED]
    assert not manager.is_active(EffectType.GUIDED, end)


def test_escort_pairs(manager, config):
    assert len(manager.escorts) == 0
    manager.activate(EffectType.ESCORT, 0)
    assert len(manager.escorts) == 2
    manager.activate(EffectType.ESCORT, 10)
    assert len(manager.escorts) == 4
    offsets = {abs(e.offset_x) for e in manager.escorts}
    assert len(offsets) == 2
    manager.activate(EffectType.ESCORT, 20)
    assert len(manager.escorts) == 4
    assert {e.side for e in manager.escorts} == {"left", "right"}

    manager.expire(20 + config.escort_ticks)
    assert manager.escorts == []


def test_escort_positions_follow_player(manager):
    manager.activate(EffectType.ESCORT, 0)
    positions = manager.escort_positions((200.0, 500.0))
    xs = sorted(x + escort.width / 2 for escort, x, _ in positions)
    assert xs == [150.0, 250.0]
