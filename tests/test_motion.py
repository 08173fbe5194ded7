"""Tests for player motion, scroll smoothing and lane constraints."""

import pytest

from game.raider import BankPolicy, EngineConfig, InputState
from game.raider.entities import Obstacle, ObstacleType, Player
from game.raider.motion import MotionController, MotionState
from game.raider.registry import EntityRegistry


@pytest.fixture
def player(config):
    x, y = config.spawn_point
    return Player(x=x, y=300.0)


@pytest.fixture
def state():
    return MotionState(scroll_speed=3.0, base_scroll=3.0)


class TestScroll:

    def test_ascend_smooths_toward_double_speed(self, config, player, state):
        MotionController(config).update_player(player, InputState(up=True), state)
        assert state.scroll_speed == pytest.approx(3.3)

    def test_descend_smooths_toward_half_speed(self, config, player, state):
        MotionController(config).update_player(player, InputState(down=True), state)
        assert state.scroll_speed == pytest.approx(2.85)

    def test_never_snaps(self, config, player, state):
        motion = MotionController(config)
        speeds = []
        for _ in range(30):
            motion.update_player(player, InputState(up=True), state)
            speeds.append(state.scroll_speed)
        assert all(b > a for a, b in zip(speeds, speeds[1:]))
        assert speeds[-1] < 6.0

    def test_bottom_margin_restores_base_speed(self, config, player, state):
        state.scroll_speed = 1.0
        player.y = config.height
        MotionController(config).update_player(player, InputState(), state)
        assert player.y == config.height - config.edge_margin - player.height
        assert state.scroll_speed == pytest.approx(3.0)


class TestPlayer:

    def test_displacement_uses_speed_multiplier(self, config, player, state):
        state.speed_multiplier = 0.3
        x0 = player.x
        MotionController(config).update_player(player, InputState(right=True), state)
        assert state.speed_multiplier == pytest.approx(0.305)
        assert player.x == pytest.approx(x0 + 5 * 0.305)

    def test_tilt_is_smoothed(self, config, player, state):
        motion = MotionController(config)
        motion.update_player(player, InputState(left=True), state)
        assert player.tilt == pytest.approx(-0.03)
        for _ in range(100):
            motion.update_player(player, InputState(), state)
        assert abs(player.tilt) < 1e-3

    def test_top_margin(self, config, player, state):
        player.y = 0
        MotionController(config).update_player(player, InputState(up=True), state)
        assert player.y == config.edge_margin


class TestBanks:

    def test_clamp_policy(self, config, player, state):
        player.x = 0.0
        lethal = MotionController(config).update_player(player, InputState(left=True), state)
        assert lethal is False
        assert player.x == config.channel_left

    def test_lethal_policy(self, player, state):
        config = EngineConfig(bank_policy=BankPolicy.LETHAL)
        player.x = config.channel_right
        lethal = MotionController(config).update_player(player, InputState(), state)
        assert lethal is True
        assert player.x + player.width == config.channel_right

    def test_lethal_policy_mid_channel_is_safe(self, player, state):
        config = EngineConfig(bank_policy="lethal")
        assert MotionController(config).update_player(player, InputState(left=True), state) is False


def test_obstacles_scroll_and_bounce(config):
    registry = EntityRegistry()
    heli = registry.add_obstacle(Obstacle(ObstacleType.PATROL_AIR, config.channel_left + 1, 0.0, 40, 40, vx=-3.0))
    rock = registry.add_obstacle(Obstacle(ObstacleType.STATIC, 200.0, 0.0, 40, 40, vx=2.0))
    MotionController(config).advance_obstacles(registry, 4.0)
    assert heli.y == 4.0
    assert heli.vx == 3.0
    # static hazards never drift
    assert rock.x == 200.0
