"""Tests for projectile ballistics, homing and enemy fire."""

import math

import pytest

from game.raider import InputState
from game.raider.entities import EffectType, ObstacleType, ProjectileTag
from game.raider.player_state import Outcome

from conftest import move_player, place, shoot


class TestHoming:

    def test_primary_shots_curve_toward_target(self, engine):
        engine.powerups.activate(EffectType.GUIDED, 0)
        place(engine, ObstacleType.PATROL_AIR, 350.0, 100.0)
        proj = shoot(engine, 200.0, 400.0)

        engine.projectiles.integrate(tick=1)

        assert proj.vx > 0
        assert proj.vy < 0
        assert math.hypot(proj.vx, proj.vy) == pytest.approx(12.0)

    def test_escort_shots_fly_straight(self, engine):
        engine.powerups.activate(EffectType.GUIDED, 0)
        place(engine, ObstacleType.PATROL_AIR, 350.0, 100.0)
        proj = shoot(engine, 200.0, 400.0, tag=ProjectileTag.ESCORT)
        engine.projectiles.integrate(tick=1)
        assert proj.vx == 0.0

    def test_no_homing_without_effect(self, engine):
        place(engine, ObstacleType.PATROL_AIR, 350.0, 100.0)
        proj = shoot(engine, 200.0, 400.0)
        engine.projectiles.integrate(tick=1)
        assert proj.vx == 0.0
        assert proj.y == 388.0

    def test_pickups_are_not_targets(self, engine):
        place(engine, ObstacleType.FUEL, 350.0, 100.0)
        proj = shoot(engine, 200.0, 400.0)
        assert engine.projectiles.nearest_hostile(proj) is None
        assert engine.projectiles.steer(proj) is False

    def test_zero_distance_leaves_velocity(self, engine):
        proj = shoot(engine, 200.0, 400.0)
        # obstacle centred exactly on the projectile centre
        place(engine, ObstacleType.PATROL_AIR, 203.0 - 20.0, 406.0 - 20.0)
        assert engine.projectiles.steer(proj) is False
        assert (proj.vx, proj.vy) == (0.0, -12.0)

    def test_nearest_target_chosen(self, engine):
        near = place(engine, ObstacleType.PATROL_SEA, 150.0, 300.0)
        place(engine, ObstacleType.PATROL_AIR, 350.0, 50.0)
        proj = shoot(engine, 200.0, 400.0)
        assert engine.projectiles.nearest_hostile(proj) is near

    def test_distance_measured_from_projectile_centre(self, engine):
        # closer to the top-left corner, but farther from the centre (203, 406)
        place(engine, ObstacleType.PATROL_AIR, 179.0, 379.0)
        by_centre = place(engine, ObstacleType.PATROL_SEA, 183.0, 390.0)
        proj = shoot(engine, 200.0, 400.0)
        assert engine.projectiles.nearest_hostile(proj) is by_centre


def test_projectiles_leaving_playfield_are_purged(engine):
    proj = shoot(engine, 200.0, -45.0)
    engine.projectiles.integrate(tick=1)
    assert proj.alive is False


class TestFiring:

    def test_rate_limited(self, engine, config):
        fire = InputState(fire=True)
        assert engine.projectiles.fire_player(1, fire) == 1
        assert engine.projectiles.fire_player(2, fire) == 0
        assert engine.projectiles.fire_player(1 + config.player_fire_ticks, fire) == 1

    def test_escorts_fire_with_player(self, engine):
        engine.powerups.activate(EffectType.ESCORT, 0)
        engine.powerups.activate(EffectType.ESCORT, 0)
        assert engine.projectiles.fire_player(1, InputState(fire=True)) == 5
        tags = [p.tag for p in engine.registry.live_projectiles()]
        assert tags.count(ProjectileTag.ESCORT) == 4
        assert all(e.last_fire == 1 for e in engine.powerups.escorts)

    def test_enemy_aims_at_player(self, engine, config):
        move_player(engine, 200.0, 600.0)
        place(engine, ObstacleType.GROUND_SHOOTER, 20.0, 100.0, 35.0, 35.0)
        assert engine.projectiles.fire_enemies(tick=5) == 1
        (proj,) = list(engine.registry.live_projectiles(enemy=True))
        assert proj.vx > 0 and proj.vy > 0
        assert math.hypot(proj.vx, proj.vy) == pytest.approx(config.enemy_projectile_speed)
        # cooldown
        assert engine.projectiles.fire_enemies(tick=6) == 0

    def test_offscreen_enemies_hold_fire(self, engine):
        place(engine, ObstacleType.GROUND_SHOOTER, 20.0, -50.0, 35.0, 35.0)
        assert engine.projectiles.fire_enemies(tick=5) == 0

    def test_boss_fires_spread(self, engine):
        place(engine, ObstacleType.BOSS, 200.0, 100.0, 80.0, 60.0, health=3, max_health=3)
        assert engine.projectiles.fire_enemies(tick=5) == 3


class TestEnemyHits:

    def test_hit_costs_a_life(self, engine):
        p = engine.player
        bullet = shoot(engine, p.x + 15, p.y + 15, 0.0, 0.0, enemy=True, width=8.0, height=8.0)
        outcomes = engine.projectiles.resolve_enemy_hits(tick=1)
        assert outcomes == [Outcome.RESPAWNED]
        assert bullet.alive is False
        assert p.lives == 2

    @pytest.mark.parametrize("protection", ["invulnerable", "shield"])
    def test_protected_hit_still_consumes_projectile(self, engine, protection):
        p = engine.player
        if protection == "invulnerable":
            p.invulnerable_until = 100
        else:
            engine.powerups.activate(EffectType.SHIELD, 0)
        bullet = shoot(engine, p.x + 15, p.y + 15, 0.0, 0.0, enemy=True, width=8.0, height=8.0)
        assert engine.projectiles.resolve_enemy_hits(tick=1) == [Outcome.IGNORED]
        assert bullet.alive is False
        assert p.lives == 3

    def test_padding_forgives_grazes(self, engine):
        p = engine.player
        shoot(engine, p.x - 6, p.y + 15, 0.0, 0.0, enemy=True, width=8.0, height=8.0)
        assert engine.projectiles.resolve_enemy_hits(tick=1) == []
