"""
test_physics_and_collision.py
-----------------------------
Unit tests for the kinematics helpers and AABB collision.
"""

import pytest

from dino_dash.game import physics
from dino_dash.game.collision import Hitbox, check_collision, player_hitbox
from dino_dash.game.simulation_state import Obstacle


# ===========================================================
# Time Scale
# ===========================================================

@pytest.mark.parametrize("elapsed, expected", [
    (1000 / 60, 1.0),
    (1000 / 120, 0.5),
    (1000 / 30, 2.0),
    (250, 2.0),
    (0, 0.0),
    (-10, 0.0),
])
def test_time_scale(elapsed, expected):
    assert physics.time_scale(elapsed, 1000 / 60, 2.0) == pytest.approx(expected)


# ===========================================================
# Integration & Jump
# ===========================================================

def test_integrate_applies_gravity_before_moving():
    y, velocity, airborne = physics.integrate(100.0, 2.0, 1.0, gravity=0.8, ground_y=340.0)

    assert velocity == pytest.approx(2.8)
    assert y == pytest.approx(102.8)
    assert airborne is True


def test_integrate_clamps_to_ground_and_stops():
    y, velocity, airborne = physics.integrate(335.0, 10.0, 1.0, gravity=0.8, ground_y=340.0)

    assert (y, velocity, airborne) == (340.0, 0.0, False)


def test_apply_jump_only_when_grounded():
    assert physics.apply_jump(0.0, False, True, -15.0) == (-15.0, True)
    assert physics.apply_jump(-4.0, True, True, -15.0) == (-4.0, True)
    assert physics.apply_jump(0.0, False, False, -15.0) == (0.0, False)


# ===========================================================
# Collision
# ===========================================================

def test_hitbox_overlap_is_strict():
    box = Hitbox.from_rect(0, 0, 10, 10)

    assert box.overlaps(Hitbox.from_rect(5, 5, 10, 10))
    assert not box.overlaps(Hitbox.from_rect(10, 0, 10, 10))
    assert not box.overlaps(Hitbox.from_rect(0, 10, 10, 10))


def test_player_hitbox_is_narrower_than_sprite(config):
    box = player_hitbox(config.ground_y, config)

    assert box.left == config.dino_x
    assert box.width == config.hitbox_width
    assert box.width < config.sprite_size
    assert box.height == config.hitbox_height


def test_check_collision_against_any_obstacle(config):
    miss = Obstacle(400, config.ground_y, 30, 50)
    hit = Obstacle(70, config.ground_y, 30, 50)

    assert check_collision(config.ground_y, [miss], config) is False
    assert check_collision(config.ground_y, [miss, hit], config) is True
    assert check_collision(config.ground_y - 60, [hit], config) is False
