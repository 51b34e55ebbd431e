import math

import pytest

from orbitsim.components import Body, Controls, Player
from orbitsim.gameplay import (
    ENGINE_ACCELERATION,
    RCS_CIRCULAR_ACCELERATION,
    RCS_LINEAR_ACCELERATION,
    GameplaySystem,
)
from orbitsim.scene import Scene
from orbitsim.vector import Vec2


def make_scene(player, body):
    scene = Scene()
    scene.register_component(Player)
    scene.register_component(Body)
    entity = scene.create_entity()
    scene.assign_component(entity, player)
    scene.assign_component(entity, body)
    return scene


def test_engine_pushes_forward():
    body = Body(mass=1.0)
    scene = make_scene(Player(player_controls=Controls(engine=True)), body)
    GameplaySystem(scene).update(1.0)
    assert body.velocity == Vec2(0.0, -ENGINE_ACCELERATION)
    assert ENGINE_ACCELERATION == 200.0


def test_engine_follows_rotation():
    body = Body(rotation=math.pi / 2, mass=1.0)
    scene = make_scene(Player(auto_controls=Controls(engine=True)), body)
    GameplaySystem(scene).update(1.0)
    assert body.velocity.x == pytest.approx(ENGINE_ACCELERATION)
    assert body.velocity.y == pytest.approx(0.0, abs=1e-9)


def test_opposite_rcs_cancel():
    body = Body(mass=1.0)
    controls = Controls(
        rcs_up=True, rcs_down=True, rcs_left=True, rcs_right=True,
        rcs_clockwise=True, rcs_counter_clockwise=True,
    )
    scene = make_scene(Player(player_controls=controls), body)
    GameplaySystem(scene).update(0.5)
    assert body.velocity == Vec2(0.0, 0.0)
    assert body.angular_velocity == 0.0


def test_clockwise_rcs_increases_angular_velocity():
    body = Body(angular_velocity=1.0, mass=1.0)
    scene = make_scene(Player(auto_controls=Controls(rcs_clockwise=True)), body)
    GameplaySystem(scene).update(0.5)
    assert body.angular_velocity == pytest.approx(1.0 + RCS_CIRCULAR_ACCELERATION * 0.5)


def test_rcs_right_scales_with_dt():
    body = Body(mass=1.0)
    scene = make_scene(Player(player_controls=Controls(rcs_right=True)), body)
    GameplaySystem(scene).update(0.25)
    assert body.velocity.x == pytest.approx(RCS_LINEAR_ACCELERATION * 0.25)
    assert body.velocity.y == pytest.approx(0.0)


def test_body_without_player_untouched():
    scene = make_scene(Player(player_controls=Controls(engine=True)), Body(mass=1.0))
    other = Body(velocity=Vec2(1.0, 1.0), mass=1.0)
    entity = scene.create_entity()
    scene.assign_component(entity, other)
    GameplaySystem(scene).update(1.0)
    assert other.velocity == Vec2(1.0, 1.0)