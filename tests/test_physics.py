import math

import pytest

from orbitsim.components import Body
from orbitsim.physics import PhysicsSystem
from orbitsim.scene import Scene
from orbitsim.vector import Vec2, norm


def make_scene(*bodies):
    scene = Scene()
    scene.register_component(Body)
    ids = []
    for body in bodies:
        entity = scene.create_entity()
        scene.assign_component(entity, body)
        ids.append(entity)
    return scene, ids


def test_update_below_time_step_does_nothing():
    body = Body(position=Vec2(1.0, 2.0), velocity=Vec2(3.0, 4.0), mass=1.0)
    scene, _ = make_scene(body)
    system = PhysicsSystem(scene)
    system.update(system.time_step / 2)
    assert system.step_counter == 0
    assert body.position == Vec2(1.0, 2.0)


def test_update_runs_one_step_and_elapsed_time():
    body = Body(position=Vec2(0.0, 0.0), velocity=Vec2(10.0, 0.0), mass=1.0)
    scene, _ = make_scene(body)
    system = PhysicsSystem(scene)
    system.update(system.time_step)
    assert system.step_counter == 1
    assert system.elapsed_time() == pytest.approx(system.time_step)
    assert body.position.x == pytest.approx(10.0 * system.time_step)


def test_forward_then_backward_returns_free_body():
    body = Body(position=Vec2(5.0, -3.0), velocity=Vec2(2.0, 7.0), mass=1.0)
    scene, _ = make_scene(body)
    system = PhysicsSystem(scene)
    system.update_steps(4)
    assert system.step_counter == 4
    system.update_steps(-4)
    assert system.step_counter == 0
    assert body.position.x == pytest.approx(5.0)
    assert body.position.y == pytest.approx(-3.0)


def test_negative_time_scale_steps_backwards():
    body = Body(position=Vec2(0.0, 0.0), velocity=Vec2(1.0, 0.0), mass=1.0)
    scene, _ = make_scene(body)
    system = PhysicsSystem(scene, time_scale=-1.0)
    system.update(system.time_step)
    assert system.step_counter == -1
    assert body.position.x < 0


def test_acceleration_ignores_own_body():
    body = Body(position=Vec2(0.0, 0.0), mass=1e9)
    scene, (entity,) = make_scene(body)
    system = PhysicsSystem(scene)
    assert system.compute_acceleration(Vec2(0.0, 0.0), entity) == Vec2(0.0, 0.0)


def test_acceleration_points_towards_mass_and_follows_inverse_square():
    attractor = Body(position=Vec2(0.0, 0.0), mass=1e9)
    scene, _ = make_scene(attractor)
    system = PhysicsSystem(scene)
    near = system.compute_acceleration(Vec2(100.0, 0.0), -1)
    far = system.compute_acceleration(Vec2(200.0, 0.0), -1)
    assert near.x < 0
    assert near.y == pytest.approx(0.0)
    assert norm(near) == pytest.approx(4 * norm(far))


def test_rotation_wraps_into_half_turn_range():
    body = Body(rotation=3.1, angular_velocity=10.0, mass=1.0)
    scene, _ = make_scene(body)
    system = PhysicsSystem(scene)
    system.update_steps(1)
    assert -math.pi <= body.rotation <= math.pi
    assert body.rotation < 0


def test_invalid_time_step_rejected():
    scene, _ = make_scene()
    with pytest.raises(ValueError):
        PhysicsSystem(scene, time_step=0.0)