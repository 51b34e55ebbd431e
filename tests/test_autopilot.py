import pytest

from orbitsim.autopilot import AutoPilotSystem
from orbitsim.components import Body, Controls, Player
from orbitsim.events import Event, RcsEvent
from orbitsim.scene import Scene

THRESHOLD = 0.5


def make_scene(angular_velocity, player_controls=None, auto_controls=None):
    scene = Scene()
    scene.register_component(Player)
    scene.register_component(Body)
    entity = scene.create_entity()
    player = Player(
        player_controls=player_controls or Controls(),
        auto_controls=auto_controls or Controls(),
        angular_velocity_threshold=THRESHOLD,
    )
    scene.assign_component(entity, player)
    scene.assign_component(entity, Body(angular_velocity=angular_velocity, mass=1.0))
    return scene, entity, player


def test_spinning_positive_starts_counter_clockwise():
    scene, entity, player = make_scene(THRESHOLD * 2)
    events = AutoPilotSystem(scene).queue_events()
    assert events == [Event(entity, True, RcsEvent.COUNTER_CLOCKWISE)]
    assert player.auto_controls.rcs_counter_clockwise


def test_spinning_negative_starts_clockwise():
    scene, entity, player = make_scene(-THRESHOLD * 2)
    events = AutoPilotSystem(scene).queue_events()
    assert events == [Event(entity, True, RcsEvent.CLOCKWISE)]
    assert player.auto_controls.rcs_clockwise


def test_already_firing_emits_nothing():
    scene, _, player = make_scene(
        THRESHOLD * 2, auto_controls=Controls(rcs_counter_clockwise=True)
    )
    assert AutoPilotSystem(scene).queue_events() == []
    assert player.auto_controls.rcs_counter_clockwise


def test_slow_spin_stops_active_rcs():
    scene, entity, player = make_scene(
        THRESHOLD / 2, auto_controls=Controls(rcs_clockwise=True)
    )
    events = AutoPilotSystem(scene).queue_events()
    assert events == [Event(entity, False, RcsEvent.CLOCKWISE)]
    assert not player.auto_controls.rcs_clockwise


def test_manual_control_overrides_autopilot():
    scene, entity, player = make_scene(
        THRESHOLD * 2,
        player_controls=Controls(rcs_clockwise=True),
        auto_controls=Controls(rcs_clockwise=True, rcs_counter_clockwise=True),
    )
    events = AutoPilotSystem(scene).queue_events()
    assert events == [Event(entity, False, RcsEvent.COUNTER_CLOCKWISE)]
    assert not player.auto_controls.rcs_clockwise
    assert not player.auto_controls.rcs_counter_clockwise


def test_missing_player_raises():
    scene = Scene()
    scene.register_component(Player)
    scene.register_component(Body)
    with pytest.raises(LookupError):
        AutoPilotSystem(scene).queue_events()