"""Automatic RCS control that damps the player's rotation."""

from __future__ import annotations

from orbitsim.components import Body, Player
from orbitsim.events import Event, RcsEvent
from orbitsim.scene import Scene


class AutoPilotSystem:
    """Fires rotational RCS against the player's spin beyond a threshold."""

    def __init__(self, scene: Scene) -> None:
        self._scene = scene

    def queue_events(self) -> list[Event]:
        """Update the automatic controls and return the RCS events to emit."""
        events: list[Event] = []
        player_id = self._scene.find_unique(Player)
        player: Player = self._scene.get_component(player_id, Player)
        manual, auto = player.player_controls, player.auto_controls

        # The player steering by hand takes over from the autopilot.
        if manual.rcs_clockwise or manual.rcs_counter_clockwise:
            if auto.rcs_clockwise and not manual.rcs_clockwise:
                events.append(Event(player_id, False, RcsEvent.CLOCKWISE))
            if auto.rcs_counter_clockwise and not manual.rcs_counter_clockwise:
                events.append(Event(player_id, False, RcsEvent.COUNTER_CLOCKWISE))
            auto.rcs_clockwise = False
            auto.rcs_counter_clockwise = False
            return events

        body: Body = self._scene.get_component(player_id, Body)
        threshold = player.angular_velocity_threshold
        spin = body.angular_velocity
        if spin > threshold and not auto.rcs_counter_clockwise:
            events.append(Event(player_id, True, RcsEvent.COUNTER_CLOCKWISE))
            auto.rcs_counter_clockwise = True
        elif spin < -threshold and not auto.rcs_clockwise:
            events.append(Event(player_id, True, RcsEvent.CLOCKWISE))
            auto.rcs_clockwise = True
        elif abs(spin) < threshold:
            if auto.rcs_clockwise:
                events.append(Event(player_id, False, RcsEvent.CLOCKWISE))
                auto.rcs_clockwise = False
            if auto.rcs_counter_clockwise:
                events.append(Event(player_id, False, RcsEvent.COUNTER_CLOCKWISE))
                auto.rcs_counter_clockwise = False
        return events