"""Applies player thruster controls to the player's body."""

from __future__ import annotations

from orbitsim.components import Body, Player
from orbitsim.scene import Scene
from orbitsim.vector import Vec2, rotate

ENGINE_ACCELERATION = 200.0
RCS_LINEAR_ACCELERATION = 50.0
RCS_CIRCULAR_ACCELERATION = 10.0


class GameplaySystem:
    """Turns active engine and RCS controls into velocity changes."""

    def __init__(self, scene: Scene) -> None:
        self._scene = scene

    def update(self, dt: float) -> None:
        """Accelerate every player body for dt seconds."""
        for _entity, player, body in self._scene.view(Player, Body):
            manual, auto = player.player_controls, player.auto_controls
            dv = Vec2(0.0, 0.0)
            dw = 0.0
            if manual.engine or auto.engine:
                dv = dv + Vec2(0.0, -ENGINE_ACCELERATION)
            if manual.rcs_up or auto.rcs_up:
                dv = dv + Vec2(0.0, -RCS_LINEAR_ACCELERATION)
            if manual.rcs_down or auto.rcs_down:
                dv = dv + Vec2(0.0, RCS_LINEAR_ACCELERATION)
            if manual.rcs_left or auto.rcs_left:
                dv = dv + Vec2(-RCS_LINEAR_ACCELERATION, 0.0)
            if manual.rcs_right or auto.rcs_right:
                dv = dv + Vec2(RCS_LINEAR_ACCELERATION, 0.0)
            if manual.rcs_clockwise or auto.rcs_clockwise:
                dw += RCS_CIRCULAR_ACCELERATION
            if manual.rcs_counter_clockwise or auto.rcs_counter_clockwise:
                dw -= RCS_CIRCULAR_ACCELERATION
            body.velocity = body.velocity + rotate(dv, body.rotation) * dt
            body.angular_velocity += dw * dt