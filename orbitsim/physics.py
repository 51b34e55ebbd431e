"""Gravitational N-body integration of scene bodies."""

from __future__ import annotations

import math

from orbitsim.components import Body
from orbitsim.scene import Scene
from orbitsim.vector import PI, Vec2, norm

# Gravitational constant converted from m^3/(kg s^2) to px^3/(kg s^2).
GRAVITATIONAL_CONSTANT = 6.67430e-11 * 36.0 * 36.0 * 36.0
DEFAULT_TIME_STEP = 0.02


class PhysicsSystem:
    """Advances body positions and velocities with a fixed-step RK4 scheme.

    Time is measured in seconds. A negative time scale runs the simulation
    backwards. The step counter is signed for the same reason.
    """

    def __init__(
        self,
        scene: Scene,
        time_step: float = DEFAULT_TIME_STEP,
        time_scale: float = 1.0,
    ) -> None:
        if time_step <= 0:
            raise ValueError(f"time step must be positive, got {time_step}")
        self._scene = scene
        self.time_step = time_step
        self.time_scale = time_scale
        self.step_counter = 0
        self.gravitational_constant = GRAVITATIONAL_CONSTANT
        self._current_step = 0.0

    def update(self, dt: float) -> None:
        """Accumulate dt (scaled) and run as many whole steps as it covers."""
        self._current_step += dt * abs(self.time_scale)
        backwards = self.time_scale < 0
        while self._current_step >= self.time_step:
            self._current_step -= self.time_step
            self._update_step(backwards)

    def update_steps(self, steps: int) -> None:
        """Run |steps| steps, backwards when steps is negative."""
        backwards = steps < 0
        for _ in range(abs(steps)):
            self._update_step(backwards)

    def elapsed_time(self) -> float:
        return self.time_step * self.step_counter

    def compute_acceleration(self, position: Vec2, entity: int) -> Vec2:
        """Gravitational acceleration at position from every body except entity."""
        res = Vec2(0.0, 0.0)
        for other_id, other in self._scene.view(Body):
            if other_id == entity:
                continue
            dx = other.position - position
            dist = norm(dx)
            res = res + dx * (other.mass / (dist * dist * dist))
        return res * self.gravitational_constant

    def _update_step(self, backwards: bool) -> None:
        self.step_counter += -1 if backwards else 1
        dt = self.time_step * (-1.0 if backwards else 1.0)

        deltas: dict[int, tuple[Vec2, Vec2]] = {}
        for entity, body in self._scene.view(Body):
            vel = body.velocity
            pos = body.position
            l1 = self.compute_acceleration(pos, entity) * dt
            k1 = vel * dt
            l2 = self.compute_acceleration(pos + k1 * 0.5, entity) * dt
            k2 = (vel + l1 * 0.5) * dt
            l3 = self.compute_acceleration(pos + k2 * 0.5, entity) * dt
            k3 = (vel + l2 * 0.5) * dt
            l4 = self.compute_acceleration(pos + k3, entity) * dt
            k4 = (vel + l3) * dt
            dx = (k1 + k2 * 2.0 + k3 * 2.0 + k4) / 6.0
            dv = (l1 + l2 * 2.0 + l3 * 2.0 + l4) / 6.0
            deltas[entity] = (dx, dv)

        for entity, body in self._scene.view(Body):
            dx, dv = deltas[entity]
            body.position = body.position + dx
            body.velocity = body.velocity + dv
            body.rotation = math.remainder(
                body.rotation + body.angular_velocity * dt, 2.0 * PI
            )