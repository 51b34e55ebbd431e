"""Component types attached to scene entities, with their JSON forms."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from orbitsim.fields import GridField, PolarField
from orbitsim.vector import Vec2


def _vec_to_json(v: Vec2) -> dict:
    return {"x": v.x, "y": v.y}


def _vec_from_json(data: dict) -> Vec2:
    return Vec2(data["x"], data["y"])


@dataclass
class Body:
    """Rigid body state. Mass properties are derived, not serialized."""

    density: float = 0.0
    position: Vec2 = field(default_factory=Vec2)
    velocity: Vec2 = field(default_factory=Vec2)
    rotation: float = 0.0
    angular_velocity: float = 0.0
    restitution: float = 0.0
    friction: float = 0.0
    center_of_mass: Vec2 = field(default_factory=Vec2)
    moment_of_inertia: float = 0.0
    mass: float = 0.0

    def to_json(self) -> dict:
        return {
            "density": self.density,
            "position": _vec_to_json(self.position),
            "velocity": _vec_to_json(self.velocity),
            "rotation": self.rotation,
            "angularVelocity": self.angular_velocity,
            "restitution": self.restitution,
            "friction": self.friction,
        }

    @classmethod
    def from_json(cls, data: dict) -> Body:
        return cls(
            density=float(data["density"]),
            position=_vec_from_json(data["position"]),
            velocity=_vec_from_json(data["velocity"]),
            rotation=float(data["rotation"]),
            angular_velocity=float(data["angularVelocity"]),
            restitution=float(data["restitution"]),
            friction=float(data["friction"]),
        )


@dataclass
class CircleBody:
    radius: float

    def to_json(self) -> dict:
        return {"radius": self.radius}

    @classmethod
    def from_json(cls, data: dict) -> CircleBody:
        return cls(radius=float(data["radius"]))


_CONTROL_KEYS = {
    "rcs_up": "rcsUp",
    "rcs_down": "rcsDown",
    "rcs_left": "rcsLeft",
    "rcs_right": "rcsRight",
    "rcs_clockwise": "rcsClockwise",
    "rcs_counter_clockwise": "rcsCounterClockwise",
    "engine": "engine",
}


@dataclass
class Controls:
    rcs_up: bool = False
    rcs_down: bool = False
    rcs_left: bool = False
    rcs_right: bool = False
    rcs_clockwise: bool = False
    rcs_counter_clockwise: bool = False
    engine: bool = False

    def to_json(self) -> dict:
        return {key: getattr(self, attr) for attr, key in _CONTROL_KEYS.items()}

    @classmethod
    def from_json(cls, data: dict) -> Controls:
        return cls(**{attr: bool(data[key]) for attr, key in _CONTROL_KEYS.items()})


@dataclass
class Player:
    player_controls: Controls = field(default_factory=Controls)
    auto_controls: Controls = field(default_factory=Controls)
    angular_velocity_threshold: float = 0.0

    def to_json(self) -> dict:
        return {
            "playerControls": self.player_controls.to_json(),
            "autoControls": self.auto_controls.to_json(),
            "angularVelocityThreshold": self.angular_velocity_threshold,
        }

    @classmethod
    def from_json(cls, data: dict) -> Player:
        return cls(
            player_controls=Controls.from_json(data["playerControls"]),
            auto_controls=Controls.from_json(data["autoControls"]),
            angular_velocity_threshold=float(data["angularVelocityThreshold"]),
        )


@dataclass
class LightSource:
    """Emits light from the body's center of mass."""

    brightness: float


class MapElementType(Enum):
    CELESTIAL_BODY = "celestialBody"
    SHIP = "ship"


class SoundEffectType(Enum):
    COLLISION = "collision"


class AnimationType(Enum):
    ENGINE = "engine"
    RCS_UP = "rcsUp"
    RCS_DOWN = "rcsDown"
    RCS_LEFT = "rcsLeft"
    RCS_RIGHT = "rcsRight"
    RCS_CLOCKWISE = "rcsClockwise"
    RCS_COUNTER_CLOCKWISE = "rcsCounterClockwise"


@dataclass
class Temperature:
    """Thermal material properties; diffusivity is derived, not serialized."""

    conductivity: float
    specific_capacity: float
    diffusivity: float = 0.0

    def to_json(self) -> dict:
        return {
            "conductivity": self.conductivity,
            "specificCapacity": self.specific_capacity,
        }

    @classmethod
    def from_json(cls, data: dict) -> Temperature:
        return cls(
            conductivity=float(data["conductivity"]),
            specific_capacity=float(data["specificCapacity"]),
        )


@dataclass
class CircleTemperature:
    field: PolarField

    def to_json(self) -> dict:
        return {"field": self.field.to_json()}

    @classmethod
    def from_json(cls, data: dict) -> CircleTemperature:
        return cls(field=PolarField.from_json(data["field"]))


@dataclass
class PolygonTemperature:
    field: GridField

    def to_json(self) -> dict:
        return {"field": self.field.to_json()}

    @classmethod
    def from_json(cls, data: dict) -> PolygonTemperature:
        return cls(field=GridField.from_json(data["field"]))