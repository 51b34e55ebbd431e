"""Game events and the player input enumerations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Union


@dataclass(frozen=True)
class EngineEvent:
    """The main engine fired or stopped."""


class RcsEvent(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    CLOCKWISE = "clockwise"
    COUNTER_CLOCKWISE = "counterClockwise"


@dataclass(frozen=True)
class CollisionEvent:
    impact_strength: float
    other_entity: int


EventData = Union[EngineEvent, RcsEvent, CollisionEvent]


@dataclass(frozen=True)
class Event:
    entity: int
    start: bool
    data: EventData


class _StrJsonEnum(Enum):
    """Enum stored in JSON as its value; unknown JSON maps to the first member."""

    @classmethod
    def from_json(cls, value):
        try:
            return cls(value)
        except (ValueError, TypeError):
            return next(iter(cls))

    def to_json(self) -> str:
        return self.value


class GameInput(_StrJsonEnum):
    ENGINE = "engine"
    RCS_UP = "rcsUp"
    RCS_DOWN = "rcsDown"
    RCS_LEFT = "rcsLeft"
    RCS_RIGHT = "rcsRight"
    RCS_CLOCKWISE = "rcsClockwise"
    RCS_COUNTER_CLOCKWISE = "rcsCounterClockwise"
    ZOOM_IN = "zoomIn"
    ZOOM_OUT = "zoomOut"
    ROTATE_VIEW = "rotateView"
    TOGGLE_MAP = "toggleMap"
    PAUSE = "pause"

    @classmethod
    def from_json(cls, value):
        return super().from_json(value)

    def to_json(self) -> str:
        return super().to_json()


class MapInput(_StrJsonEnum):
    ZOOM_IN = "zoomIn"
    ZOOM_OUT = "zoomOut"
    EXIT = "exit"

    @classmethod
    def from_json(cls, value):
        return super().from_json(value)

    def to_json(self) -> str:
        return super().to_json()


class ControllerButton(IntEnum):
    A = 1
    B = 2
    X = 3
    Y = 4
    L1 = 5
    R1 = 6
    BACK = 7
    START = 8
    L3 = 9
    R3 = 10
    L2 = 11
    R2 = 12

    @classmethod
    def from_json(cls, value):
        """Button for a JSON name; unknown names map to the first button."""
        for button in cls:
            if button.to_json() == value:
                return button
        return next(iter(cls))

    def to_json(self) -> str:
        return self.name.capitalize()