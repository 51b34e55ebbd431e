"""User settings: sound levels, video mode and input mappings, stored as JSON."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, TypeVar

from orbitsim.events import ControllerButton, GameInput, MapInput

KEY_NAMES: tuple[str, ...] = (
    "Unknown",
    *"ABCDEFGHIJKLMNOPQRSTUVWXYZ",
    *(f"Num{i}" for i in range(10)),
    "Escape", "LControl", "LShift", "LAlt", "LSystem",
    "RControl", "RShift", "RAlt", "RSystem", "Menu",
    "LBracket", "RBracket", "Semicolon", "Comma", "Period", "Quote",
    "Slash", "Backslash", "Tilde", "Equal", "Hyphen", "Space", "Enter",
    "Backspace", "Tab", "PageUp", "PageDown", "End", "Home", "Insert",
    "Delete", "Add", "Subtract", "Multiply", "Divide",
    "Left", "Right", "Up", "Down",
    *(f"Numpad{i}" for i in range(10)),
    *(f"F{i}" for i in range(1, 16)),
    "Pause",
)
_KNOWN_KEYS = frozenset(KEY_NAMES)

_Input = TypeVar("_Input", GameInput, MapInput)


def _key_name(name: str) -> str:
    """Known keyboard key name, or 'Unknown'."""
    return name if name in _KNOWN_KEYS else KEY_NAMES[0]


def color_to_json(value: tuple[int, int, int, int]) -> str:
    """Format an (r, g, b, a) color as '#rrggbbaa'."""
    r, g, b, a = value
    packed = (r << 24) | (g << 16) | (b << 8) | a
    return f"#{packed:08x}"


def color_from_json(data: str) -> tuple[int, int, int, int]:
    """Parse a '#rrggbbaa' string into an (r, g, b, a) color."""
    try:
        packed = int(data[1:], 16)
    except (TypeError, ValueError):
        raise ValueError(f"invalid color {data!r}") from None
    if not 0 <= packed <= 0xFFFFFFFF:
        raise ValueError(f"invalid color {data!r}")
    return (packed >> 24) & 0xFF, (packed >> 16) & 0xFF, (packed >> 8) & 0xFF, packed & 0xFF


@dataclass
class SoundSettings:
    main_volume: float = 100.0
    effects_volume: float = 50.0
    music_volume: float = 70.0

    def to_json(self) -> dict:
        return {
            "mainVolume": self.main_volume,
            "effectsVolume": self.effects_volume,
            "musicVolume": self.music_volume,
        }

    @classmethod
    def from_json(cls, data: dict) -> SoundSettings:
        return cls(
            main_volume=float(data["mainVolume"]),
            effects_volume=float(data["effectsVolume"]),
            music_volume=float(data["musicVolume"]),
        )


@dataclass
class VideoMode:
    """Screen mode; zero width and height stand for the desktop mode."""

    width: int = 0
    height: int = 0
    bits_per_pixel: int = 32


def _video_mode_to_json(mode: VideoMode) -> dict:
    return {"width": mode.width, "height": mode.height, "bitsPerPixel": mode.bits_per_pixel}


def _video_mode_from_json(data: dict) -> VideoMode:
    return VideoMode(int(data["width"]), int(data["height"]), int(data["bitsPerPixel"]))


def _default_game_keyboard() -> dict[str, GameInput]:
    return {
        "Z": GameInput.RCS_UP,
        "Q": GameInput.RCS_LEFT,
        "S": GameInput.RCS_DOWN,
        "D": GameInput.RCS_RIGHT,
        "A": GameInput.RCS_COUNTER_CLOCKWISE,
        "E": GameInput.RCS_CLOCKWISE,
        "Space": GameInput.ENGINE,
        "LShift": GameInput.ZOOM_IN,
        "RShift": GameInput.ZOOM_IN,
        "LControl": GameInput.ZOOM_OUT,
        "RControl": GameInput.ZOOM_OUT,
        "M": GameInput.TOGGLE_MAP,
        "LAlt": GameInput.ROTATE_VIEW,
        "Escape": GameInput.PAUSE,
    }


def _default_map_keyboard() -> dict[str, MapInput]:
    return {
        "LShift": MapInput.ZOOM_IN,
        "RShift": MapInput.ZOOM_IN,
        "LControl": MapInput.ZOOM_OUT,
        "RControl": MapInput.ZOOM_OUT,
        "M": MapInput.EXIT,
        "Escape": MapInput.EXIT,
    }


def _keyboard_to_json(mapping: dict[str, GameInput | MapInput]) -> dict:
    return {_key_name(key): value.to_json() for key, value in mapping.items()}


def _keyboard_from_json(data: dict, parse: Callable[[str], _Input]) -> dict[str, _Input]:
    return {_key_name(key): parse(value) for key, value in data.items()}


def _controller_to_json(mapping: dict[ControllerButton, GameInput | MapInput]) -> dict:
    return {button.to_json(): value.to_json() for button, value in mapping.items()}


def _controller_from_json(
    data: dict, parse: Callable[[str], _Input]
) -> dict[ControllerButton, _Input]:
    return {ControllerButton.from_json(key): parse(value) for key, value in data.items()}


@dataclass
class Settings:
    sound_settings: SoundSettings = field(default_factory=SoundSettings)
    video_mode: VideoMode = field(default_factory=VideoMode)
    game_keyboard_mapping: dict[str, GameInput] = field(
        default_factory=_default_game_keyboard
    )
    game_controller_mapping: dict[ControllerButton, GameInput] = field(
        default_factory=lambda: {ControllerButton.X: GameInput.ENGINE}
    )
    map_keyboard_mapping: dict[str, MapInput] = field(
        default_factory=_default_map_keyboard
    )
    map_controller_mapping: dict[ControllerButton, MapInput] = field(
        default_factory=lambda: {ControllerButton.X: MapInput.ZOOM_IN}
    )

    def to_json(self) -> dict:
        return {
            "soundSettings": self.sound_settings.to_json(),
            "videoMode": _video_mode_to_json(self.video_mode),
            "gameKeyboardMapping": _keyboard_to_json(self.game_keyboard_mapping),
            "gameControllerMapping": _controller_to_json(self.game_controller_mapping),
            "mapKeyboardMapping": _keyboard_to_json(self.map_keyboard_mapping),
            "mapControllerMapping": _controller_to_json(self.map_controller_mapping),
        }

    @classmethod
    def from_json(cls, data: dict) -> Settings:
        """Build settings from JSON; loaded mappings are merged into the defaults."""
        settings = cls()
        settings.sound_settings = SoundSettings.from_json(data["soundSettings"])
        settings.video_mode = _video_mode_from_json(data["videoMode"])
        settings.game_keyboard_mapping.update(
            _keyboard_from_json(data["gameKeyboardMapping"], GameInput.from_json)
        )
        settings.game_controller_mapping.update(
            _controller_from_json(data["gameControllerMapping"], GameInput.from_json)
        )
        settings.map_keyboard_mapping.update(
            _keyboard_from_json(data["mapKeyboardMapping"], MapInput.from_json)
        )
        settings.map_controller_mapping.update(
            _controller_from_json(data["mapControllerMapping"], MapInput.from_json)
        )
        return settings

    @classmethod
    def load(cls, path: str | Path) -> Settings:
        """Read settings from path, or return the defaults if it does not exist."""
        path = Path(path)
        if not path.exists():
            return cls()
        with path.open(encoding="utf-8") as stream:
            return cls.from_json(json.load(stream))

    def save(self, path: str | Path) -> None:
        with Path(path).open("w", encoding="utf-8") as stream:
            json.dump(self.to_json(), stream, indent=4)