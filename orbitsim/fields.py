"""Scalar fields sampled on rectangular and polar grids."""

from __future__ import annotations

from dataclasses import dataclass, field

from orbitsim.vector import PI, Vec2
import math


def _vec_to_json(v: Vec2) -> dict:
    return {"x": v.x, "y": v.y}


def _vec_from_json(data: dict) -> Vec2:
    return Vec2(data["x"], data["y"])


@dataclass
class GridField:
    """Values on a regular grid of grid_size[0] rows by grid_size[1] columns."""

    values: list[float]
    grid_size: tuple[int, int]
    cell_size: Vec2
    origin: Vec2 = field(default_factory=Vec2)

    def __post_init__(self) -> None:
        rows, cols = self.grid_size
        if len(self.values) != rows * cols:
            raise ValueError(
                f"grid of {rows}x{cols} needs {rows * cols} values, got {len(self.values)}"
            )

    def get(self, row: int, col: int) -> float:
        return self.values[row * self.grid_size[1] + col]

    def set(self, row: int, col: int, value: float) -> None:
        self.values[row * self.grid_size[1] + col] = value

    def position(self, row: int, col: int) -> Vec2:
        return Vec2(row * self.cell_size.x, col * self.cell_size.y) - self.origin

    def to_json(self) -> dict:
        return {
            "values": list(self.values),
            "gridSize": {"x": self.grid_size[0], "y": self.grid_size[1]},
            "cellSize": _vec_to_json(self.cell_size),
            "origin": _vec_to_json(self.origin),
        }

    @classmethod
    def from_json(cls, data: dict) -> GridField:
        size = data["gridSize"]
        return cls(
            values=[float(v) for v in data["values"]],
            grid_size=(int(size["x"]), int(size["y"])),
            cell_size=_vec_from_json(data["cellSize"]),
            origin=_vec_from_json(data["origin"]),
        )


@dataclass
class PolarField:
    """Values on a polar grid; ring 0 is the single center value."""

    rho_steps: int
    theta_steps: int
    center_value: float = 0.0
    values: list[float] | None = None
    radius: float = 0.0

    def __post_init__(self) -> None:
        expected = (self.rho_steps - 1) * self.theta_steps
        if self.values is None:
            self.values = [0.0] * expected
        elif len(self.values) != expected:
            raise ValueError(f"polar field needs {expected} values, got {len(self.values)}")

    def rho(self, rho_i: int) -> float:
        return self.radius * rho_i / (self.rho_steps - 1)

    def theta(self, theta_i: int) -> float:
        return 2 * PI * theta_i / self.theta_steps

    def cartesian(self, rho_i: int, theta_i: int) -> Vec2:
        r = self.rho(rho_i)
        t = self.theta(theta_i)
        return Vec2(r * math.cos(t), r * math.sin(t))

    def get(self, rho_i: int, theta_i: int) -> float:
        if rho_i == 0:
            return self.center_value
        return self.values[(rho_i - 1) * self.theta_steps + theta_i]

    def set(self, rho_i: int, theta_i: int, value: float) -> None:
        if rho_i == 0:
            self.center_value = value
        else:
            self.values[(rho_i - 1) * self.theta_steps + theta_i] = value

    def to_json(self) -> dict:
        return {
            "values": list(self.values),
            "rhoSteps": self.rho_steps,
            "thetaSteps": self.theta_steps,
            "centerValue": self.center_value,
        }

    @classmethod
    def from_json(cls, data: dict) -> PolarField:
        values = data.get("values")
        return cls(
            rho_steps=int(data["rhoSteps"]),
            theta_steps=int(data["thetaSteps"]),
            center_value=float(data["centerValue"]),
            values=None if values is None else [float(v) for v in values],
        )