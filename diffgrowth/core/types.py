"""
Geometric value types for the growth engine.
"""

from dataclasses import dataclass
from typing import Tuple
import math
import numpy as np


@dataclass
class Point2D:
    """
    Mutable 2D point.

    Node positions are updated in place every tick, so unlike most value
    types in the library this one is not frozen.
    """

    x: float
    y: float

    def copy(self) -> "Point2D":
        return Point2D(self.x, self.y)

    def set(self, other: "Point2D") -> "Point2D":
        """Overwrite coordinates with those of ``other``."""
        self.x = other.x
        self.y = other.y
        return self

    def lerp(self, target: "Point2D", amount: float) -> "Point2D":
        """
        Move toward ``target`` by ``amount`` (0 = stay, 1 = reach) in place.

        Negative amounts move away from the target.
        """
        self.x += (target.x - self.x) * amount
        self.y += (target.y - self.y) * amount
        return self

    def distance_sq_to(self, other: "Point2D") -> float:
        dx = self.x - other.x
        dy = self.y - other.y
        return dx * dx + dy * dy

    def distance_to(self, other: "Point2D") -> float:
        """Euclidean distance to another point."""
        return math.sqrt(self.distance_sq_to(other))

    def midpoint(self, other: "Point2D") -> "Point2D":
        return Point2D((self.x + other.x) / 2, (self.y + other.y) / 2)

    def to_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=np.float64)

    @classmethod
    def from_array(cls, arr) -> "Point2D":
        return cls(float(arr[0]), float(arr[1]))

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, d: dict) -> "Point2D":
        return cls(float(d["x"]), float(d["y"]))


def lerp_scalar(start: float, stop: float, amount: float) -> float:
    """Linear interpolation between two scalars."""
    return start + (stop - start) * amount
