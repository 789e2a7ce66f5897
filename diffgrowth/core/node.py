"""
Node: a single point of a growing path.
"""

from typing import Optional
import math

from growth_policies import GrowthPolicy
from .errors import ConfigurationError
from .types import Point2D


class Node:
    """
    Point-mass with a committed position and a staged next position.

    Forces never touch ``position`` directly (jitter aside). They blend
    ``next_position`` toward their own targets, and ``commit()`` then moves
    ``position`` a fixed fraction of the way there.

    Spacing parameters are copied from the policy at creation, so nodes
    created under different policies keep their own values.
    """

    __slots__ = [
        "position",
        "next_position",
        "is_fixed",
        "min_distance",
        "repulsion_radius",
        "max_velocity",
    ]

    def __init__(
        self,
        x: float,
        y: float,
        policy: Optional[GrowthPolicy] = None,
        is_fixed: bool = False,
        check_policy: bool = True,
    ):
        """
        Initialize a node.

        Parameters
        ----------
        x, y : float
            Initial position
        policy : GrowthPolicy, optional
            Source of min_distance, repulsion_radius and max_velocity.
            Defaults to GrowthPolicy().
        is_fixed : bool
            Initial pinned state (normally managed by boundary checks)
        check_policy : bool
            Validate the policy. Paths pass False for nodes they create,
            since the path validated its policy once already.
        """
        if policy is None:
            policy = GrowthPolicy()
        if check_policy:
            policy.ensure_valid()

        x = float(x)
        y = float(y)
        if not (math.isfinite(x) and math.isfinite(y)):
            raise ConfigurationError(f"Node position must be finite, got ({x}, {y})")

        self.position = Point2D(x, y)
        self.next_position = Point2D(x, y)
        self.is_fixed = is_fixed

        self.min_distance = float(policy.min_distance)
        self.repulsion_radius = float(policy.repulsion_radius)
        self.max_velocity = float(policy.max_velocity)

    def begin_tick(self) -> None:
        """Reset the staged position to the current one."""
        self.next_position.set(self.position)

    def commit(self) -> None:
        """Move toward the staged position by max_velocity."""
        self.position.lerp(self.next_position, self.max_velocity)

    def distance_to(self, other: "Node") -> float:
        return self.position.distance_to(other.position)

    def __repr__(self) -> str:
        fixed = ", fixed" if self.is_fixed else ""
        return f"Node({self.position.x:.3f}, {self.position.y:.3f}{fixed})"

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "position": self.position.to_dict(),
            "next_position": self.next_position.to_dict(),
            "is_fixed": self.is_fixed,
            "min_distance": self.min_distance,
            "repulsion_radius": self.repulsion_radius,
            "max_velocity": self.max_velocity,
        }

    @classmethod
    def from_dict(
        cls, d: dict, policy: Optional[GrowthPolicy] = None, check_policy: bool = True
    ) -> "Node":
        """
        Create from dictionary.

        Per-node spacing values stored in ``d`` win over the policy's.
        """
        position = Point2D.from_dict(d["position"])
        node = cls(
            position.x,
            position.y,
            policy,
            is_fixed=bool(d.get("is_fixed", False)),
            check_policy=check_policy,
        )
        if "next_position" in d:
            node.next_position = Point2D.from_dict(d["next_position"])
        node.min_distance = float(d.get("min_distance", node.min_distance))
        node.repulsion_radius = float(d.get("repulsion_radius", node.repulsion_radius))
        node.max_velocity = float(d.get("max_velocity", node.max_velocity))
        return node
