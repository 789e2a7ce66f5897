"""
Growth Policy for differential growth.

This module contains the GrowthPolicy dataclass that controls every
force weight and spacing threshold of the growth engine.

DESIGN GOALS
------------
A) Explicit configuration: Nodes and Paths receive a policy at construction
   and copy what they need. There is no process-wide settings object.
B) Spacing stability: min_distance < max_distance is enforced up front,
   otherwise the split and prune passes undo each other every tick.

All behavior is controlled via this policy - no hidden constants.
Behavior is reproducible when the random source is seeded.
"""

from dataclasses import dataclass, asdict, replace
from typing import Dict, Any, List, Literal
import logging

from .base import ConfigurationError, alias_fields

logger = logging.getLogger(__name__)


REPULSION_MODES = ("last_write", "accumulate")

# Camel-case option names accepted from older settings files.
LEGACY_FIELD_ALIASES = {
    "MinDistance": "min_distance",
    "MaxDistance": "max_distance",
    "RepulsionRadius": "repulsion_radius",
    "MaxVelocity": "max_velocity",
    "AttractionForce": "attraction_force",
    "RepulsionForce": "repulsion_force",
    "AlignmentForce": "alignment_force",
    "UseBrownianMotion": "use_brownian_motion",
    "BrownianMotionRange": "brownian_motion_range",
    "NodeInjectionInterval": "node_injection_interval",
    "MaxNodes": "max_nodes",
}


@dataclass(frozen=True)
class GrowthPolicy:
    """
    Policy controlling per-tick forces and adaptive edge spacing.

    JSON Schema:
    {
        # Spacing
        "min_distance": float,
        "max_distance": float,
        "repulsion_radius": float,

        # Blending weights (interpolation factors)
        "max_velocity": float (0-1],
        "attraction_force": float,
        "repulsion_force": float,
        "alignment_force": float,
        "repulsion_mode": "last_write" | "accumulate",

        # Jitter
        "use_brownian_motion": bool,
        "brownian_motion_range": float,

        # Limits
        "max_nodes": int,
        "node_injection_interval": int (ticks, 0 = off)
    }
    """
    # Spacing
    min_distance: float = 5.0
    max_distance: float = 11.0
    repulsion_radius: float = 20.0

    # Blending weights
    max_velocity: float = 0.18
    attraction_force: float = 0.3
    repulsion_force: float = 0.9
    alignment_force: float = 0.45
    repulsion_mode: Literal["last_write", "accumulate"] = "last_write"

    # Jitter
    use_brownian_motion: bool = True
    brownian_motion_range: float = 0.05

    # Limits
    max_nodes: int = 1000
    node_injection_interval: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "GrowthPolicy":
        """
        Create from dictionary.

        Accepts both snake_case field names and the camel-case
        option names (``MinDistance`` etc.).
        """
        d = alias_fields(d, LEGACY_FIELD_ALIASES)
        known = GrowthPolicy.__dataclass_fields__
        unknown = sorted(k for k in d if k not in known)
        if unknown:
            logger.warning(f"Ignoring unknown growth policy keys: {unknown}")
        return GrowthPolicy(**{k: v for k, v in d.items() if k in known})

    def with_overrides(self, **overrides: Any) -> "GrowthPolicy":
        """Return a copy with some fields replaced."""
        return replace(self, **overrides)

    def validate(self) -> List[str]:
        """
        Validate policy parameters.

        Returns
        -------
        List[str]
            List of validation error messages (empty if valid)
        """
        errors = []

        if self.min_distance < 0:
            errors.append(f"min_distance must be >= 0, got {self.min_distance}")

        if self.min_distance >= self.max_distance:
            errors.append(
                f"min_distance ({self.min_distance}) must be < "
                f"max_distance ({self.max_distance})"
            )

        if self.repulsion_radius < 0:
            errors.append(f"repulsion_radius must be >= 0, got {self.repulsion_radius}")

        if not 0.0 < self.max_velocity <= 1.0:
            errors.append(f"max_velocity must be in (0, 1], got {self.max_velocity}")

        if self.brownian_motion_range < 0:
            errors.append(
                f"brownian_motion_range must be >= 0, got {self.brownian_motion_range}"
            )

        if self.repulsion_mode not in REPULSION_MODES:
            errors.append(
                f"repulsion_mode must be one of {REPULSION_MODES}, got {self.repulsion_mode!r}"
            )

        if self.max_nodes < 3:
            errors.append(f"max_nodes must be >= 3, got {self.max_nodes}")

        if self.node_injection_interval < 0:
            errors.append(
                f"node_injection_interval must be >= 0, got {self.node_injection_interval}"
            )

        return errors

    def ensure_valid(self) -> "GrowthPolicy":
        """Raise ConfigurationError if the policy is invalid, else return self."""
        errors = self.validate()
        if errors:
            raise ConfigurationError("Invalid growth policy: " + "; ".join(errors))
        return self


PRESETS: Dict[str, Dict[str, Any]] = {
    # Wide spacing with strong repulsion.
    "default": {
        "min_distance": 20.0,
        "max_distance": 30.0,
        "repulsion_radius": 20.0,
        "max_velocity": 0.1,
        "attraction_force": 0.001,
        "repulsion_force": 500.0,
        "alignment_force": 0.001,
        "use_brownian_motion": True,
        "brownian_motion_range": 0.01,
    },
    # Tight spacing for growth from a small seed circle.
    "organic": {
        "min_distance": 5.0,
        "max_distance": 11.0,
        "repulsion_radius": 20.0,
        "max_velocity": 0.18,
        "attraction_force": 0.3,
        "repulsion_force": 0.9,
        "alignment_force": 0.45,
        "use_brownian_motion": True,
        "brownian_motion_range": 0.05,
    },
}


def list_presets() -> List[str]:
    """Return the names of the available presets."""
    return sorted(PRESETS)


def get_preset(name: str) -> GrowthPolicy:
    """
    Get a named growth policy preset.

    Raises
    ------
    KeyError
        If no preset has that name.
    """
    if name not in PRESETS:
        raise KeyError(f"Unknown growth preset {name!r}; available: {list_presets()}")
    return GrowthPolicy(**PRESETS[name])


__all__ = [
    "GrowthPolicy",
    "REPULSION_MODES",
    "LEGACY_FIELD_ALIASES",
    "PRESETS",
    "get_preset",
    "list_presets",
]
