"""
Growth Policies - Centralized configuration for the differential growth engine.

This package provides the policy dataclass consumed by Nodes, Paths and
Worlds, the named presets, and the OperationReport returned by ticks.
All policies are immutable and JSON-serializable.

Usage:
    from growth_policies import GrowthPolicy, get_preset, OperationReport
"""

from .base import (
    ConfigurationError,
    OperationReport,
    alias_fields,
)

from .growth import (
    GrowthPolicy,
    REPULSION_MODES,
    LEGACY_FIELD_ALIASES,
    PRESETS,
    get_preset,
    list_presets,
)

__all__ = [
    # Base
    "ConfigurationError",
    "OperationReport",
    "alias_fields",
    # Growth
    "GrowthPolicy",
    "REPULSION_MODES",
    "LEGACY_FIELD_ALIASES",
    "PRESETS",
    "get_preset",
    "list_presets",
]
