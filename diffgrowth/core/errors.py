"""
Error types for the growth engine.

ConfigurationError lives in growth_policies so that policy validation can
raise it without importing the engine. It is re-exported here because
Nodes, Paths and Boundary Regions raise it as well.
"""

from growth_policies.base import ConfigurationError

__all__ = ["ConfigurationError"]
