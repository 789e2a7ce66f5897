"""
Operation Report Module

Re-export OperationReport next to the engine types that produce it.

This module re-exports OperationReport from growth_policies.base.
"""

from growth_policies.base import OperationReport

__all__ = ["OperationReport"]
