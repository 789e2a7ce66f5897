"""
Tests for Differential Growth

This package contains tests for:
- Growth policies and presets
- Nodes, paths, boundary regions and worlds
- The spatial index
- Metrics, topology checks, snapshots and the CLI
"""
