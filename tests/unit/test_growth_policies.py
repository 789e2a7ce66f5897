"""
Unit tests for growth policies, presets and OperationReport.
"""

import json
import logging

import pytest

from growth_policies import (
    ConfigurationError,
    GrowthPolicy,
    OperationReport,
    get_preset,
    list_presets,
)


class TestGrowthPolicyValidation:
    """Tests for GrowthPolicy.validate() and ensure_valid()."""

    def test_defaults_are_valid(self):
        """Default policy has no validation errors."""
        assert GrowthPolicy().validate() == []

    def test_min_distance_must_be_below_max_distance(self):
        """min_distance >= max_distance is rejected."""
        errors = GrowthPolicy(min_distance=11.0, max_distance=11.0).validate()
        assert len(errors) == 1
        assert "max_distance" in errors[0]

    def test_max_velocity_range(self):
        """max_velocity must lie in (0, 1]."""
        assert GrowthPolicy(max_velocity=0.0).validate()
        assert GrowthPolicy(max_velocity=1.5).validate()
        assert GrowthPolicy(max_velocity=1.0).validate() == []

    def test_unknown_repulsion_mode(self):
        """Only the known repulsion modes are accepted."""
        errors = GrowthPolicy(repulsion_mode="sum").validate()
        assert any("repulsion_mode" in e for e in errors)

    def test_negative_values_rejected(self):
        """Negative spacing, jitter range and injection interval are errors."""
        policy = GrowthPolicy(
            min_distance=-1.0,
            repulsion_radius=-1.0,
            brownian_motion_range=-0.1,
            node_injection_interval=-1,
        )
        assert len(policy.validate()) == 4

    def test_max_nodes_floor(self):
        """A cap below three nodes is rejected."""
        assert GrowthPolicy(max_nodes=2).validate()

    def test_ensure_valid_raises_configuration_error(self):
        """ensure_valid raises ConfigurationError, which is a ValueError."""
        with pytest.raises(ConfigurationError, match="Invalid growth policy"):
            GrowthPolicy(min_distance=20.0, max_distance=10.0).ensure_valid()
        assert issubclass(ConfigurationError, ValueError)

    def test_ensure_valid_returns_self(self):
        policy = GrowthPolicy()
        assert policy.ensure_valid() is policy


class TestGrowthPolicySerialization:
    """Tests for to_dict/from_dict and overrides."""

    def test_dict_round_trip(self):
        """from_dict(to_dict()) reproduces the policy."""
        policy = GrowthPolicy(min_distance=3.0, max_distance=9.0, repulsion_mode="accumulate")
        assert GrowthPolicy.from_dict(policy.to_dict()) == policy

    def test_to_dict_is_json_serializable(self):
        json.dumps(GrowthPolicy().to_dict())

    def test_legacy_aliases(self):
        """Camel-case option names map to the snake_case fields."""
        policy = GrowthPolicy.from_dict({
            "MinDistance": 3.0,
            "MaxDistance": 9.0,
            "UseBrownianMotion": False,
            "MaxNodes": 50,
        })
        assert policy.min_distance == 3.0
        assert policy.max_distance == 9.0
        assert policy.use_brownian_motion is False
        assert policy.max_nodes == 50

    def test_canonical_name_wins_over_alias(self):
        policy = GrowthPolicy.from_dict({"MinDistance": 3.0, "min_distance": 4.0})
        assert policy.min_distance == 4.0

    def test_unknown_keys_are_ignored_with_warning(self, caplog):
        """Unknown keys are dropped and logged."""
        with caplog.at_level(logging.WARNING, logger="growth_policies.growth"):
            policy = GrowthPolicy.from_dict({"min_distance": 4.0, "wobble": 1})
        assert policy.min_distance == 4.0
        assert "wobble" in caplog.text

    def test_with_overrides_returns_copy(self):
        """with_overrides leaves the original untouched."""
        base = GrowthPolicy()
        changed = base.with_overrides(max_nodes=10)
        assert changed.max_nodes == 10
        assert base.max_nodes == 1000


class TestPresets:
    """Tests for named presets."""

    def test_list_presets(self):
        assert list_presets() == ["default", "organic"]

    def test_organic_matches_defaults(self):
        """The organic preset is the dataclass default."""
        assert get_preset("organic") == GrowthPolicy()

    def test_default_preset_values(self):
        policy = get_preset("default")
        assert policy.min_distance == 20.0
        assert policy.max_distance == 30.0
        assert policy.repulsion_force == 500.0
        assert policy.validate() == []

    def test_unknown_preset_raises(self):
        with pytest.raises(KeyError):
            get_preset("nope")


class TestOperationReport:
    """Tests for the OperationReport dataclass."""

    def test_add_error_marks_failure(self):
        report = OperationReport(operation="tick")
        assert report.success
        report.add_error("boom")
        assert not report.success
        assert report.errors == ["boom"]

    def test_to_json(self):
        """Reports serialize to JSON with their metrics."""
        report = OperationReport(operation="run", metrics={"ticks_run": 3})
        report.add_warning("paused")
        data = json.loads(report.to_json())
        assert data["operation"] == "run"
        assert data["metrics"]["ticks_run"] == 3
        assert data["warnings"] == ["paused"]

    def test_merge(self):
        a = OperationReport(operation="a", metrics={"x": 1})
        b = OperationReport(operation="b", metrics={"y": 2})
        b.add_error("bad")
        a.merge(b)
        assert a.metrics == {"x": 1, "y": 2}
        assert a.errors == ["bad"]
        assert not a.success
