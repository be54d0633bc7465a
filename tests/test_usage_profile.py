"""
Unit tests for usage profiles.

Tests defaults, validation, feature toggles and the active-feature summary.
"""

from dataclasses import replace

import pytest

from ai_workflow_estimator.core.pricing import ModelTier
from ai_workflow_estimator.core.usage_profile import DEFAULT_PROFILE, UsageProfile


class TestUsageProfileDefaults:
    """Test the default profile."""

    def test_default_values(self):
        """Verify the starting estimator values."""
        assert DEFAULT_PROFILE.transactions_per_month == 100
        assert DEFAULT_PROFILE.input_tokens == 500
        assert DEFAULT_PROFILE.output_tokens == 800
        assert DEFAULT_PROFILE.inter_agent_interactions == 1
        assert DEFAULT_PROFILE.rag_queries == 0
        assert DEFAULT_PROFILE.db_queries == 0
        assert DEFAULT_PROFILE.tool_calls == 0
        assert DEFAULT_PROFILE.memory_ops == 0
        assert DEFAULT_PROFILE.reflection_enabled is False
        assert DEFAULT_PROFILE.model_tier == ModelTier.STANDARD

    def test_tier_string_is_normalized(self):
        """Verify a tier name is stored as a ModelTier."""
        profile = UsageProfile(model_tier="Premium")
        assert profile.model_tier is ModelTier.PREMIUM

    def test_profile_is_immutable(self):
        """Verify profiles cannot be changed in place."""
        with pytest.raises(Exception):
            DEFAULT_PROFILE.input_tokens = 10


class TestUsageProfileValidation:
    """Test construction-time validation."""

    @pytest.mark.parametrize("field_name", [
        "transactions_per_month",
        "input_tokens",
        "output_tokens",
        "inter_agent_interactions",
        "rag_queries",
        "db_queries",
        "tool_calls",
        "memory_ops",
    ])
    def test_negative_count_rejected(self, field_name):
        """Verify negative counts raise ValueError."""
        with pytest.raises(ValueError, match=f"{field_name} cannot be negative"):
            UsageProfile(**{field_name: -1})

    def test_non_integer_count_rejected(self):
        """Verify fractional counts raise ValueError."""
        with pytest.raises(ValueError, match="input_tokens must be an integer"):
            UsageProfile(input_tokens=1.5)

    def test_bool_count_rejected(self):
        """Verify booleans are not accepted as counts."""
        with pytest.raises(ValueError, match="rag_queries must be an integer"):
            UsageProfile(rag_queries=True)

    def test_reflection_must_be_bool(self):
        """Verify reflection flag type is checked."""
        with pytest.raises(ValueError, match="reflection_enabled must be a boolean"):
            UsageProfile(reflection_enabled=1)

    def test_unknown_tier_rejected(self):
        """Verify unknown tiers raise ValueError."""
        with pytest.raises(ValueError, match="Unsupported model tier"):
            UsageProfile(model_tier="luxury")

    def test_zero_counts_allowed(self):
        """Verify zero is valid for every count."""
        profile = UsageProfile(transactions_per_month=0, input_tokens=0, output_tokens=0,
                               inter_agent_interactions=0)
        assert profile.transactions_per_month == 0


class TestFeatureToggles:
    """Test feature on/off switching."""

    @pytest.mark.parametrize("feature,default_count", [
        ("rag_queries", 5),
        ("memory_ops", 2),
        ("db_queries", 2),
        ("tool_calls", 2),
    ])
    def test_toggle_on_uses_default_count(self, feature, default_count):
        """Verify enabling a feature sets its default count."""
        profile = DEFAULT_PROFILE.toggle_feature(feature)
        assert getattr(profile, feature) == default_count

    def test_toggle_off_clears_count(self):
        """Verify disabling a feature resets its count to zero."""
        profile = replace(DEFAULT_PROFILE, tool_calls=7)
        assert profile.toggle_feature("tool_calls").tool_calls == 0

    def test_toggle_reflection(self):
        """Verify reflection flips its flag."""
        enabled = DEFAULT_PROFILE.toggle_feature("reflection_enabled")
        assert enabled.reflection_enabled is True
        assert enabled.toggle_feature("reflection_enabled").reflection_enabled is False

    def test_toggle_returns_new_profile(self):
        """Verify toggling leaves the original untouched."""
        DEFAULT_PROFILE.toggle_feature("rag_queries")
        assert DEFAULT_PROFILE.rag_queries == 0

    def test_toggle_unknown_feature(self):
        """Verify unknown features raise ValueError."""
        with pytest.raises(ValueError, match="Unknown feature: input_tokens"):
            DEFAULT_PROFILE.toggle_feature("input_tokens")


class TestActiveFeatures:
    """Test the active-feature summary."""

    def test_no_features(self):
        """Verify default profile has no active features."""
        assert DEFAULT_PROFILE.active_features == []

    def test_all_features_in_display_order(self):
        """Verify features are listed in display order."""
        profile = UsageProfile(rag_queries=1, db_queries=1, tool_calls=1,
                               memory_ops=1, reflection_enabled=True)
        assert profile.active_features == ["RAG", "Memory", "DB", "Tools", "Reflection"]

    def test_partial_features(self):
        """Verify only enabled features are listed."""
        profile = UsageProfile(tool_calls=3, reflection_enabled=True)
        assert profile.active_features == ["Tools", "Reflection"]
