"""
Unit tests for model tier pricing.

Tests the fixed rate table, tier lookup, and error handling.
"""

import pytest

from ai_workflow_estimator.core.pricing import (
    PRICING_TABLE,
    ModelTier,
    parse_tier
)


class TestParseTier:
    """Test tier name resolution."""

    def test_parse_enum_passthrough(self):
        """Verify ModelTier values are returned unchanged."""
        assert parse_tier(ModelTier.PREMIUM) is ModelTier.PREMIUM

    def test_parse_string_is_case_insensitive(self):
        """Verify tier names ignore case and surrounding whitespace."""
        assert parse_tier("budget") == ModelTier.BUDGET
        assert parse_tier("Standard") == ModelTier.STANDARD
        assert parse_tier(" PREMIUM ") == ModelTier.PREMIUM

    def test_unknown_tier_raises_error(self):
        """Verify error for unknown tier names."""
        with pytest.raises(ValueError, match="Unsupported model tier: luxury"):
            parse_tier("luxury")

    def test_non_string_tier_raises_error(self):
        """Verify error for values that are not tier names."""
        with pytest.raises(ValueError, match="Unsupported model tier"):
            parse_tier(3)


class TestPricingTable:
    """Test pricing table contents and lookup."""

    def test_budget_rates(self):
        """Verify budget tier rates."""
        pricing = PRICING_TABLE.get_pricing(ModelTier.BUDGET)
        assert pricing.input_price_per_million_tokens == 0.50
        assert pricing.output_price_per_million_tokens == 1.50

    def test_standard_rates(self):
        """Verify standard tier rates."""
        pricing = PRICING_TABLE.get_pricing(ModelTier.STANDARD)
        assert pricing.input_price_per_million_tokens == 3
        assert pricing.output_price_per_million_tokens == 9

    def test_premium_rates(self):
        """Verify premium tier rates."""
        pricing = PRICING_TABLE.get_pricing(ModelTier.PREMIUM)
        assert pricing.input_price_per_million_tokens == 5
        assert pricing.output_price_per_million_tokens == 15

    def test_lookup_by_name(self):
        """Verify lookup accepts tier names."""
        assert PRICING_TABLE.get_pricing("premium") == PRICING_TABLE.get_pricing(ModelTier.PREMIUM)

    def test_labels(self):
        """Verify each tier carries its display label."""
        assert PRICING_TABLE.get_pricing("budget").label == "Budget (DeepSeek R1)"
        assert PRICING_TABLE.get_pricing("standard").label == "Standard (Claude Sonnet)"
        assert PRICING_TABLE.get_pricing("premium").label == "Premium (GPT-4o)"

    def test_every_tier_is_priced(self):
        """Verify the table covers every tier."""
        assert set(PRICING_TABLE.prices) == set(ModelTier)

    def test_unsupported_tier_raises_error(self):
        """Verify error for unknown tiers."""
        with pytest.raises(ValueError, match="Unsupported model tier: unknown"):
            PRICING_TABLE.get_pricing("unknown")
