"""
Pricing tiers and rate management.

Holds the fixed per-million-token rates used by the cost model.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Union


class ModelTier(Enum):
    """Named pricing brackets for language-model usage."""
    BUDGET = "budget"
    STANDARD = "standard"
    PREMIUM = "premium"


@dataclass(frozen=True)
class ModelPricing:
    """Per-million-token pricing for a model tier."""
    label: str
    input_price_per_million_tokens: float
    output_price_per_million_tokens: float


@dataclass(frozen=True)
class PricingTable:
    """Fixed pricing table keyed by model tier."""
    prices: Dict[ModelTier, ModelPricing]

    def get_pricing(self, tier: Union[ModelTier, str]) -> ModelPricing:
        """Get pricing for a model tier.

        Args:
            tier: ModelTier or its string value ("budget", "standard", "premium")

        Returns:
            ModelPricing for the tier

        Raises:
            ValueError: If tier is not supported
        """
        key = parse_tier(tier)
        if key not in self.prices:
            raise ValueError(f"Unsupported model tier: {tier}")
        return self.prices[key]


def parse_tier(tier: Union[ModelTier, str]) -> ModelTier:
    """Resolve a tier name (case-insensitive) to a ModelTier."""
    if isinstance(tier, ModelTier):
        return tier
    if not isinstance(tier, str):
        raise ValueError(f"Unsupported model tier: {tier!r}")
    try:
        return ModelTier(tier.strip().lower())
    except ValueError:
        raise ValueError(f"Unsupported model tier: {tier}")


# Fixed pricing table - rates in USD per million tokens
PRICING_TABLE = PricingTable({
    ModelTier.BUDGET: ModelPricing(
        label="Budget (DeepSeek R1)",
        input_price_per_million_tokens=0.50,
        output_price_per_million_tokens=1.50
    ),
    ModelTier.STANDARD: ModelPricing(
        label="Standard (Claude Sonnet)",
        input_price_per_million_tokens=3.0,
        output_price_per_million_tokens=9.0
    ),
    ModelTier.PREMIUM: ModelPricing(
        label="Premium (GPT-4o)",
        input_price_per_million_tokens=5.0,
        output_price_per_million_tokens=15.0
    )
})
