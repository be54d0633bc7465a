"""
Usage profile for workflow cost estimation.

Captures the per-transaction and monthly usage assumptions that feed the
cost model.
"""

from dataclasses import dataclass, replace
from typing import Dict, List

from .pricing import ModelTier, parse_tier


# Count assigned to a feature when it is switched on
FEATURE_DEFAULT_COUNTS: Dict[str, int] = {
    "rag_queries": 5,
    "memory_ops": 2,
    "db_queries": 2,
    "tool_calls": 2,
}

# Display order for the active-feature summary
FEATURE_LABELS = (
    ("rag_queries", "RAG"),
    ("memory_ops", "Memory"),
    ("db_queries", "DB"),
    ("tool_calls", "Tools"),
    ("reflection_enabled", "Reflection"),
)

COUNT_FIELDS = (
    "transactions_per_month",
    "input_tokens",
    "output_tokens",
    "inter_agent_interactions",
    "rag_queries",
    "db_queries",
    "tool_calls",
    "memory_ops",
)


@dataclass(frozen=True)
class UsageProfile:
    """Immutable workflow usage assumptions.

    Token counts are per-transaction averages; feature counts are
    per-transaction call counts where 0 means the feature is disabled.
    """
    transactions_per_month: int = 100
    input_tokens: int = 500
    output_tokens: int = 800
    inter_agent_interactions: int = 1
    rag_queries: int = 0
    db_queries: int = 0
    tool_calls: int = 0
    memory_ops: int = 0
    reflection_enabled: bool = False
    model_tier: ModelTier = ModelTier.STANDARD

    def __post_init__(self):
        """Validate counts are non-negative integers and normalize the tier."""
        for name in COUNT_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer")
            if value < 0:
                raise ValueError(f"{name} cannot be negative")
        if not isinstance(self.reflection_enabled, bool):
            raise ValueError("reflection_enabled must be a boolean")
        # Frozen dataclass: bypass __setattr__ to store the parsed tier
        object.__setattr__(self, "model_tier", parse_tier(self.model_tier))

    def toggle_feature(self, feature: str) -> "UsageProfile":
        """Return a new profile with the feature switched on or off.

        Count features flip between 0 and their default count; reflection
        flips its flag.

        Args:
            feature: Field name of the feature (e.g. "rag_queries")

        Returns:
            New UsageProfile with the feature toggled

        Raises:
            ValueError: If feature is not a toggleable feature
        """
        if feature == "reflection_enabled":
            return replace(self, reflection_enabled=not self.reflection_enabled)
        if feature not in FEATURE_DEFAULT_COUNTS:
            raise ValueError(f"Unknown feature: {feature}")
        current = getattr(self, feature)
        new_count = 0 if current > 0 else FEATURE_DEFAULT_COUNTS[feature]
        return replace(self, **{feature: new_count})

    @property
    def active_features(self) -> List[str]:
        """Labels of enabled features in display order."""
        return [label for name, label in FEATURE_LABELS if getattr(self, name)]


DEFAULT_PROFILE = UsageProfile()
