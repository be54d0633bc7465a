"""
Workflow cost model.

Converts a usage profile into monthly token volumes and dollar costs.
Every feature overhead is modeled as a fixed per-call token cost billed at
the input-token rate; this is an approximation, not a metered measurement.
"""

import logging
from dataclasses import dataclass
from typing import List, Sequence

from .pricing import PRICING_TABLE, PricingTable
from .usage_profile import UsageProfile

logger = logging.getLogger(__name__)

TOKENS_PER_MILLION = 1_000_000
MONTHS_PER_YEAR = 12

# Per-call token overheads
INTER_AGENT_OVERHEAD_FACTOR = 0.3
RAG_TOKENS_PER_QUERY = 200
DB_TOKENS_PER_QUERY = 150
TOOL_TOKENS_PER_CALL = 100
MEMORY_TOKENS_PER_OP = 100
REFLECTION_TOKENS_PER_TRANSACTION = 300

DEFAULT_SCENARIOS = (
    ("10x Growth", 10),
    ("5x Growth", 5),
    ("2x Growth", 2),
)


@dataclass(frozen=True)
class CostBreakdown:
    """Monthly token volumes and costs derived from a usage profile."""
    base_input_tokens: float
    inter_agent_tokens: float
    rag_tokens: float
    db_query_tokens: float
    tool_call_tokens: float
    memory_tokens: float
    reflection_tokens: float
    input_tokens: float  # Aggregate including all overhead terms
    output_tokens: float
    input_cost: float
    output_cost: float
    total_monthly: float
    total_annual: float


@dataclass(frozen=True)
class ScenarioProjection:
    """Monthly cost under a growth multiplier."""
    name: str
    multiplier: float
    total_monthly: float


def compute_cost(
    profile: UsageProfile,
    pricing_table: PricingTable = PRICING_TABLE
) -> CostBreakdown:
    """Compute monthly token volumes and costs for a usage profile.

    Pure and total over valid profiles: identical inputs always produce
    identical breakdowns.

    Args:
        profile: Usage assumptions to price
        pricing_table: Tier rates (defaults to the fixed table)

    Returns:
        CostBreakdown with per-term tokens, costs and totals
    """
    pricing = pricing_table.get_pricing(profile.model_tier)
    transactions = profile.transactions_per_month

    base_input_tokens = transactions * profile.input_tokens
    base_output_tokens = transactions * profile.output_tokens
    inter_agent_tokens = (
        transactions
        * profile.inter_agent_interactions
        * (profile.input_tokens + profile.output_tokens)
        * INTER_AGENT_OVERHEAD_FACTOR
    )

    # Feature overhead
    rag_tokens = profile.rag_queries * transactions * RAG_TOKENS_PER_QUERY
    db_query_tokens = profile.db_queries * transactions * DB_TOKENS_PER_QUERY
    tool_call_tokens = profile.tool_calls * transactions * TOOL_TOKENS_PER_CALL
    memory_tokens = profile.memory_ops * transactions * MEMORY_TOKENS_PER_OP
    reflection_tokens = (
        transactions * REFLECTION_TOKENS_PER_TRANSACTION
        if profile.reflection_enabled else 0
    )

    total_input_tokens = (
        base_input_tokens + inter_agent_tokens + rag_tokens + db_query_tokens
        + tool_call_tokens + memory_tokens + reflection_tokens
    )

    input_cost = total_input_tokens / TOKENS_PER_MILLION * pricing.input_price_per_million_tokens
    output_cost = base_output_tokens / TOKENS_PER_MILLION * pricing.output_price_per_million_tokens
    total_monthly = input_cost + output_cost

    logger.debug(
        "Computed %s-tier cost: %s input / %s output tokens, $%.4f monthly",
        profile.model_tier.value, total_input_tokens, base_output_tokens, total_monthly
    )

    return CostBreakdown(
        base_input_tokens=base_input_tokens,
        inter_agent_tokens=inter_agent_tokens,
        rag_tokens=rag_tokens,
        db_query_tokens=db_query_tokens,
        tool_call_tokens=tool_call_tokens,
        memory_tokens=memory_tokens,
        reflection_tokens=reflection_tokens,
        input_tokens=total_input_tokens,
        output_tokens=base_output_tokens,
        input_cost=input_cost,
        output_cost=output_cost,
        total_monthly=total_monthly,
        total_annual=total_monthly * MONTHS_PER_YEAR
    )


def scale_scenario(total_monthly: float, multiplier: float) -> float:
    """Scale a monthly total by a growth multiplier."""
    return total_monthly * multiplier


def project_scenarios(
    total_monthly: float,
    scenarios: Sequence = DEFAULT_SCENARIOS
) -> List[ScenarioProjection]:
    """Project monthly cost under each growth scenario.

    Args:
        total_monthly: Current monthly total
        scenarios: (name, multiplier) pairs, or bare multipliers which are
            named "<m>x Growth"

    Returns:
        One ScenarioProjection per scenario, in the given order
    """
    projections = []
    for scenario in scenarios:
        if isinstance(scenario, (tuple, list)):
            name, multiplier = scenario
        else:
            multiplier = scenario
            name = f"{multiplier:g}x Growth"
        projections.append(ScenarioProjection(
            name=name,
            multiplier=multiplier,
            total_monthly=scale_scenario(total_monthly, multiplier)
        ))
    return projections
