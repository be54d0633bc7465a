"""
Discovery workflow summaries.

Parses the JSON workflow summary a discovery conversation produces and
maps it onto a usage profile for the cost model.
"""

import json
import logging
import math
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .pricing import ModelTier
from .usage_profile import FEATURE_DEFAULT_COUNTS, UsageProfile

logger = logging.getLogger(__name__)

# Greedy: first "{" through last "}" with the summary key somewhere inside
_WORKFLOW_JSON_PATTERN = re.compile(r'\{.*"business_problem".*\}', re.DOTALL)

WORKING_DAYS_PER_MONTH = 22


@dataclass(frozen=True)
class WorkflowFeatures:
    """Features the discovered workflow relies on."""
    rag: bool = False
    memory: bool = False
    db_queries: int = 0
    tool_calls: int = 0
    reflection: bool = False


@dataclass(frozen=True)
class VolumeEstimates:
    """Expected workload volumes."""
    emails_per_month: int = 0
    chats_per_month: int = 0
    docs_per_month: int = 0
    workflows_per_day: int = 0


@dataclass(frozen=True)
class TokenEstimates:
    """Per-request token estimates."""
    input_tokens: int = 0
    output_tokens: int = 0
    inter_agent_tokens: int = 0


@dataclass(frozen=True)
class WorkflowData:
    """Structured summary of a discovered workflow."""
    business_problem: str = ""
    workflow_description: str = ""
    use_case_category: str = ""
    channels: List[str] = field(default_factory=list)
    complexity_tier: str = "Medium"
    recommended_model: str = ""
    agents_required: int = 0
    features: WorkflowFeatures = field(default_factory=WorkflowFeatures)
    volume_estimates: VolumeEstimates = field(default_factory=VolumeEstimates)
    token_estimates: TokenEstimates = field(default_factory=TokenEstimates)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WorkflowData":
        """Build from a decoded summary, tolerating missing sections.

        Raises:
            ValueError: If a section or value has the wrong type
        """
        if not isinstance(data, dict):
            raise ValueError("Workflow summary must be a JSON object")

        features = _section(data, "features")
        volumes = _section(data, "volume_estimates")
        tokens = _section(data, "token_estimates")

        return cls(
            business_problem=str(data.get("business_problem") or ""),
            workflow_description=str(data.get("workflow_description") or ""),
            use_case_category=str(data.get("use_case_category") or ""),
            channels=_channels(data),
            complexity_tier=str(data.get("complexity_tier") or "Medium"),
            recommended_model=str(data.get("recommended_model") or ""),
            agents_required=_count(data, "agents_required"),
            features=WorkflowFeatures(
                rag=bool(features.get("rag")),
                memory=bool(features.get("memory")),
                db_queries=_count(features, "db_queries"),
                tool_calls=_count(features, "tool_calls"),
                reflection=bool(features.get("reflection"))
            ),
            volume_estimates=VolumeEstimates(
                emails_per_month=_count(volumes, "emails_per_month"),
                chats_per_month=_count(volumes, "chats_per_month"),
                docs_per_month=_count(volumes, "docs_per_month"),
                workflows_per_day=_count(volumes, "workflows_per_day")
            ),
            token_estimates=TokenEstimates(
                input_tokens=_count(tokens, "input_tokens"),
                output_tokens=_count(tokens, "output_tokens"),
                inter_agent_tokens=_count(tokens, "inter_agent_tokens")
            )
        )


def _section(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = data.get(key) or {}
    if not isinstance(value, dict):
        raise ValueError(f"'{key}' must be an object")
    return value


def _channels(data: Dict[str, Any]) -> List[str]:
    value = data.get("channels") or []
    if not isinstance(value, list):
        raise ValueError("'channels' must be a list")
    return [str(c) for c in value]


def _count(data: Dict[str, Any], key: str) -> int:
    value = data.get(key) or 0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"'{key}' must be a number")
    if not math.isfinite(value):
        raise ValueError(f"'{key}' must be finite")
    return max(int(value), 0)


def extract_workflow(text: str) -> Optional[WorkflowData]:
    """Extract a workflow summary embedded in a free-text reply.

    Best effort: the span from the first "{" to the last "}" is used only
    if it contains the "business_problem" key, and anything that fails to
    parse yields None rather than an error.

    Args:
        text: Reply text, possibly with a JSON summary inside

    Returns:
        WorkflowData, or None if no usable summary was found
    """
    if not text:
        return None

    match = _WORKFLOW_JSON_PATTERN.search(text)
    if not match:
        logger.debug("No workflow summary found in reply")
        return None

    try:
        return WorkflowData.from_dict(json.loads(match.group(0)))
    except ValueError as e:
        # json.JSONDecodeError is a ValueError subclass
        logger.debug("Ignoring unparseable workflow summary: %s", e)
        return None


def profile_from_workflow(data: WorkflowData) -> UsageProfile:
    """Map a discovered workflow onto estimator inputs.

    Zero estimates fall back to the default profile values.
    """
    recommended = data.recommended_model or ""
    if "Budget" in recommended:
        tier = ModelTier.BUDGET
    elif "Premium" in recommended:
        tier = ModelTier.PREMIUM
    else:
        tier = ModelTier.STANDARD

    return UsageProfile(
        transactions_per_month=data.volume_estimates.workflows_per_day * WORKING_DAYS_PER_MONTH or 100,
        input_tokens=data.token_estimates.input_tokens or 500,
        output_tokens=data.token_estimates.output_tokens or 800,
        inter_agent_interactions=data.agents_required or 1,
        rag_queries=FEATURE_DEFAULT_COUNTS["rag_queries"] if data.features.rag else 0,
        db_queries=data.features.db_queries,
        tool_calls=data.features.tool_calls,
        memory_ops=FEATURE_DEFAULT_COUNTS["memory_ops"] if data.features.memory else 0,
        reflection_enabled=data.features.reflection,
        model_tier=tier
    )
