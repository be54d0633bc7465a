"""
Configuration management and loading.

Loads estimator settings (usage profile and growth scenarios) from YAML.
"""

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Tuple

import yaml

from ai_workflow_estimator.core.cost_model import DEFAULT_SCENARIOS
from ai_workflow_estimator.core.pricing import parse_tier
from ai_workflow_estimator.core.usage_profile import COUNT_FIELDS, UsageProfile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EstimatorConfig:
    """Complete estimator configuration."""
    profile: UsageProfile
    scenarios: Tuple[float, ...]

    def __post_init__(self):
        """Validate scenario multipliers."""
        if not self.scenarios:
            raise ValueError("scenarios cannot be empty")
        for multiplier in self.scenarios:
            if multiplier <= 0:
                raise ValueError("scenario multipliers must be > 0")


def load_estimator_config(path: str) -> EstimatorConfig:
    """Load and validate estimator configuration from a YAML file.

    Profile keys are optional and fall back to the default profile;
    unknown keys anywhere are rejected.

    Args:
        path: Path to YAML configuration file

    Returns:
        Validated EstimatorConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML is invalid
        ValueError: If configuration is invalid
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Estimator config file not found: {path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        try:
            raw_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Invalid YAML in config file {path}: {e}")

    if not raw_config:
        raise ValueError("Configuration file is empty")
    if not isinstance(raw_config, dict):
        raise ValueError("Configuration must be a dictionary")

    allowed_top_keys = {'profile', 'scenarios'}
    unknown_keys = set(raw_config.keys()) - allowed_top_keys
    if unknown_keys:
        raise ValueError(f"Unknown configuration keys: {unknown_keys}")

    profile_data = raw_config.get('profile') or {}
    if not isinstance(profile_data, dict):
        raise ValueError("'profile' must be a dictionary")
    profile = _parse_profile(profile_data)

    if 'scenarios' in raw_config:
        scenarios = _parse_scenarios(raw_config['scenarios'])
    else:
        scenarios = tuple(multiplier for _, multiplier in DEFAULT_SCENARIOS)

    logger.debug("Loaded estimator config from %s", config_path)
    return EstimatorConfig(profile=profile, scenarios=scenarios)


def _parse_profile(data: Dict[str, Any]) -> UsageProfile:
    """Parse and validate the profile section.

    Args:
        data: Profile configuration data

    Returns:
        Validated UsageProfile

    Raises:
        ValueError: If configuration is invalid
    """
    allowed_keys = {f.name for f in fields(UsageProfile)}
    unknown_keys = set(data.keys()) - allowed_keys
    if unknown_keys:
        raise ValueError(f"Unknown keys in profile: {unknown_keys}")

    values = {}
    for name in COUNT_FIELDS:
        if name not in data:
            continue
        value = data[name]
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ValueError(f"'{name}' in profile must be a non-negative integer")
        values[name] = value

    if 'reflection_enabled' in data:
        if not isinstance(data['reflection_enabled'], bool):
            raise ValueError("'reflection_enabled' in profile must be a boolean")
        values['reflection_enabled'] = data['reflection_enabled']

    if 'model_tier' in data:
        try:
            values['model_tier'] = parse_tier(data['model_tier'])
        except ValueError:
            raise ValueError("'model_tier' in profile must be one of: ['budget', 'standard', 'premium']")

    return UsageProfile(**values)


def _parse_scenarios(data: Any) -> Tuple[float, ...]:
    if not isinstance(data, list) or not data:
        raise ValueError("'scenarios' must be a non-empty list")
    for multiplier in data:
        if isinstance(multiplier, bool) or not isinstance(multiplier, (int, float)) or multiplier <= 0:
            raise ValueError("'scenarios' entries must be numbers > 0")
    return tuple(data)
