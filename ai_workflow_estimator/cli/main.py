"""
CLI interface for AI Workflow Estimator.

Provides command-line access to cost estimation and tier comparison.
"""

import json
import logging
import sys
from dataclasses import asdict, replace
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ai_workflow_estimator.config.loader import load_estimator_config
from ai_workflow_estimator.core.cost_model import (
    DEFAULT_SCENARIOS,
    CostBreakdown,
    ScenarioProjection,
    compute_cost,
    project_scenarios
)
from ai_workflow_estimator.core.pricing import PRICING_TABLE, ModelTier, parse_tier
from ai_workflow_estimator.core.usage_profile import DEFAULT_PROFILE, UsageProfile
from ai_workflow_estimator.core.workflow import extract_workflow, profile_from_workflow

app = typer.Typer()
console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger(__name__)

EXIT_CODE_PASS = 0
EXIT_CODE_FAIL = 1


def _configure_logging(verbose: bool) -> None:
    """Route library logging through rich on stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True
    )


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging"
    )
):
    """AI Workflow Estimator CLI."""
    _configure_logging(verbose)
    if ctx.invoked_subcommand is None:
        console.print("AI Workflow Estimator - Use --help to see available commands")


@app.command()
def status():
    """Check that AI Workflow Estimator is installed."""
    console.print("[green]✓[/] AI Workflow Estimator is ready")


@app.command()
def tiers():
    """Show the pricing table for each model tier."""
    table = Table(title="Model Tier Pricing (USD per 1M tokens)")
    table.add_column("Tier")
    table.add_column("Model")
    table.add_column("Input", justify="right")
    table.add_column("Output", justify="right")

    for tier in ModelTier:
        pricing = PRICING_TABLE.get_pricing(tier)
        table.add_row(
            tier.value,
            pricing.label,
            _format_currency(pricing.input_price_per_million_tokens),
            _format_currency(pricing.output_price_per_million_tokens)
        )
    console.print(table)


@app.command()
def estimate(
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="YAML file with profile and scenarios"
    ),
    workflow: Optional[Path] = typer.Option(
        None,
        "--workflow",
        "-w",
        help="Discovery reply containing a JSON workflow summary"
    ),
    transactions: Optional[int] = typer.Option(
        None, "--transactions", "-t", min=0, help="Transactions per month"
    ),
    input_tokens: Optional[int] = typer.Option(
        None, "--input-tokens", min=0, help="Average input tokens per request"
    ),
    output_tokens: Optional[int] = typer.Option(
        None, "--output-tokens", min=0, help="Average output tokens per request"
    ),
    agents: Optional[int] = typer.Option(
        None, "--agents", min=0, help="Multi-agent interactions per request"
    ),
    rag: Optional[int] = typer.Option(
        None, "--rag", min=0, help="RAG queries per request"
    ),
    db: Optional[int] = typer.Option(
        None, "--db", min=0, help="Database queries per request"
    ),
    tools: Optional[int] = typer.Option(
        None, "--tools", min=0, help="Tool/API calls per request"
    ),
    memory: Optional[int] = typer.Option(
        None, "--memory", min=0, help="Memory operations per request"
    ),
    reflection: Optional[bool] = typer.Option(
        None, "--reflection/--no-reflection", help="Enable reflection & safety checks"
    ),
    tier: Optional[str] = typer.Option(
        None, "--tier", help="Model tier: budget, standard or premium"
    ),
    as_json: bool = typer.Option(
        False, "--json", help="Print the estimate as JSON"
    )
):
    """
    Estimate monthly and annual cost for a workflow.

    Values are taken from, in increasing precedence: built-in defaults,
    --config, --workflow, then individual options.
    """
    try:
        profile, scenarios = _resolve_profile(config, workflow)
        overrides = {
            "transactions_per_month": transactions,
            "input_tokens": input_tokens,
            "output_tokens": output_tokens,
            "inter_agent_interactions": agents,
            "rag_queries": rag,
            "db_queries": db,
            "tool_calls": tools,
            "memory_ops": memory,
            "reflection_enabled": reflection,
            "model_tier": parse_tier(tier) if tier is not None else None,
        }
        profile = replace(profile, **{k: v for k, v in overrides.items() if v is not None})

        breakdown = compute_cost(profile)
        projections = project_scenarios(breakdown.total_monthly, scenarios)
    except Exception as e:
        console.print(f"[red]Error:[/] {str(e)}")
        sys.exit(EXIT_CODE_FAIL)

    if as_json:
        typer.echo(json.dumps(_estimate_payload(profile, breakdown, projections), indent=2))
    else:
        _display_estimate(profile, breakdown, projections)
    sys.exit(EXIT_CODE_PASS)


@app.command()
def compare(
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="YAML file with profile and scenarios"
    ),
    workflow: Optional[Path] = typer.Option(
        None,
        "--workflow",
        "-w",
        help="Discovery reply containing a JSON workflow summary"
    )
):
    """Compare the same workflow across every model tier."""
    try:
        profile, _ = _resolve_profile(config, workflow)
    except Exception as e:
        console.print(f"[red]Error:[/] {str(e)}")
        sys.exit(EXIT_CODE_FAIL)

    table = Table(title="Tier Comparison")
    table.add_column("Tier")
    table.add_column("Input", justify="right")
    table.add_column("Output", justify="right")
    table.add_column("Monthly", justify="right")
    table.add_column("Annual", justify="right")

    for model_tier in ModelTier:
        breakdown = compute_cost(replace(profile, model_tier=model_tier))
        table.add_row(
            model_tier.value,
            _format_currency(breakdown.input_cost),
            _format_currency(breakdown.output_cost),
            _format_currency(breakdown.total_monthly),
            _format_currency(breakdown.total_annual)
        )
    console.print(table)
    sys.exit(EXIT_CODE_PASS)


def _resolve_profile(config: Optional[Path], workflow: Optional[Path]):
    """Build the base profile and scenarios from config and workflow files."""
    profile = DEFAULT_PROFILE
    scenarios = None

    if config is not None:
        estimator_config = load_estimator_config(str(config))
        profile = estimator_config.profile
        scenarios = estimator_config.scenarios

    if workflow is not None:
        if not workflow.exists():
            raise FileNotFoundError(f"Workflow file not found: {workflow}")
        data = extract_workflow(workflow.read_text(encoding="utf-8"))
        if data is None:
            raise ValueError(f"No workflow summary found in {workflow}")
        logger.info("Using workflow summary: %s", data.business_problem or "(untitled)")
        profile = profile_from_workflow(data)

    return profile, scenarios or DEFAULT_SCENARIOS


def _format_currency(amount: float) -> str:
    """Format currency with symbol and thousands separator."""
    return f"${amount:,.2f}"


def _format_tokens(tokens: float) -> str:
    """Format a token volume in millions."""
    return f"{tokens / 1_000_000:,.2f}M tokens"


def _estimate_payload(
    profile: UsageProfile,
    breakdown: CostBreakdown,
    projections: List[ScenarioProjection]
) -> dict:
    profile_data = asdict(profile)
    profile_data["model_tier"] = profile.model_tier.value
    return {
        "profile": profile_data,
        "breakdown": asdict(breakdown),
        "scenarios": [asdict(p) for p in projections],
    }


def _display_estimate(
    profile: UsageProfile,
    breakdown: CostBreakdown,
    projections: List[ScenarioProjection]
):
    """Display an estimate in a clean, financial format."""
    console.print("\n[bold]Monthly Estimate[/bold]")
    console.print("-" * 40)
    console.print(f"[bold]{_format_currency(breakdown.total_monthly)}[/bold]")
    console.print(f"Annual: {_format_currency(breakdown.total_annual)}")

    table = Table(title="Cost Breakdown")
    table.add_column("Item")
    table.add_column("Volume", justify="right")
    table.add_column("Cost", justify="right")
    table.add_row("Input Tokens", _format_tokens(breakdown.input_tokens), _format_currency(breakdown.input_cost))
    table.add_row("Output Tokens", _format_tokens(breakdown.output_tokens), _format_currency(breakdown.output_cost))
    table.add_row("Total Monthly Cost", "", _format_currency(breakdown.total_monthly))
    console.print(table)

    pricing = PRICING_TABLE.get_pricing(profile.model_tier)
    console.print("\n[bold]Configuration Summary[/bold]")
    console.print(f"Transactions/Month: {profile.transactions_per_month:,}")
    console.print(f"Model Tier: {pricing.label}")
    console.print(f"Active Features: {', '.join(profile.active_features) or 'None'}")

    console.print("\n[bold]Usage Scenarios[/bold]")
    for projection in projections:
        console.print(f"{projection.name}: {_format_currency(projection.total_monthly)}")
    console.print()


if __name__ == "__main__":
    app()
