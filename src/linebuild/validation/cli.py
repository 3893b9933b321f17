"""CLI commands for validation."""

import asyncio
import json
from pathlib import Path

import rich
from rich.table import Table

from linebuild.providers.base import ReasoningClient
from linebuild.providers.config import ProviderConfig
from linebuild.providers.pydantic_ai import PydanticAIReasoningClient
from linebuild.rules.cache import RuleCache
from linebuild.rules.source import JsonFileRuleSource
from linebuild.validation.models import AggregateStatus
from linebuild.validation.orchestrator import ValidationOrchestrator
from linebuild.validation.semantic import DEFAULT_MAX_CONCURRENCY
from linebuild.workflow.files import load_workflow


def build_orchestrator(
    rules_path: Path,
    model: str | None = None,
    timeout_seconds: float | None = None,
    max_concurrency: int | None = None,
) -> tuple[ValidationOrchestrator, str | None]:
    """Wire a rule source, cache, and reasoning client into an orchestrator.

    A missing model is not fatal: semantic rules then fail closed.

    Returns:
        (orchestrator, warning) where warning explains a missing model, or None
    """
    cache = RuleCache(JsonFileRuleSource(rules_path))

    warning = None
    client: ReasoningClient | None = None
    concurrency = DEFAULT_MAX_CONCURRENCY if max_concurrency is None else max_concurrency
    try:
        config = ProviderConfig.from_env(
            model=model, timeout_seconds=timeout_seconds, max_concurrency=max_concurrency
        )
        client = PydanticAIReasoningClient(config.model, timeout_seconds=config.timeout_seconds)
        concurrency = config.max_concurrency
    except RuntimeError as e:
        warning = f"{e}\nSemantic rules will fail until a model is configured."

    return ValidationOrchestrator(cache, client, max_concurrency=concurrency), warning


def validate_command(
    workflow_path: Path,
    rules_path: Path,
    model: str | None = None,
    timeout_seconds: float | None = None,
    max_concurrency: int | None = None,
    format: str = "human",
) -> int:
    """Validate a workflow file against a rules file.

    Args:
        workflow_path: Workflow JSON file
        rules_path: Rules JSON file
        model: Reasoning model override
        timeout_seconds: Per-call reasoning timeout override
        max_concurrency: Concurrent reasoning calls override
        format: Output format: "human" or "json"

    Returns:
        Exit code (0 = valid, 1 = invalid or run error, 2 = bad input)
    """
    try:
        workflow = load_workflow(workflow_path)
    except (FileNotFoundError, ValueError) as e:
        _print_error(str(e), format)
        return 2

    if not rules_path.exists():
        _print_error(f"Rules file not found: {rules_path}", format)
        return 2

    try:
        orchestrator, warning = build_orchestrator(
            rules_path, model, timeout_seconds, max_concurrency
        )
    except Exception as e:
        _print_error(str(e), format)
        return 2

    if warning and format == "human":
        rich.print(f"[yellow]Warning:[/yellow] {warning}")

    status = asyncio.run(orchestrator.run(workflow))
    output_status(status, format)

    return 0 if status.is_valid else 1


def output_status(status: AggregateStatus, format: str) -> None:
    """Output a validation status in the specified format.

    Args:
        status: AggregateStatus to output
        format: Output format ("human" or "json")
    """
    if format == "json":
        print(json.dumps(status.model_dump(mode="json"), indent=2))
        return

    if status.error:
        rich.print(f"\n[red]✗ Validation could not run:[/red] {status.error}\n")
        return

    if status.is_valid:
        rich.print("\n[green]✓ All validation rules passed[/green]\n")
    else:
        rich.print("\n[red]✗ Validation failed[/red]\n")

        table = Table(show_header=True, header_style="bold")
        table.add_column("Rule", style="cyan")
        table.add_column("Step", style="magenta")
        table.add_column("Type", style="yellow")
        table.add_column("Failure")

        for result in status.failed_results:
            table.add_row(
                result.rule_name,
                result.step_id,
                result.rule_type.value + (f" ({result.error})" if result.error else ""),
                "\n".join(result.failures),
            )
        rich.print(table)

    total_s = status.duration_ms / 1000
    rich.print(
        f"\n[dim]{status.pass_count} passed, {status.fail_count} failed "
        f"of {status.total_count} checks in {total_s:.2f}s[/dim]\n"
    )


def _print_error(message: str, format: str) -> None:
    if format == "human":
        rich.print(f"[red]Error:[/red] {message}")
    else:
        print(json.dumps({"error": message}))
