"""CLI commands for workflow promotion."""

import asyncio
import json
from pathlib import Path

import rich

from linebuild.promotion.gate import (
    apply_transition,
    get_possible_transitions,
    is_editable_status,
    requires_validation_for_transition,
    status_label,
    suggested_action,
)
from linebuild.validation.cli import build_orchestrator, output_status
from linebuild.validation.models import AggregateStatus
from linebuild.workflow.files import load_workflow, save_workflow
from linebuild.workflow.models import WorkflowStatus


def promote_command(
    workflow_path: Path,
    target: str,
    rules_path: Path | None = None,
    model: str | None = None,
    timeout_seconds: float | None = None,
    max_concurrency: int | None = None,
    write: bool = False,
    format: str = "human",
) -> int:
    """Move a workflow to a new status, validating first when required.

    Args:
        workflow_path: Workflow JSON file
        target: Requested status ("draft" or "active")
        rules_path: Rules JSON file (needed to activate)
        model: Reasoning model override
        timeout_seconds: Per-call reasoning timeout override
        max_concurrency: Concurrent reasoning calls override
        write: Save the promoted workflow back to workflow_path
        format: Output format: "human" or "json"

    Returns:
        Exit code (0 = transitioned, 1 = refused, 2 = bad input)
    """
    try:
        target_status = WorkflowStatus(target.lower())
    except ValueError:
        valid = ", ".join(s.value for s in WorkflowStatus)
        _print_error(f"Unknown status '{target}'. Expected one of: {valid}", format)
        return 2

    try:
        workflow = load_workflow(workflow_path)
    except (FileNotFoundError, ValueError) as e:
        _print_error(str(e), format)
        return 2

    status: AggregateStatus | None = None
    if requires_validation_for_transition(workflow.status, target_status):
        if rules_path is None:
            _print_error(f"--rules is required to move to {target_status}", format)
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

    applied = apply_transition(workflow, target_status, status)
    result = applied.result

    if result.success and write:
        save_workflow(applied.workflow, workflow_path)

    if format == "json":
        output = {
            "workflow_id": workflow.id,
            "previous_status": workflow.status.value,
            "transition": result.model_dump(mode="json"),
            "written": result.success and write,
            "validation": status.model_dump(mode="json") if status else None,
        }
        print(json.dumps(output, indent=2))
    else:
        if status is not None and not result.success:
            output_status(status, format)

        if result.success:
            rich.print(
                f"[green]✓[/green] {workflow.name}: "
                f"{status_label(workflow.status)} → {status_label(result.new_status)}"
            )
            if write:
                rich.print(f"[dim]Saved to {workflow_path}[/dim]")
            else:
                rich.print("[dim]Dry run; pass --write to save the new status[/dim]")
        else:
            rich.print(f"[red]✗[/red] {workflow.name}: {result.reason}")

    return 0 if result.success else 1


def transitions_command(workflow_path: Path, format: str = "human") -> int:
    """Show a workflow's status and the statuses it can move to.

    Returns:
        Exit code (0 = success, 2 = bad input)
    """
    try:
        workflow = load_workflow(workflow_path)
    except (FileNotFoundError, ValueError) as e:
        _print_error(str(e), format)
        return 2

    current = workflow.status
    targets = get_possible_transitions(current)

    if format == "json":
        output = {
            "workflow_id": workflow.id,
            "status": current.value,
            "editable": is_editable_status(current),
            "transitions": [
                {
                    "target": target.value,
                    "requires_validation": requires_validation_for_transition(current, target),
                }
                for target in targets
            ],
            "suggested_action": suggested_action(current),
        }
        print(json.dumps(output, indent=2))
        return 0

    rich.print(f"\n[bold]{workflow.name}[/bold] ({workflow.id})")
    editable = "editable" if is_editable_status(current) else "read-only"
    rich.print(f"Status: {status_label(current)} [dim]({editable})[/dim]\n")
    for target in targets:
        gated = requires_validation_for_transition(current, target)
        note = " [dim](requires passing validation)[/dim]" if gated else ""
        rich.print(f"  → {status_label(target)}{note}")
    rich.print(f"\n[dim]{suggested_action(current)}[/dim]\n")

    return 0


def _print_error(message: str, format: str) -> None:
    if format == "human":
        rich.print(f"[red]Error:[/red] {message}")
    else:
        print(json.dumps({"error": message}))
