"""Linebuild CLI application."""

import logging
from enum import StrEnum
from typing import Annotated

import typer
from rich import print as rprint

import linebuild as linebuild_pkg


class OutputFormat(StrEnum):
    """Output format for CLI commands."""

    human = "human"
    json = "json"


app = typer.Typer(
    name="linebuild",
    help="Validate kitchen line-build workflows and promote them to active.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    if value:
        rprint(f"linebuild {linebuild_pkg.__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Log debug output to stderr."),
    ] = False,
) -> None:
    """Linebuild — workflow validation and promotion."""
    from dotenv import load_dotenv

    load_dotenv()

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command("validate")
def validate(
    workflow_file: Annotated[
        str,
        typer.Argument(help="Path to the workflow JSON file"),
    ],
    rules: Annotated[
        str,
        typer.Option("--rules", "-r", help="Path to the rules JSON file"),
    ],
    model: Annotated[
        str | None,
        typer.Option("--model", "-m", help="Reasoning model for semantic rules"),
    ] = None,
    timeout: Annotated[
        float | None,
        typer.Option("--timeout", help="Per-call reasoning timeout in seconds"),
    ] = None,
    concurrency: Annotated[
        int | None,
        typer.Option("--concurrency", help="Maximum concurrent reasoning calls"),
    ] = None,
    format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format"),
    ] = OutputFormat.human,
) -> None:
    """Validate a workflow against structured and semantic rules."""
    from pathlib import Path

    from linebuild.validation.cli import validate_command

    exit_code = validate_command(
        workflow_path=Path(workflow_file),
        rules_path=Path(rules),
        model=model,
        timeout_seconds=timeout,
        max_concurrency=concurrency,
        format=format.value,
    )
    raise typer.Exit(exit_code)


@app.command("promote")
def promote(
    workflow_file: Annotated[
        str,
        typer.Argument(help="Path to the workflow JSON file"),
    ],
    target: Annotated[
        str,
        typer.Option("--to", "-t", help="Target status: draft or active"),
    ],
    rules: Annotated[
        str | None,
        typer.Option("--rules", "-r", help="Path to the rules JSON file (required to activate)"),
    ] = None,
    model: Annotated[
        str | None,
        typer.Option("--model", "-m", help="Reasoning model for semantic rules"),
    ] = None,
    timeout: Annotated[
        float | None,
        typer.Option("--timeout", help="Per-call reasoning timeout in seconds"),
    ] = None,
    concurrency: Annotated[
        int | None,
        typer.Option("--concurrency", help="Maximum concurrent reasoning calls"),
    ] = None,
    write: Annotated[
        bool,
        typer.Option("--write", "-w", help="Save the new status to the workflow file"),
    ] = False,
    format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format"),
    ] = OutputFormat.human,
) -> None:
    """Move a workflow between draft and active."""
    from pathlib import Path

    from linebuild.promotion.cli import promote_command

    exit_code = promote_command(
        workflow_path=Path(workflow_file),
        target=target,
        rules_path=Path(rules) if rules else None,
        model=model,
        timeout_seconds=timeout,
        max_concurrency=concurrency,
        write=write,
        format=format.value,
    )
    raise typer.Exit(exit_code)


@app.command("transitions")
def transitions(
    workflow_file: Annotated[
        str,
        typer.Argument(help="Path to the workflow JSON file"),
    ],
    format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format"),
    ] = OutputFormat.human,
) -> None:
    """Show a workflow's status and where it can move."""
    from pathlib import Path

    from linebuild.promotion.cli import transitions_command

    exit_code = transitions_command(workflow_path=Path(workflow_file), format=format.value)
    raise typer.Exit(exit_code)


rules_app = typer.Typer(help="Inspect rule files.")
app.add_typer(rules_app, name="rules")


@rules_app.callback(invoke_without_command=True)
def rules_group(ctx: typer.Context) -> None:
    """Rule file tools."""
    if ctx.invoked_subcommand is None:
        rprint("Use [bold]linebuild rules check[/bold].")
        rprint("Run [bold]linebuild rules --help[/bold] for details.")
        raise typer.Exit(0)


@rules_app.command("check")
def rules_check(
    rules_file: Annotated[
        str,
        typer.Argument(help="Path to the rules JSON file"),
    ],
    format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format"),
    ] = OutputFormat.human,
) -> None:
    """Check rule definitions for problems."""
    from pathlib import Path

    from linebuild.rules.cli import rules_check_command

    exit_code = rules_check_command(rules_path=Path(rules_file), format=format.value)
    raise typer.Exit(exit_code)
