"""CLI commands for rule files."""

import json
from pathlib import Path

import rich
from rich.table import Table

from linebuild.errors import RuleSourceError
from linebuild.rules.checks import validate_rule_definitions
from linebuild.rules.source import JsonFileRuleSource


def rules_check_command(rules_path: Path, format: str = "human") -> int:
    """Load a rules file and report definition problems.

    Returns:
        Exit code (0 = no issues, 1 = issues found, 2 = file could not be loaded)
    """
    try:
        rules = JsonFileRuleSource(rules_path).load_all_rules()
    except RuleSourceError as e:
        if format == "human":
            rich.print(f"[red]Error:[/red] {e}")
        else:
            print(json.dumps({"error": str(e)}))
        return 2

    issues = validate_rule_definitions(rules)

    if format == "json":
        output = {
            "rule_count": len(rules),
            "enabled_count": len([r for r in rules if r.enabled]),
            "issues": [issue.model_dump() for issue in issues],
        }
        print(json.dumps(output, indent=2))
        return 1 if issues else 0

    enabled = len([r for r in rules if r.enabled])
    if not issues:
        rich.print(f"\n[green]✓ {len(rules)} rules OK[/green] [dim]({enabled} enabled)[/dim]\n")
        return 0

    table = Table(show_header=True, header_style="bold")
    table.add_column("Rule", style="cyan")
    table.add_column("Issue")
    for issue in issues:
        table.add_row(issue.rule_id or "(no id)", issue.message)

    rich.print(f"\n[red]✗ {len(issues)} issue(s) in {len(rules)} rules[/red]\n")
    rich.print(table)
    return 1
