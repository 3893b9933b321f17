"""Prompts for semantic rule evaluation.

Step fields are embedded verbatim: no redaction, no summarization. The rule's
guidance travels separately as the system instruction.
"""

from linebuild.rules.models import SemanticRule
from linebuild.workflow.models import Step, Workflow

DEFAULT_SYSTEM_INSTRUCTION = """You are a food production line validation expert. \
Evaluate the provided step against the validation rule.
Respond with JSON: {"pass": true|false, "reasoning": "explanation", \
"failures": ["specific issue 1", ...]}
Be concise but specific in your reasoning."""


def get_system_instruction(rule: SemanticRule) -> str:
    """Get the system instruction for a rule: its guidance, or the default."""
    return rule.guidance if rule.guidance.strip() else DEFAULT_SYSTEM_INSTRUCTION


def build_step_context(step: Step, workflow: Workflow) -> str:
    """Describe a step for the reasoning service.

    Args:
        step: Step being validated
        workflow: Workflow the step belongs to (used to name dependencies)

    Returns:
        One "Label: value" line per populated field
    """
    tags = step.tags
    target = tags.target.name
    if tags.target.bom_id:
        target += f" ({tags.target.bom_id})"

    lines = [
        f"Step ID: {step.id}",
        f"Action: {tags.action}",
        f"Target: {target}",
    ]

    if tags.equipment:
        equipment = tags.equipment if isinstance(tags.equipment, str) else ", ".join(tags.equipment)
        lines.append(f"Equipment: {equipment}")

    if tags.time:
        lines.append(f"Time: {tags.time.render()} ({tags.time.type})")

    if tags.phase:
        lines.append(f"Phase: {tags.phase}")

    if tags.station:
        lines.append(f"Station: {tags.station}")

    if tags.timing_mode:
        lines.append(f"Timing Mode: {tags.timing_mode}")

    if step.depends_on:
        names = []
        for dep_id in step.depends_on:
            dep = workflow.get_step(dep_id)
            names.append(f"{dep_id} ({dep.tags.action})" if dep else dep_id)
        lines.append(f"Depends on: {', '.join(names)}")

    if tags.requires_order:
        lines.append("Requires Order: Yes")

    if tags.bulk_prep:
        lines.append("Bulk Prep: Yes")

    return "\n".join(lines)


def build_rule_prompt(rule: SemanticRule, step: Step, workflow: Workflow) -> str:
    """Build the user prompt for evaluating one rule against one step."""
    context = build_step_context(step, workflow)

    return f"""Menu Item: {workflow.name}
{context}

Validation Rule: {rule.name}
{rule.prompt}

Evaluate this step against the rule. Return JSON with pass (boolean), \
reasoning (string), and failures (array of strings)."""
