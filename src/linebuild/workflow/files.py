"""Read and write workflow JSON files for the CLI."""

from pathlib import Path

from pydantic import ValidationError

from linebuild.workflow.models import Workflow


def load_workflow(path: Path) -> Workflow:
    """Load a workflow from a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file contains invalid JSON or doesn't match the schema.
    """
    if not path.exists():
        raise FileNotFoundError(f"Workflow file not found: {path}")

    try:
        return Workflow.model_validate_json(path.read_text(encoding="utf-8"))
    except ValidationError as e:
        raise ValueError(f"Invalid workflow in {path}: {e}") from e


def save_workflow(workflow: Workflow, path: Path) -> Path:
    """Write a workflow to a JSON file (2-space indent).

    Returns:
        Path to the written file
    """
    path.write_text(workflow.model_dump_json(indent=2) + "\n", encoding="utf-8")
    return path
