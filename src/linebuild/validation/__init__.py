"""Workflow validation: structured and semantic rule evaluation."""

from linebuild.validation.models import (
    AggregateStatus,
    ResultError,
    ResultSummary,
    SemanticResultSummary,
    ValidationResult,
)
from linebuild.validation.orchestrator import ValidationOrchestrator
from linebuild.validation.parsing import ParseFailure, Verdict, parse_verdict
from linebuild.validation.paths import ABSENT, resolve

__all__ = [
    "ABSENT",
    "AggregateStatus",
    "ParseFailure",
    "ResultError",
    "ResultSummary",
    "SemanticResultSummary",
    "ValidationOrchestrator",
    "ValidationResult",
    "Verdict",
    "parse_verdict",
    "resolve",
]
