"""Promotion gate: draft/active lifecycle transitions guarded by validation."""

from linebuild.promotion.gate import (
    apply_transition,
    can_transition,
    default_status,
    get_possible_transitions,
    is_editable_status,
    requires_validation_for_transition,
    status_description,
    status_label,
    suggested_action,
    transition_to,
)
from linebuild.promotion.models import AppliedTransition, TransitionResult

__all__ = [
    "AppliedTransition",
    "TransitionResult",
    "apply_transition",
    "can_transition",
    "default_status",
    "get_possible_transitions",
    "is_editable_status",
    "requires_validation_for_transition",
    "status_description",
    "status_label",
    "suggested_action",
    "transition_to",
]
