"""Functional core - pure scheduling logic with no I/O."""

from .cron import cron_matches_date, match_field, validate_cron_expression
from .dates import add_days, format_anchor_date, iter_days, parse_iso_date, validate_range
from .models import Bundle, Link, Notification, RecurringConfig, Task, TaskDefinition, Template
from .recurring import Occurrence, plan_occurrences
from .templates import (
    plan_bundle,
    plan_notification,
    plan_template_tasks,
    stage_after_completion,
    validate_task_definitions,
    validate_template,
)

__all__ = [
    # Cron
    "cron_matches_date",
    "match_field",
    "validate_cron_expression",
    # Dates
    "add_days",
    "format_anchor_date",
    "iter_days",
    "parse_iso_date",
    "validate_range",
    # Models
    "Bundle",
    "Link",
    "Notification",
    "RecurringConfig",
    "Task",
    "TaskDefinition",
    "Template",
    # Recurring
    "Occurrence",
    "plan_occurrences",
    # Templates
    "plan_bundle",
    "plan_notification",
    "plan_template_tasks",
    "stage_after_completion",
    "validate_task_definitions",
    "validate_template",
]
