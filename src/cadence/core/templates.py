"""Pure template logic - no I/O dependencies."""

from datetime import date

from cadence.errors import ValidationError

from .cron import validate_cron_expression
from .dates import add_days, format_anchor_date
from .models import STAGES, TRIGGER_TYPES, Task, TaskDefinition, Template


def plan_template_tasks(template: Template, bundle_id: str, anchor: date) -> list[dict]:
    """
    Resolve a template's task definitions into task payloads.

    One payload per definition, in definition order, dated
    anchor + offset_days.

    Pure function - no I/O.
    """
    payloads = []
    for definition in template.task_definitions:
        task_date = add_days(anchor, definition.offset_days or 0)
        data = {
            "description": definition.description,
            "bundleId": bundle_id,
            "date": task_date.isoformat(),
            "source": "template",
            "templateTaskRef": definition.ref_id,
            "status": "todo",
        }
        if definition.assignee_id:
            data["assigneeId"] = definition.assignee_id
        if definition.instructions_url:
            data["instructionsUrl"] = definition.instructions_url
        if definition.required_link_name:
            data["requiredLinkName"] = definition.required_link_name
        if definition.requires_file:
            data["requiresFile"] = True
        if definition.is_milestone:
            data["isMilestone"] = True
        if definition.stage_on_complete:
            data["stageOnComplete"] = definition.stage_on_complete
        payloads.append(data)
    return payloads


def plan_bundle(template: Template, anchor: date) -> dict:
    """Build the payload for a bundle auto-created from a template."""
    data = {
        "title": f"{template.name} - {format_anchor_date(anchor)}",
        "anchorDate": anchor.isoformat(),
        "templateId": template.id,
        "stage": "preparation",
        "status": "active",
    }
    if template.emoji:
        data["emoji"] = template.emoji
    if template.tags:
        data["tags"] = list(template.tags)
    if template.references:
        data["references"] = [r.to_dict() for r in template.references]
    if template.bundle_link_definitions:
        data["bundleLinks"] = [{"name": name, "url": ""} for name in template.bundle_link_definitions]
    return data


def plan_notification(template: Template, bundle_id: str, anchor: date) -> dict:
    data = {
        "message": f"{template.name} bundle auto-created for {format_anchor_date(anchor)}",
        "bundleId": bundle_id,
        "templateId": template.id,
    }
    if template.default_assignee_id:
        data["userId"] = template.default_assignee_id
    return data


def stage_after_completion(task: Task) -> str | None:
    """
    Stage the parent bundle should move to when this task is completed.

    The stage is assigned as-is; no check is made that it comes after the
    bundle's current stage.
    """
    if task.source != "template" or not task.bundle_id:
        return None
    return task.stage_on_complete or None


def validate_task_definitions(definitions: list[TaskDefinition]) -> None:
    """Raise ValidationError for an empty, incomplete or ambiguous definition list."""
    if not definitions:
        raise ValidationError("taskDefinitions must be a non-empty array")

    seen: set[str] = set()
    for i, td in enumerate(definitions):
        if not td.ref_id or not isinstance(td.ref_id, str):
            raise ValidationError(f"taskDefinitions[{i}] is missing required field: refId")
        if not td.description or not isinstance(td.description, str):
            raise ValidationError(f"taskDefinitions[{i}] is missing required field: description")
        if isinstance(td.offset_days, bool) or not isinstance(td.offset_days, int):
            raise ValidationError(f"taskDefinitions[{i}] is missing required field: offsetDays")
        if td.ref_id in seen:
            raise ValidationError(f"taskDefinitions[{i}] has duplicate refId: {td.ref_id}")
        if td.stage_on_complete is not None and td.stage_on_complete not in STAGES:
            raise ValidationError(
                f"taskDefinitions[{i}].stageOnComplete must be one of: {', '.join(STAGES)}"
            )
        seen.add(td.ref_id)


def validate_template(template: Template) -> None:
    if not template.name:
        raise ValidationError("Template name is required")
    if template.trigger_type not in TRIGGER_TYPES:
        raise ValidationError(f"triggerType must be one of: {', '.join(TRIGGER_TYPES)}")
    if template.trigger_type == "automatic" and template.trigger_schedule:
        validate_cron_expression(template.trigger_schedule)
    validate_task_definitions(template.task_definitions)
