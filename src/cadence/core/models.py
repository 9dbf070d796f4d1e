"""Domain records shared by the engine, its ports and adapters.

Records round-trip through the camelCase JSON form used on the wire and in
the file store (refId, offsetDays, recurringConfigId, ...).
"""

from dataclasses import dataclass, field
from datetime import date

STAGES = ("preparation", "announced", "after-event", "done")
TASK_STATUSES = ("todo", "done", "archived")
BUNDLE_STATUSES = ("active", "archived")
TRIGGER_TYPES = ("manual", "automatic")


def _iso(value: date | str | None) -> str | None:
    if value is None or isinstance(value, str):
        return value
    return value.isoformat()


def _date(value: date | str | None) -> date | None:
    if value is None or isinstance(value, date):
        return value
    return date.fromisoformat(value)


def _compact(data: dict) -> dict:
    """Drop unset optional keys so stored records stay minimal."""
    return {k: v for k, v in data.items() if v is not None}


@dataclass
class Link:
    """A named URL (template reference or bundle link)."""

    name: str
    url: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "Link":
        return cls(name=data["name"], url=data.get("url", ""))

    def to_dict(self) -> dict:
        return {"name": self.name, "url": self.url}


@dataclass
class TaskDefinition:
    """A template-owned task blueprint, offset from the bundle's anchor date."""

    ref_id: str
    description: str
    offset_days: int
    is_milestone: bool = False
    assignee_id: str | None = None
    instructions_url: str | None = None
    required_link_name: str | None = None
    requires_file: bool = False
    stage_on_complete: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "TaskDefinition":
        return cls(
            ref_id=data.get("refId", ""),
            description=data.get("description", ""),
            offset_days=data.get("offsetDays", 0),
            is_milestone=bool(data.get("isMilestone", False)),
            assignee_id=data.get("assigneeId"),
            instructions_url=data.get("instructionsUrl"),
            required_link_name=data.get("requiredLinkName"),
            requires_file=bool(data.get("requiresFile", False)),
            stage_on_complete=data.get("stageOnComplete"),
        )

    def to_dict(self) -> dict:
        return _compact(
            {
                "refId": self.ref_id,
                "description": self.description,
                "offsetDays": self.offset_days,
                "isMilestone": self.is_milestone,
                "assigneeId": self.assignee_id,
                "instructionsUrl": self.instructions_url,
                "requiredLinkName": self.required_link_name,
                "requiresFile": self.requires_file,
                "stageOnComplete": self.stage_on_complete,
            }
        )


@dataclass
class Template:
    """A reusable process: ordered task blueprints plus an optional auto-trigger."""

    id: str
    name: str
    type: str = ""
    task_definitions: list[TaskDefinition] = field(default_factory=list)
    trigger_type: str = "manual"
    trigger_schedule: str = ""
    trigger_lead_days: int = 0
    emoji: str | None = None
    tags: list[str] = field(default_factory=list)
    references: list[Link] = field(default_factory=list)
    bundle_link_definitions: list[str] = field(default_factory=list)
    default_assignee_id: str | None = None

    @property
    def is_automatic(self) -> bool:
        return self.trigger_type == "automatic" and bool(self.trigger_schedule)

    @classmethod
    def from_dict(cls, data: dict) -> "Template":
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            type=data.get("type", ""),
            task_definitions=[TaskDefinition.from_dict(d) for d in data.get("taskDefinitions") or []],
            trigger_type=data.get("triggerType") or "manual",
            trigger_schedule=data.get("triggerSchedule") or "",
            trigger_lead_days=data.get("triggerLeadDays") or 0,
            emoji=data.get("emoji"),
            tags=list(data.get("tags") or []),
            references=[Link.from_dict(r) for r in data.get("references") or []],
            bundle_link_definitions=[d["name"] for d in data.get("bundleLinkDefinitions") or []],
            default_assignee_id=data.get("defaultAssigneeId"),
        )

    def to_dict(self) -> dict:
        return _compact(
            {
                "id": self.id,
                "name": self.name,
                "type": self.type,
                "taskDefinitions": [d.to_dict() for d in self.task_definitions],
                "triggerType": self.trigger_type,
                "triggerSchedule": self.trigger_schedule,
                "triggerLeadDays": self.trigger_lead_days,
                "emoji": self.emoji,
                "tags": self.tags,
                "references": [r.to_dict() for r in self.references],
                "bundleLinkDefinitions": [{"name": n} for n in self.bundle_link_definitions],
                "defaultAssigneeId": self.default_assignee_id,
            }
        )


@dataclass
class RecurringConfig:
    """A task that should exist on every day its cron expression matches."""

    id: str
    description: str
    cron_expression: str
    assignee_id: str | None = None
    enabled: bool = True

    @classmethod
    def from_dict(cls, data: dict) -> "RecurringConfig":
        return cls(
            id=data["id"],
            description=data.get("description", ""),
            cron_expression=data.get("cronExpression", ""),
            assignee_id=data.get("assigneeId"),
            enabled=data.get("enabled", True),
        )

    def to_dict(self) -> dict:
        return _compact(
            {
                "id": self.id,
                "description": self.description,
                "cronExpression": self.cron_expression,
                "assigneeId": self.assignee_id,
                "enabled": self.enabled,
            }
        )


@dataclass
class Task:
    """A concrete dated work item."""

    id: str
    description: str
    date: date
    status: str = "todo"
    source: str = "manual"
    bundle_id: str | None = None
    recurring_config_id: str | None = None
    template_task_ref: str | None = None
    assignee_id: str | None = None
    instructions_url: str | None = None
    required_link_name: str | None = None
    link: str | None = None
    requires_file: bool = False
    is_milestone: bool = False
    stage_on_complete: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    @property
    def recurrence_key(self) -> tuple[str, str] | None:
        """Dedup key for recurring-sourced tasks."""
        if not self.recurring_config_id:
            return None
        return (self.recurring_config_id, self.date.isoformat())

    @classmethod
    def from_dict(cls, data: dict) -> "Task":
        return cls(
            id=data["id"],
            description=data.get("description", ""),
            date=_date(data["date"]),
            status=data.get("status", "todo"),
            source=data.get("source", "manual"),
            bundle_id=data.get("bundleId"),
            recurring_config_id=data.get("recurringConfigId"),
            template_task_ref=data.get("templateTaskRef"),
            assignee_id=data.get("assigneeId"),
            instructions_url=data.get("instructionsUrl"),
            required_link_name=data.get("requiredLinkName"),
            link=data.get("link"),
            requires_file=bool(data.get("requiresFile", False)),
            is_milestone=bool(data.get("isMilestone", False)),
            stage_on_complete=data.get("stageOnComplete"),
            created_at=data.get("createdAt"),
            updated_at=data.get("updatedAt"),
        )

    def to_dict(self) -> dict:
        return _compact(
            {
                "id": self.id,
                "description": self.description,
                "date": _iso(self.date),
                "status": self.status,
                "source": self.source,
                "bundleId": self.bundle_id,
                "recurringConfigId": self.recurring_config_id,
                "templateTaskRef": self.template_task_ref,
                "assigneeId": self.assignee_id,
                "instructionsUrl": self.instructions_url,
                "requiredLinkName": self.required_link_name,
                "link": self.link,
                "requiresFile": self.requires_file,
                "isMilestone": self.is_milestone,
                "stageOnComplete": self.stage_on_complete,
                "createdAt": self.created_at,
                "updatedAt": self.updated_at,
            }
        )


@dataclass
class Bundle:
    """One instantiated occurrence of a template."""

    id: str
    anchor_date: date | None
    template_id: str | None = None
    title: str = ""
    stage: str = "preparation"
    status: str = "active"
    emoji: str | None = None
    tags: list[str] = field(default_factory=list)
    references: list[Link] = field(default_factory=list)
    bundle_links: list[Link] = field(default_factory=list)
    created_at: str | None = None
    updated_at: str | None = None

    @property
    def occurrence_key(self) -> tuple[str, str] | None:
        """Dedup key for template-created bundles."""
        if not self.template_id or not self.anchor_date:
            return None
        return (self.template_id, self.anchor_date.isoformat())

    @classmethod
    def from_dict(cls, data: dict) -> "Bundle":
        return cls(
            id=data["id"],
            anchor_date=_date(data.get("anchorDate")),
            template_id=data.get("templateId"),
            title=data.get("title", ""),
            stage=data.get("stage", "preparation"),
            status=data.get("status", "active"),
            emoji=data.get("emoji"),
            tags=list(data.get("tags") or []),
            references=[Link.from_dict(r) for r in data.get("references") or []],
            bundle_links=[Link.from_dict(r) for r in data.get("bundleLinks") or []],
            created_at=data.get("createdAt"),
            updated_at=data.get("updatedAt"),
        )

    def to_dict(self) -> dict:
        return _compact(
            {
                "id": self.id,
                "anchorDate": _iso(self.anchor_date),
                "templateId": self.template_id,
                "title": self.title,
                "stage": self.stage,
                "status": self.status,
                "emoji": self.emoji,
                "tags": self.tags,
                "references": [r.to_dict() for r in self.references],
                "bundleLinks": [link.to_dict() for link in self.bundle_links],
                "createdAt": self.created_at,
                "updatedAt": self.updated_at,
            }
        )


@dataclass
class Notification:
    id: str
    message: str
    bundle_id: str | None = None
    template_id: str | None = None
    user_id: str | None = None
    dismissed: bool = False
    created_at: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "Notification":
        return cls(
            id=data["id"],
            message=data.get("message", ""),
            bundle_id=data.get("bundleId"),
            template_id=data.get("templateId"),
            user_id=data.get("userId"),
            dismissed=bool(data.get("dismissed", False)),
            created_at=data.get("createdAt"),
        )

    def to_dict(self) -> dict:
        return _compact(
            {
                "id": self.id,
                "message": self.message,
                "bundleId": self.bundle_id,
                "templateId": self.template_id,
                "userId": self.user_id,
                "dismissed": self.dismissed,
                "createdAt": self.created_at,
            }
        )
