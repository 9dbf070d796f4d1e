"""In-memory store adapter."""

import uuid
from datetime import date, datetime, timezone

from cadence.core.models import Bundle, Notification, RecurringConfig, Task, Template
from cadence.core.templates import validate_template
from cadence.core.cron import validate_cron_expression
from cadence.errors import DuplicateOccurrence


COLLECTIONS = ("templates", "recurring", "tasks", "bundles", "notifications")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _recurring_key(record: dict) -> tuple[str, str] | None:
    if record.get("source") != "recurring" or not record.get("recurringConfigId"):
        return None
    return (record["recurringConfigId"], record["date"])


def _bundle_key(record: dict) -> tuple[str, str] | None:
    if not record.get("templateId") or not record.get("anchorDate"):
        return None
    return (record["templateId"], record["anchorDate"])


class MemoryStore:
    """
    Dict-backed store holding every collection in process.

    Implements TemplateStore, BundleStore, TaskStore, RecurringConfigStore
    and NotificationSink. Records are kept in their camelCase JSON form.
    Occurrence keys are unique: a second recurring task for the same
    (recurringConfigId, date), or a second bundle for the same
    (templateId, anchorDate), is refused with DuplicateOccurrence.
    """

    def __init__(self):
        self._data: dict[str, dict[str, dict]] = {name: {} for name in COLLECTIONS}

    # Storage hooks, overridden by file-backed subclasses

    def _read(self, collection: str) -> dict[str, dict]:
        return self._data[collection]

    def _write(self, collection: str, records: dict[str, dict]) -> None:
        self._data[collection] = records

    def _insert(self, collection: str, data: dict, key_fn=None) -> dict:
        records = self._read(collection)
        if key_fn is not None:
            key = key_fn(data)
            if key is not None and any(key_fn(r) == key for r in records.values()):
                raise DuplicateOccurrence(key)
        now = _now()
        record = {"id": str(uuid.uuid4()), "createdAt": now, "updatedAt": now, **data}
        records = {**records, record["id"]: record}
        self._write(collection, records)
        return record

    def _update(self, collection: str, record_id: str, updates: dict) -> dict | None:
        records = self._read(collection)
        if record_id not in records:
            return None
        record = {**records[record_id], **updates, "updatedAt": _now()}
        self._write(collection, {**records, record_id: record})
        return record

    # Templates

    def add_template(self, template: Template) -> Template:
        """Insert or replace a template after validating it."""
        validate_template(template)
        records = self._read("templates")
        self._write("templates", {**records, template.id: template.to_dict()})
        return template

    def create_template(self, data: dict) -> Template:
        template = Template.from_dict({"id": "pending", **data})
        validate_template(template)
        record = self._insert("templates", data)
        return Template.from_dict(record)

    def get_template(self, template_id: str) -> Template | None:
        record = self._read("templates").get(template_id)
        return Template.from_dict(record) if record else None

    def list_templates(self) -> list[Template]:
        return [Template.from_dict(r) for r in self._read("templates").values()]

    # Recurring configs

    def create_recurring_config(self, data: dict) -> RecurringConfig:
        validate_cron_expression(data.get("cronExpression", ""))
        record = self._insert("recurring", {"enabled": True, **data})
        return RecurringConfig.from_dict(record)

    def list_recurring_configs(self) -> list[RecurringConfig]:
        return [RecurringConfig.from_dict(r) for r in self._read("recurring").values()]

    def list_enabled_recurring_configs(self) -> list[RecurringConfig]:
        return [c for c in self.list_recurring_configs() if c.enabled]

    # Tasks

    def create_task(self, data: dict) -> Task:
        record = self._insert("tasks", data, key_fn=_recurring_key)
        return Task.from_dict(record)

    def find_recurring_task(self, recurring_config_id: str, day: date) -> Task | None:
        key = (recurring_config_id, day.isoformat())
        for record in self._read("tasks").values():
            if _recurring_key(record) == key:
                return Task.from_dict(record)
        return None

    def get_task(self, task_id: str) -> Task | None:
        record = self._read("tasks").get(task_id)
        return Task.from_dict(record) if record else None

    def update_task(self, task_id: str, updates: dict) -> Task | None:
        record = self._update("tasks", task_id, updates)
        return Task.from_dict(record) if record else None

    def list_tasks(self) -> list[Task]:
        return sorted(
            (Task.from_dict(r) for r in self._read("tasks").values()),
            key=lambda t: t.date,
        )

    # Bundles

    def create_bundle(self, data: dict) -> Bundle:
        record = self._insert("bundles", data, key_fn=_bundle_key)
        return Bundle.from_dict(record)

    def list_bundles(self) -> list[Bundle]:
        return [Bundle.from_dict(r) for r in self._read("bundles").values()]

    def get_bundle(self, bundle_id: str) -> Bundle | None:
        record = self._read("bundles").get(bundle_id)
        return Bundle.from_dict(record) if record else None

    def update_bundle(self, bundle_id: str, updates: dict) -> Bundle | None:
        record = self._update("bundles", bundle_id, updates)
        return Bundle.from_dict(record) if record else None

    # Notifications

    def create_notification(self, data: dict) -> None:
        self._insert("notifications", {"dismissed": False, **data})

    def list_notifications(self) -> list[Notification]:
        return [Notification.from_dict(r) for r in self._read("notifications").values()]
