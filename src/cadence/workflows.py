"""Effectful orchestration shared by the CLI and the scheduler.

Each operation loads what it needs from the stores, delegates the decisions
to the pure core, and writes the results back. Creation is gated on the
occurrence keys (recurringConfigId, date) and (templateId, anchorDate), so
every operation can be re-run end-to-end after a failure.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timezone

from .adapters.json_store import JsonFileStore
from .adapters.webhook_notifier import WebhookNotificationSink
from .config import Config
from .core.cron import cron_matches_date
from .core.dates import add_days, parse_iso_date, to_utc_date, validate_range
from .core.models import Task
from .core.recurring import plan_occurrences
from .core.templates import (
    plan_bundle,
    plan_notification,
    plan_template_tasks,
    stage_after_completion,
)
from .errors import DuplicateOccurrence, TaskNotFound, TemplateNotFound, ValidationError
from .ports import BundleStore, NotificationSink, RecurringConfigStore, TaskStore, TemplateStore

logger = logging.getLogger(__name__)


@dataclass
class Stores:
    """The collaborator stores an operation runs against."""

    templates: TemplateStore
    bundles: BundleStore
    tasks: TaskStore
    recurring: RecurringConfigStore
    notifications: NotificationSink

    @classmethod
    def single(cls, store) -> "Stores":
        """Use one object implementing every port."""
        return cls(
            templates=store,
            bundles=store,
            tasks=store,
            recurring=store,
            notifications=store,
        )

    def close(self) -> None:
        """Release adapter resources such as the webhook HTTP session."""
        if isinstance(self.notifications, WebhookNotificationSink):
            self.notifications.close()


@dataclass
class GenerationResult:
    generated: list[Task] = field(default_factory=list)
    skipped: int = 0

    def to_dict(self) -> dict:
        return {"generated": [t.to_dict() for t in self.generated], "skipped": self.skipped}


@dataclass
class CronResult:
    created: list[str] = field(default_factory=list)
    skipped: int = 0

    def to_dict(self) -> dict:
        return {"created": self.created, "skipped": self.skipped}


def get_stores(config: Config) -> Stores:
    """Build the file-backed stores from config."""
    store = JsonFileStore(config.resolved_data_dir)
    stores = Stores.single(store)
    if config.notify_webhook_url:
        stores.notifications = WebhookNotificationSink(store, config.notify_webhook_url)
    return stores


def today_utc() -> date:
    return datetime.now(timezone.utc).date()


# ============== Template Instantiation ==============


def instantiate_template(
    stores: Stores, template_id: str, bundle_id: str, anchor_date: str | date
) -> list[Task]:
    """
    Create one task per template definition, dated relative to anchor_date.

    Not idempotent: call once per bundle, at bundle creation. If a store
    write fails part-way, the tasks created so far are kept.
    """
    anchor = parse_iso_date(anchor_date)
    template = stores.templates.get_template(template_id)
    if template is None:
        raise TemplateNotFound(template_id)

    created = [stores.tasks.create_task(data) for data in plan_template_tasks(template, bundle_id, anchor)]
    logger.info(f"Instantiated {len(created)} tasks from template {template.name!r} for bundle {bundle_id}")
    return created


# ============== Recurring Generation ==============


def generate_recurring_tasks(stores: Stores, start_date: str | date, end_date: str | date) -> GenerationResult:
    """
    Create the recurring tasks due in [start_date, end_date].

    Occurrences that already have a task are counted as skipped, so
    overlapping or repeated ranges never produce duplicates.
    Raises InvalidRange for a reversed range or one longer than 90 days.
    """
    start, end = validate_range(start_date, end_date)
    configs = stores.recurring.list_enabled_recurring_configs()

    result = GenerationResult()
    for occurrence in plan_occurrences(configs, start, end):
        if stores.tasks.find_recurring_task(occurrence.config.id, occurrence.day):
            logger.debug(f"Recurring task exists for {occurrence.key}, skipping")
            result.skipped += 1
            continue
        try:
            task = stores.tasks.create_task(occurrence.to_task_data())
        except DuplicateOccurrence:
            logger.debug(f"Store refused duplicate recurring task {occurrence.key}")
            result.skipped += 1
            continue
        result.generated.append(task)

    logger.info(
        f"Recurring generation {start}..{end}: "
        f"{len(result.generated)} generated, {result.skipped} skipped"
    )
    return result


# ============== Bundle Auto-Creation ==============


def run_cron(stores: Stores, now: date | datetime | None = None) -> CronResult:
    """
    Create bundles for automatic templates whose schedule fires today.

    Designed to run once per calendar day. A bundle that already exists for
    (template, anchor date) is counted as skipped; templates whose schedule
    does not match are ignored without being counted.
    """
    today = to_utc_date(now) if now is not None else today_utc()

    templates = [t for t in stores.templates.list_templates() if t.is_automatic]
    existing = {b.occurrence_key for b in stores.bundles.list_bundles()}

    result = CronResult()
    for template in templates:
        if not cron_matches_date(template.trigger_schedule, today):
            continue

        anchor = add_days(today, template.trigger_lead_days or 0)
        key = (template.id, anchor.isoformat())
        if key in existing:
            logger.debug(f"Bundle for {template.name!r} on {anchor} exists, skipping")
            result.skipped += 1
            continue

        try:
            bundle = stores.bundles.create_bundle(plan_bundle(template, anchor))
        except DuplicateOccurrence:
            logger.debug(f"Store refused duplicate bundle for {template.name!r} on {anchor}")
            result.skipped += 1
            continue
        existing.add(key)

        instantiate_template(stores, template.id, bundle.id, anchor)
        stores.notifications.create_notification(plan_notification(template, bundle.id, anchor))

        logger.info(f"Created bundle {bundle.id} ({bundle.title})")
        result.created.append(bundle.id)

    logger.info(f"Cron run for {today}: {len(result.created)} created, {result.skipped} skipped")
    return result


# ============== Task Completion ==============


def complete_task(stores: Stores, task_id: str) -> Task:
    """
    Mark a task done and apply its stage-on-complete to the parent bundle.

    The stage is set only on the todo -> done transition and is assigned
    unconditionally, even if it moves the bundle to an earlier stage.
    """
    existing = stores.tasks.get_task(task_id)
    if existing is None:
        raise TaskNotFound(task_id)

    if existing.status == "done":
        return existing

    if existing.required_link_name and not existing.link:
        raise ValidationError(
            f"Cannot mark task as done: required link '{existing.required_link_name}' is not filled"
        )

    task = stores.tasks.update_task(task_id, {"status": "done"})
    if task is None:
        raise TaskNotFound(task_id)

    stage = stage_after_completion(task)
    if stage:
        bundle = stores.bundles.update_bundle(task.bundle_id, {"stage": stage})
        if bundle is None:
            logger.warning(f"Task {task_id} references missing bundle {task.bundle_id}")
        else:
            logger.info(f"Bundle {bundle.id} moved to stage {stage!r}")
    return task


# ============== Daily Pass ==============


def daily_pass(stores: Stores, config: Config, today: date | None = None) -> tuple[CronResult, GenerationResult]:
    """Run the bundle runner, then generate recurring tasks for the configured horizon."""
    today = today or today_utc()
    cron_result = run_cron(stores, today)
    generation = generate_recurring_tasks(stores, today, add_days(today, config.recurring_horizon_days))
    return cron_result, generation
