"""Pure recurring-task planning - no I/O dependencies."""

from dataclasses import dataclass
from datetime import date

from .cron import cron_matches_date
from .dates import iter_days
from .models import RecurringConfig


@dataclass(frozen=True)
class Occurrence:
    """A (config, day) pair on which a recurring task is due."""

    config: RecurringConfig
    day: date

    @property
    def key(self) -> tuple[str, str]:
        return (self.config.id, self.day.isoformat())

    def to_task_data(self) -> dict:
        data = {
            "description": self.config.description,
            "date": self.day.isoformat(),
            "status": "todo",
            "source": "recurring",
            "recurringConfigId": self.config.id,
        }
        if self.config.assignee_id:
            data["assigneeId"] = self.config.assignee_id
        return data


def plan_occurrences(configs: list[RecurringConfig], start: date, end: date) -> list[Occurrence]:
    """
    List every occurrence in [start, end], day by day, configs in order.

    Disabled configs are ignored even if passed in.
    Pure function - no I/O.
    """
    enabled = [c for c in configs if c.enabled]
    return [
        Occurrence(config=config, day=day)
        for day in iter_days(start, end)
        for config in enabled
        if cron_matches_date(config.cron_expression, day)
    ]
