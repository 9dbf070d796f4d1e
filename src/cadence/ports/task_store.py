"""Task store interface."""

from datetime import date
from typing import Protocol

from cadence.core.models import Task


class TaskStore(Protocol):
    """Interface for creating and looking up tasks."""

    def create_task(self, data: dict) -> Task:
        """
        Persist a new task.

        Raises DuplicateOccurrence if a recurring task with the same
        (recurringConfigId, date) already exists.
        """
        ...

    def find_recurring_task(self, recurring_config_id: str, day: date) -> Task | None:
        """Find the task generated for a recurring config on a given day."""
        ...

    def get_task(self, task_id: str) -> Task | None:
        ...

    def update_task(self, task_id: str, updates: dict) -> Task | None:
        """Partial update. Returns None if the task does not exist."""
        ...

    def list_tasks(self) -> list[Task]:
        ...
