"""Recurring config store interface."""

from typing import Protocol

from cadence.core.models import RecurringConfig


class RecurringConfigStore(Protocol):
    def list_enabled_recurring_configs(self) -> list[RecurringConfig]:
        """Fetch recurring configs with enabled=True."""
        ...
