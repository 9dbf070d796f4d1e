"""Notification sink interface."""

from typing import Protocol


class NotificationSink(Protocol):
    """Fire-and-forget destination for user-facing notifications."""

    def create_notification(self, data: dict) -> None:
        ...
