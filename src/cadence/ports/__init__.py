"""Ports - interfaces/protocols for the engine's collaborators."""

from .template_store import TemplateStore
from .bundle_store import BundleStore
from .task_store import TaskStore
from .recurring_store import RecurringConfigStore
from .notification_sink import NotificationSink

__all__ = [
    "TemplateStore",
    "BundleStore",
    "TaskStore",
    "RecurringConfigStore",
    "NotificationSink",
]
