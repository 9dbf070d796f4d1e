"""Adapters - I/O implementations of ports."""

from .memory_store import MemoryStore
from .json_store import JsonFileStore
from .webhook_notifier import WebhookNotificationSink

__all__ = [
    "MemoryStore",
    "JsonFileStore",
    "WebhookNotificationSink",
]
