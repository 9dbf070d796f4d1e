"""Webhook notification adapter."""

import logging

import requests

from cadence.ports.notification_sink import NotificationSink

logger = logging.getLogger(__name__)


class WebhookNotificationSink:
    """
    Records a notification in an inner sink, then POSTs it to a webhook.

    Implements NotificationSink protocol. Delivery is fire-and-forget:
    HTTP failures are logged and never raised to the caller.
    """

    def __init__(self, inner: NotificationSink, url: str, timeout: float = 10.0):
        self.inner = inner
        self.url = url
        self.timeout = timeout
        self._session = requests.Session()

    def create_notification(self, data: dict) -> None:
        self.inner.create_notification(data)
        try:
            resp = self._session.post(self.url, json=data, timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as e:
            logger.warning(f"Failed to deliver notification to {self.url}: {e}")

    def close(self) -> None:
        self._session.close()
