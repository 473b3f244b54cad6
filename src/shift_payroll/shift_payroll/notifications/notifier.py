from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Protocol

import requests

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """Fire-and-forget sink for human-readable activity messages."""

    def notify(self, message: str) -> None:
        raise NotImplementedError


class NullNotifier(Notifier):
    """Used when no webhook is configured."""

    def notify(self, message: str) -> None:
        logger.debug("Notification skipped (no webhook configured): %s", message)


class WebhookNotifier(Notifier):
    """Posts ``{"text": message}`` to a Slack-compatible incoming webhook.

    Posts run on a single background worker, so ``notify`` returns at once and
    messages go out in order. Failures are logged and dropped: no retry, never
    raised to the caller.
    """

    def __init__(self, webhook_url: str, *, timeout: float = 5.0, session: requests.Session | None = None):
        self._url = webhook_url
        self._timeout = float(timeout)
        self._session = session or requests.Session()
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="webhook-notifier")

    def notify(self, message: str) -> None:
        self._executor.submit(self._post, message)

    def close(self, *, wait: bool = True) -> None:
        """Stop the worker; with ``wait`` pending messages are sent first."""
        self._executor.shutdown(wait=wait)

    def _post(self, message: str) -> None:
        try:
            response = self._session.post(self._url, json={"text": message}, timeout=self._timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.warning("Webhook notification failed: %s", e)
        except Exception:
            # The worker result is never read.
            logger.exception("Webhook notification crashed")


def build_notifier(webhook_url: str | None, *, timeout: float = 5.0) -> Notifier:
    if not webhook_url:
        return NullNotifier()
    return WebhookNotifier(webhook_url, timeout=timeout)
