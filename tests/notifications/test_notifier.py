from __future__ import annotations

import logging
import threading
import time

import requests

from shift_payroll.attendance.memory_attendance_repository import InMemoryAttendanceRepository
from shift_payroll.attendance.service import AttendanceService
from shift_payroll.members.memory_member_repository import InMemoryMemberRepository
from shift_payroll.notifications.notifier import NullNotifier, WebhookNotifier, build_notifier


class FakeResponse:
    def __init__(self, status_code=200):
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


class FakeSession:
    def __init__(self, *, response=None, error=None):
        self.calls = []
        self._response = response or FakeResponse()
        self._error = error

    def post(self, url, json=None, timeout=None):
        self.calls.append((url, json, timeout))
        if self._error is not None:
            raise self._error
        return self._response


class BlockedSession(FakeSession):
    """Holds every post until ``release`` is set."""

    def __init__(self):
        super().__init__()
        self.release = threading.Event()

    def post(self, url, json=None, timeout=None):
        self.release.wait(5)
        return super().post(url, json=json, timeout=timeout)


def test_webhook_posts_text_payload():
    session = FakeSession()
    notifier = WebhookNotifier("https://hooks.example.com/T/B/X", timeout=2, session=session)

    notifier.notify("Aoki clocked in")
    notifier.close()

    assert session.calls == [("https://hooks.example.com/T/B/X", {"text": "Aoki clocked in"}, 2.0)]


def test_webhook_keeps_message_order():
    session = FakeSession()
    notifier = WebhookNotifier("https://hooks.example.com/x", session=session)

    for i in range(5):
        notifier.notify(f"message {i}")
    notifier.close()

    assert [payload["text"] for _, payload, _ in session.calls] == [f"message {i}" for i in range(5)]


def test_webhook_failures_are_logged_not_raised(caplog):
    session = FakeSession(error=requests.ConnectionError("unreachable"))
    notifier = WebhookNotifier("https://hooks.example.com/x", session=session)

    with caplog.at_level(logging.WARNING):
        notifier.notify("hello")
        notifier.close()

    assert len(session.calls) == 1
    assert "Webhook notification failed" in caplog.text


def test_webhook_http_error_is_swallowed(caplog):
    notifier = WebhookNotifier("https://hooks.example.com/x", session=FakeSession(response=FakeResponse(500)))

    with caplog.at_level(logging.WARNING):
        notifier.notify("hello")
        notifier.close()

    assert "500 error" in caplog.text


def test_slow_webhook_does_not_block_clock_in(fixed_now):
    session = BlockedSession()
    notifier = WebhookNotifier("https://hooks.example.com/x", session=session)
    members = InMemoryMemberRepository()
    member_id = members.create(name="Aoki", email=None, transport_fee=0, created_at=fixed_now)
    svc = AttendanceService(InMemoryAttendanceRepository(), members, notifier=notifier)

    started = time.monotonic()
    rec_id = svc.clock_in(member_id=member_id, location="ClientA", work_date="2024-05-01", clock_in="09:00")
    elapsed = time.monotonic() - started

    assert elapsed < 0.5
    assert svc.get(rec_id).is_open
    assert session.calls == []

    session.release.set()
    notifier.close()
    assert len(session.calls) == 1


def test_build_notifier_without_url_is_null():
    webhook = build_notifier("https://hooks.example.com/x")

    assert isinstance(build_notifier(""), NullNotifier)
    assert isinstance(build_notifier(None), NullNotifier)
    assert isinstance(webhook, WebhookNotifier)
    webhook.close()
