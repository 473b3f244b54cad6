from __future__ import annotations

from datetime import datetime

import pytest

from shift_payroll.container import build_container
from shift_payroll.core.enums import LocationCategory
from shift_payroll.main import create_app

FIXED_NOW = datetime(2024, 5, 31, 18, 0, 0)

_CLOCKED_MODULES = (
    "shift_payroll.members.service",
    "shift_payroll.locations.service",
    "shift_payroll.attendance.service",
    "shift_payroll.shifts.service",
    "shift_payroll.payroll.service",
)


class RecordingNotifier:
    def __init__(self):
        self.messages: list[str] = []

    def notify(self, message: str) -> None:
        self.messages.append(message)


@pytest.fixture
def fixed_now(monkeypatch):
    for module in _CLOCKED_MODULES:
        monkeypatch.setattr(f"{module}.now_local", lambda: FIXED_NOW)
    return FIXED_NOW


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def container(notifier, fixed_now):
    return build_container(storage="memory", notifier=notifier)


@pytest.fixture
def aoki(container):
    """Member Aoki working at ClientA (2000/h); Office pays 1500/h."""
    member_id = container.member_service.register(name="Aoki", email="aoki@example.com", transport_fee=500)
    container.location_service.create(name="ClientA", hourly_wage=2000, category=LocationCategory.CLIENT)
    container.location_service.create(name="Office", hourly_wage=1500, category=LocationCategory.OFFICE)
    return member_id


@pytest.fixture
def app(monkeypatch, fixed_now):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(settings_overrides={"STORAGE": "memory", "AUTO_INIT_DB": False, "SLACK_WEBHOOK_URL": ""})


@pytest.fixture
def client(app):
    return app.test_client()
