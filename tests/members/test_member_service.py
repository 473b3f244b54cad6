from __future__ import annotations

import pytest

from shift_payroll.core.exceptions import ConflictError, NotFoundError, ValidationError


def test_register_and_get(container, fixed_now):
    svc = container.member_service
    member_id = svc.register(name="  Aoki ", email="aoki@example.com", transport_fee="500")

    member = svc.get(member_id)
    assert member.name == "Aoki"
    assert member.transport_fee == 500.0
    assert member.created_at == fixed_now
    assert member.to_dict()["email"] == "aoki@example.com"


@pytest.mark.parametrize(
    "kwargs, field",
    [
        ({"name": ""}, "name"),
        ({"name": "x" * 101}, "name"),
        ({"name": "Aoki", "email": "not-an-email"}, "email"),
        ({"name": "Aoki", "transport_fee": -1}, "transport_fee"),
        ({"name": "Aoki", "transport_fee": 100001}, "transport_fee"),
        ({"name": "Aoki", "transport_fee": "abc"}, "transport_fee"),
    ],
)
def test_register_validation(container, kwargs, field):
    with pytest.raises(ValidationError) as exc:
        container.member_service.register(**kwargs)
    assert exc.value.field == field


def test_duplicate_email_conflicts(container):
    container.member_service.register(name="Aoki", email="aoki@example.com")
    with pytest.raises(ConflictError):
        container.member_service.register(name="Other", email="aoki@example.com")


def test_update_changes_only_given_fields(container, fixed_now):
    svc = container.member_service
    member_id = svc.register(name="Aoki", email="aoki@example.com", transport_fee=500)

    member = svc.update(member_id, transport_fee=700)

    assert member.name == "Aoki"
    assert member.transport_fee == 700
    assert member.updated_at == fixed_now


def test_update_rejects_unknown_field(container):
    member_id = container.member_service.register(name="Aoki")
    with pytest.raises(ValidationError):
        container.member_service.update(member_id, salary=1)


def test_delete_keeps_attendance(container, aoki):
    rec_id = container.attendance_service.clock_in(
        member_id=aoki, location="ClientA", work_date="2024-05-01", clock_in="09:00"
    )

    container.member_service.delete(aoki)

    with pytest.raises(NotFoundError):
        container.member_service.get(aoki)
    assert container.attendance_service.get(rec_id).member_id == aoki
    with pytest.raises(NotFoundError):
        container.member_service.delete(aoki)


def test_display_names(container):
    a = container.member_service.register(name="Aoki")
    b = container.member_service.register(name="Sato")

    assert container.member_service.display_names() == {a: "Aoki", b: "Sato"}
