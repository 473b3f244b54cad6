from __future__ import annotations

import pytest

from shift_payroll.core.enums import ShiftStatus
from shift_payroll.core.exceptions import ConflictError, NotFoundError, ValidationError


def _submit(container, member_id, day="2024-05-10", start="09:00", end="18:00", location="ClientA"):
    return container.shift_service.submit(
        member_id=member_id, location=location, work_date=day, start_time=start, end_time=end
    )


def test_submit_starts_as_submitted(container, aoki):
    shift = container.shift_service.get(_submit(container, aoki))

    assert shift.status == ShiftStatus.SUBMITTED
    assert shift.planned_hours == 9.0
    assert shift.to_dict()["start_time"] == "09:00"


@pytest.mark.parametrize("start, end", [("18:00", "09:00"), ("09:00", "09:00")])
def test_submit_requires_end_after_start(container, aoki, start, end):
    with pytest.raises(ValidationError) as exc:
        _submit(container, aoki, start=start, end=end)
    assert exc.value.field == "end_time"


def test_submit_unknown_member(container, aoki):
    with pytest.raises(ValidationError):
        _submit(container, 999)


def test_approve_and_reject(container, aoki):
    a = _submit(container, aoki)
    b = _submit(container, aoki, day="2024-05-11")

    assert container.shift_service.approve(a).status == ShiftStatus.APPROVED
    assert container.shift_service.reject(b).status == ShiftStatus.REJECTED
    assert [s.shift_id for s in container.shift_service.list(status="approved")] == [a]


def test_update_only_while_submitted(container, aoki):
    shift_id = _submit(container, aoki)

    updated = container.shift_service.update(shift_id, end_time="17:00", location="Office")
    assert updated.planned_hours == 8.0
    assert updated.location == "Office"

    container.shift_service.approve(shift_id)
    with pytest.raises(ConflictError):
        container.shift_service.update(shift_id, end_time="19:00")


def test_update_validates_span_against_stored_values(container, aoki):
    shift_id = _submit(container, aoki)
    with pytest.raises(ValidationError):
        container.shift_service.update(shift_id, start_time="19:00")


def test_list_filters_and_order(container, aoki):
    sato = container.member_service.register(name="Sato")
    a = _submit(container, aoki, day="2024-05-10")
    b = _submit(container, aoki, day="2024-06-01")
    c = _submit(container, sato, day="2024-05-12")

    assert [s.shift_id for s in container.shift_service.list()] == [b, c, a]
    assert [s.shift_id for s in container.shift_service.list(member_id=aoki, month="2024-05")] == [a]

    with pytest.raises(ValidationError):
        container.shift_service.list(status="pending")


def test_delete(container, aoki):
    shift_id = _submit(container, aoki)
    container.shift_service.delete(shift_id)

    with pytest.raises(NotFoundError):
        container.shift_service.get(shift_id)
    with pytest.raises(NotFoundError):
        container.shift_service.delete(shift_id)
