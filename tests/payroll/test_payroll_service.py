from __future__ import annotations

import pytest

from shift_payroll.core.exceptions import ConflictError, NotFoundError, ValidationError


def _work(container, member_id, location, day, start, end):
    svc = container.attendance_service
    rec_id = svc.clock_in(member_id=member_id, location=location, work_date=day, clock_in=start)
    svc.clock_out(rec_id, end)
    return rec_id


def test_summarize_aoki_scenario(container, aoki):
    _work(container, aoki, "ClientA", "2024-05-01", "09:00", "17:30")

    summary = container.payroll_service.summarize(aoki, "2024-05")

    assert summary.total_hours == 8.5
    assert summary.total_salary == 17000
    assert summary.to_dict(member_name="Aoki")["breakdown"] == [
        {"location": "ClientA", "hours": 8.5, "hourly_wage": 2000.0, "salary": 17000.0}
    ]


def test_summarize_ignores_open_sessions(container, aoki):
    _work(container, aoki, "ClientA", "2024-05-01", "09:00", "17:00")
    container.attendance_service.clock_in(member_id=aoki, location="ClientA", work_date="2024-05-02", clock_in="09:00")

    assert container.payroll_service.summarize(aoki, "2024-05").total_hours == 8.0


def test_summarize_rejects_bad_month(container, aoki):
    with pytest.raises(ValidationError):
        container.payroll_service.summarize(aoki, "2024-13")


def test_wage_change_is_picked_up_on_recompute(container, aoki):
    _work(container, aoki, "ClientA", "2024-05-01", "09:00", "17:00")
    client_a = container.location_service.get_by_name("ClientA")

    container.location_service.update(client_a.location_id, hourly_wage=2500)

    assert container.payroll_service.summarize(aoki, "2024-05").total_salary == 20000


def test_summarize_month_sorted_by_salary(container, aoki):
    sato = container.member_service.register(name="Sato")
    _work(container, aoki, "Office", "2024-05-01", "09:00", "10:00")
    _work(container, sato, "ClientA", "2024-05-01", "09:00", "17:00")

    summaries = container.payroll_service.summarize_month("2024-05")

    assert [s.member_id for s in summaries] == [sato, aoki]
    assert [s.total_salary for s in summaries] == [16000, 1500]


def test_statement_adds_transport(container, aoki):
    client_a = container.location_service.get_by_name("ClientA")
    container.location_service.set_member_transport_fees(client_a.location_id, {aoki: 1200})
    _work(container, aoki, "ClientA", "2024-05-01", "09:00", "13:00")
    _work(container, aoki, "Office", "2024-05-01", "14:00", "16:00")
    _work(container, aoki, "Office", "2024-05-02", "09:00", "17:00")

    statement = container.payroll_service.statement(aoki, "2024-05")

    assert statement.summary.total_salary == 4 * 2000 + 10 * 1500
    assert statement.transport.days == 2
    assert statement.transport.total_fee == 1200 + 500
    assert statement.grand_total == 23000 + 1700
    assert statement.to_dict()["grand_total"] == 24700


def test_projected_uses_approved_shifts_only(container, aoki):
    shifts = container.shift_service
    approved = shifts.submit(member_id=aoki, location="ClientA", work_date="2024-05-10", start_time="09:00", end_time="18:00")
    shifts.approve(approved)
    shifts.submit(member_id=aoki, location="ClientA", work_date="2024-05-11", start_time="09:00", end_time="18:00")
    rejected = shifts.submit(member_id=aoki, location="Office", work_date="2024-05-12", start_time="09:00", end_time="12:00")
    shifts.reject(rejected)

    projected = container.payroll_service.projected(aoki, "2024-05")

    assert projected.total_hours == 9.0
    assert projected.total_salary == 18000


def test_finalize_snapshot_and_conflict(container, aoki, notifier, fixed_now):
    _work(container, aoki, "ClientA", "2024-05-01", "09:00", "17:30")

    record = container.payroll_service.finalize(aoki, "2024-05")

    assert record.total_salary == 17000
    assert record.finalized_at == fixed_now
    assert container.payroll_service.get_finalized(aoki, "2024-05") == record
    assert "Payroll finalized for Aoki" in notifier.messages[-1]

    with pytest.raises(ConflictError):
        container.payroll_service.finalize(aoki, "2024-05")
    assert len(container.payroll_service.list_finalized()) == 1


def test_snapshot_does_not_follow_later_attendance(container, aoki):
    _work(container, aoki, "ClientA", "2024-05-01", "09:00", "17:00")
    container.payroll_service.finalize(aoki, "2024-05")
    _work(container, aoki, "ClientA", "2024-05-02", "09:00", "10:00")

    assert container.payroll_service.get_finalized(aoki, "2024-05").total_hours == 8.0
    assert container.payroll_service.summarize(aoki, "2024-05").total_hours == 9.0


def test_delete_finalized_unlocks_month(container, aoki):
    _work(container, aoki, "ClientA", "2024-05-01", "09:00", "17:00")
    record = container.payroll_service.finalize(aoki, "2024-05")

    container.payroll_service.delete_finalized(record.salary_id)

    with pytest.raises(NotFoundError):
        container.payroll_service.get_finalized(aoki, "2024-05")
    with pytest.raises(NotFoundError):
        container.payroll_service.delete_finalized(record.salary_id)
    assert container.payroll_service.finalize(aoki, "2024-05").total_hours == 8.0


def test_list_finalized_filters(container, aoki):
    _work(container, aoki, "ClientA", "2024-04-30", "09:00", "17:00")
    _work(container, aoki, "ClientA", "2024-05-01", "09:00", "17:00")
    container.payroll_service.finalize(aoki, "2024-04")
    container.payroll_service.finalize(aoki, "2024-05")

    assert [r.month for r in container.payroll_service.list_finalized()] == ["2024-05", "2024-04"]
    assert [r.month for r in container.payroll_service.list_finalized(month="2024-04")] == ["2024-04"]
