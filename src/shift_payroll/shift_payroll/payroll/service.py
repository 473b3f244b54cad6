from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

from ..attendance.model import AttendanceFilter
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_local, parse_month
from ..common.validators import require_positive_id
from ..core.enums import ShiftStatus
from ..core.exceptions import ConflictError, NotFoundError
from ..locations.model import Location
from ..locations.repository import LocationRepository
from ..members.repository import MemberRepository
from ..notifications.notifier import Notifier, NullNotifier
from ..shifts.repository import ShiftRepository
from .aggregator import aggregate, transport_fees
from .model import PayrollStatement, PayrollSummary, SalaryRecord, TransportSummary
from .repository import SalaryRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _PlannedEntry:
    member_id: int
    location: Optional[str]
    work_date: date
    total_hours: Optional[float]


class PayrollService:
    """Monthly payroll per member, derived from attendance on every call.

    Nothing is persisted unless a month is explicitly finalized.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        locations: LocationRepository,
        members: MemberRepository,
        shifts: ShiftRepository,
        salaries: SalaryRepository,
        *,
        notifier: Optional[Notifier] = None,
    ):
        self._attendance = attendance
        self._locations = locations
        self._members = members
        self._shifts = shifts
        self._salaries = salaries
        self._notifier = notifier or NullNotifier()

    def _locations_by_name(self) -> dict[str, Location]:
        return {loc.name: loc for loc in self._locations.list_all()}

    def _month_records(self, month: str, member_id: Optional[int] = None):
        return self._attendance.list(AttendanceFilter(member_id=member_id, month=month))

    def summarize(self, member_id: int, month: str) -> PayrollSummary:
        member_id = require_positive_id(member_id, "member_id")
        month = parse_month(month)
        wages = {name: loc.hourly_wage for name, loc in self._locations_by_name().items()}
        return aggregate(member_id, month, self._month_records(month, member_id), wages.get)

    def summarize_month(self, month: str) -> list[PayrollSummary]:
        """One summary per member with hours in ``month``, highest salary first."""
        month = parse_month(month)
        records = self._month_records(month)
        wages = {name: loc.hourly_wage for name, loc in self._locations_by_name().items()}

        member_ids = sorted({r.member_id for r in records if r.total_hours is not None})
        summaries = [aggregate(m, month, records, wages.get) for m in member_ids]
        summaries.sort(key=lambda s: s.total_salary, reverse=True)
        return summaries

    def transport_fees(self, member_id: int, month: str) -> TransportSummary:
        member_id = require_positive_id(member_id, "member_id")
        month = parse_month(month)
        member = self._members.get_by_id(member_id)
        return transport_fees(
            member_id,
            month,
            self._month_records(month, member_id),
            self._locations_by_name(),
            office_fee=member.transport_fee if member else 0.0,
        )

    def statement(self, member_id: int, month: str) -> PayrollStatement:
        return PayrollStatement(
            summary=self.summarize(member_id, month),
            transport=self.transport_fees(member_id, month),
        )

    def projected(self, member_id: int, month: str) -> PayrollSummary:
        """Forecast from the member's approved shift plans of ``month``."""
        member_id = require_positive_id(member_id, "member_id")
        month = parse_month(month)
        planned = [
            _PlannedEntry(
                member_id=s.member_id,
                location=s.location,
                work_date=s.work_date,
                total_hours=s.planned_hours,
            )
            for s in self._shifts.list(member_id=member_id, month=month, status=ShiftStatus.APPROVED)
        ]
        wages = {name: loc.hourly_wage for name, loc in self._locations_by_name().items()}
        return aggregate(member_id, month, planned, wages.get)

    def finalize(self, member_id: int, month: str) -> SalaryRecord:
        summary = self.summarize(member_id, month)
        if self._salaries.get_for_member_month(summary.member_id, summary.month):
            logger.warning("Payroll for member %s in %s is already finalized", summary.member_id, summary.month)
            raise ConflictError(f"Payroll for member {summary.member_id} in {summary.month} is already finalized")

        salary_id = self._salaries.create(
            member_id=summary.member_id,
            month=summary.month,
            total_hours=summary.total_hours,
            total_salary=summary.total_salary,
            breakdown=summary.breakdown,
            finalized_at=now_local(),
        )
        logger.info(
            "Finalized payroll %s: member=%s month=%s hours=%.2f salary=%.2f",
            salary_id,
            summary.member_id,
            summary.month,
            summary.total_hours,
            summary.total_salary,
        )

        member = self._members.get_by_id(summary.member_id)
        name = member.name if member else f"member #{summary.member_id}"
        self._notifier.notify(
            f"Payroll finalized for {name} ({summary.month}): {summary.total_hours:.2f}h, {summary.total_salary:,.0f}"
        )
        record = self._salaries.get_by_id(salary_id)
        if not record:
            raise NotFoundError(f"Salary record {salary_id} not found")
        return record

    def list_finalized(self, *, member_id: Optional[int] = None, month: Optional[str] = None) -> Sequence[SalaryRecord]:
        return self._salaries.list(
            member_id=int(member_id) if member_id is not None else None,
            month=parse_month(month) if month else None,
        )

    def get_finalized(self, member_id: int, month: str) -> SalaryRecord:
        month = parse_month(month)
        record = self._salaries.get_for_member_month(int(member_id), month)
        if not record:
            raise NotFoundError(f"No finalized payroll for member {member_id} in {month}")
        return record

    def delete_finalized(self, salary_id: int) -> None:
        if not self._salaries.delete_by_id(int(salary_id)):
            raise NotFoundError(f"Salary record {salary_id} not found")
        logger.info("Unlocked payroll snapshot %s", salary_id)
