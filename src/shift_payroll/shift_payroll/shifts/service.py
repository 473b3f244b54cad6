from __future__ import annotations

import logging
from datetime import date, time
from typing import Any, Optional, Sequence, Union

from ..common.datetime_utils import now_local, parse_clock_time, parse_iso_date, parse_month
from ..common.validators import optional_amount, require_non_empty, require_positive_id
from ..core.enums import ShiftStatus
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..members.repository import MemberRepository
from .model import ShiftRecord
from .repository import ShiftRepository

logger = logging.getLogger(__name__)

_EDITABLE = {"location", "work_date", "start_time", "end_time", "transport_fee"}


def parse_status(value: Any) -> ShiftStatus:
    if isinstance(value, ShiftStatus):
        return value
    try:
        return ShiftStatus(str(value).strip().lower())
    except ValueError:
        raise ValidationError("status must be one of submitted, approved, rejected", field="status")


def _check_span(start: time, end: time) -> None:
    if end <= start:
        raise ValidationError("end_time must be later than start_time", field="end_time")


class ShiftService:
    """Shift plans: members submit planned work, admins approve or reject it."""

    def __init__(self, shifts: ShiftRepository, members: MemberRepository):
        self._shifts = shifts
        self._members = members

    def submit(
        self,
        *,
        member_id: int,
        location: str,
        work_date: Union[str, date],
        start_time: Union[str, time],
        end_time: Union[str, time],
        transport_fee: Any = None,
    ) -> int:
        member_id = require_positive_id(member_id, "member_id")
        location = require_non_empty(location, "location")
        day = parse_iso_date(work_date, field="date")
        start = parse_clock_time(start_time, field="start_time")
        end = parse_clock_time(end_time, field="end_time")
        _check_span(start, end)
        fee = optional_amount(transport_fee, "transport_fee")

        if not self._members.get_by_id(member_id):
            raise ValidationError("Member does not exist", field="member_id")

        shift_id = self._shifts.create(
            member_id=member_id,
            location=location,
            work_date=day,
            start_time=start,
            end_time=end,
            transport_fee=fee,
            created_at=now_local(),
        )
        logger.info("Shift %s submitted: member=%s date=%s %s-%s", shift_id, member_id, day, start, end)
        return shift_id

    def approve(self, shift_id: int) -> ShiftRecord:
        return self._set_status(shift_id, ShiftStatus.APPROVED)

    def reject(self, shift_id: int) -> ShiftRecord:
        return self._set_status(shift_id, ShiftStatus.REJECTED)

    def _set_status(self, shift_id: int, status: ShiftStatus) -> ShiftRecord:
        shift = self.get(shift_id)
        if shift.status == status:
            return shift
        if not self._shifts.set_status(shift_id=shift.shift_id, status=status):
            raise NotFoundError(f"Shift {shift_id} not found")
        logger.info("Shift %s %s", shift.shift_id, status.value)
        return self.get(shift.shift_id)

    def update(self, shift_id: int, **changes: Any) -> ShiftRecord:
        unknown = set(changes) - _EDITABLE
        if unknown:
            raise ValidationError(f"Unknown shift field(s): {', '.join(sorted(unknown))}", field=sorted(unknown)[0])

        current = self.get(shift_id)
        if current.status != ShiftStatus.SUBMITTED:
            logger.warning("Rejected edit of %s shift %s", current.status.value, current.shift_id)
            raise ConflictError(f"Shift {shift_id} is already {current.status.value}")

        location = require_non_empty(changes["location"], "location") if "location" in changes else current.location
        day = parse_iso_date(changes["work_date"], field="date") if "work_date" in changes else current.work_date
        start = (
            parse_clock_time(changes["start_time"], field="start_time") if "start_time" in changes else current.start_time
        )
        end = parse_clock_time(changes["end_time"], field="end_time") if "end_time" in changes else current.end_time
        _check_span(start, end)
        fee = (
            optional_amount(changes["transport_fee"], "transport_fee")
            if "transport_fee" in changes
            else current.transport_fee
        )

        if not self._shifts.update(
            shift_id=current.shift_id,
            location=location,
            work_date=day,
            start_time=start,
            end_time=end,
            transport_fee=fee,
        ):
            raise NotFoundError(f"Shift {shift_id} not found")
        return self.get(current.shift_id)

    def delete(self, shift_id: int) -> None:
        if not self._shifts.delete_by_id(int(shift_id)):
            raise NotFoundError(f"Shift {shift_id} not found")
        logger.info("Deleted shift %s", shift_id)

    def get(self, shift_id: int) -> ShiftRecord:
        shift = self._shifts.get_by_id(int(shift_id))
        if not shift:
            raise NotFoundError(f"Shift {shift_id} not found")
        return shift

    def list(
        self,
        *,
        member_id: Optional[int] = None,
        month: Optional[str] = None,
        status: Any = None,
    ) -> Sequence[ShiftRecord]:
        return self._shifts.list(
            member_id=int(member_id) if member_id is not None else None,
            month=parse_month(month) if month else None,
            status=parse_status(status) if status else None,
        )
