from __future__ import annotations

import logging
import threading
import weakref
from datetime import date, time
from typing import Optional, Sequence, Union

from ..common.datetime_utils import (
    format_date,
    format_time,
    hours_between,
    now_local,
    parse_clock_time,
    parse_iso_date,
    parse_month,
)
from ..common.validators import require_positive_id
from ..core.constants import MAX_NAME_LENGTH
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..members.repository import MemberRepository
from ..notifications.notifier import Notifier, NullNotifier
from .model import AttendanceFilter, AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Attendance ledger: clock-in / clock-out sessions and their worked hours.

    Clock-in and clock-out are serialized per member, so the "at most one open
    session per (member, date)" rule also holds when requests run in parallel
    threads. A member's lock lives only while some call holds it.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        members: MemberRepository,
        *,
        notifier: Optional[Notifier] = None,
    ):
        self._attendance = attendance
        self._members = members
        self._notifier = notifier or NullNotifier()
        self._locks: weakref.WeakValueDictionary[int, threading.Lock] = weakref.WeakValueDictionary()
        self._locks_guard = threading.Lock()

    def _member_lock(self, member_id: int) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(member_id)
            if lock is None:
                lock = self._locks[member_id] = threading.Lock()
            return lock

    def _member_name(self, member_id: int) -> str:
        member = self._members.get_by_id(member_id)
        return member.name if member else f"member #{member_id}"

    def clock_in(
        self,
        *,
        member_id: int,
        work_date: Union[str, date],
        clock_in: Union[str, time],
        location: Optional[str] = None,
    ) -> int:
        member_id = require_positive_id(member_id, "member_id")
        day = parse_iso_date(work_date, field="date")
        start = parse_clock_time(clock_in, field="clock_in")
        location = (location or "").strip() or None
        if location and len(location) > MAX_NAME_LENGTH:
            raise ValidationError(f"location must be at most {MAX_NAME_LENGTH} characters", field="location")

        member = self._members.get_by_id(member_id)
        if not member:
            raise ValidationError("Member does not exist", field="member_id")

        with self._member_lock(member_id):
            existing = self._attendance.find_open(member_id, day)
            if existing:
                logger.warning("Rejected double clock-in for member %s on %s", member_id, day)
                raise ConflictError(
                    f"{member.name} is already clocked in on {format_date(day)} (record {existing.attendance_id})"
                )

            attendance_id = self._attendance.create_clock_in(
                member_id=member_id,
                location=location,
                work_date=day,
                clock_in=start,
                created_at=now_local(),
            )

        logger.info("Clock-in %s: member=%s date=%s time=%s", attendance_id, member_id, day, start)
        self._notifier.notify(
            f"{member.name} clocked in at {location or 'an unspecified location'} "
            f"({format_date(day)} {format_time(start)})"
        )
        return attendance_id

    def clock_out(self, attendance_id: int, clock_out: Union[str, time]) -> float:
        record = self.get(attendance_id)

        with self._member_lock(record.member_id):
            record = self.get(attendance_id)
            if not record.is_open:
                raise ConflictError(f"Attendance record {attendance_id} is already clocked out")

            end = parse_clock_time(clock_out, field="clock_out")
            # Same-day comparison only: a session crossing midnight is rejected.
            if end <= record.clock_in:
                raise ValidationError("clock_out must be later than clock_in", field="clock_out")

            total_hours = hours_between(record.clock_in, end)
            if not self._attendance.close(attendance_id=record.attendance_id, clock_out=end, total_hours=total_hours):
                raise ConflictError(f"Attendance record {attendance_id} is already clocked out")

        logger.info("Clock-out %s: member=%s hours=%.2f", record.attendance_id, record.member_id, total_hours)
        self._notifier.notify(
            f"{self._member_name(record.member_id)} clocked out "
            f"({format_date(record.work_date)} {format_time(end)}, {total_hours:.2f}h)"
        )
        return total_hours

    def delete(self, attendance_id: int) -> None:
        if not self._attendance.delete_by_id(int(attendance_id)):
            raise NotFoundError(f"Attendance record {attendance_id} not found")
        logger.info("Deleted attendance record %s", attendance_id)

    def get(self, attendance_id: int) -> AttendanceRecord:
        record = self._attendance.get_by_id(int(attendance_id))
        if not record:
            raise NotFoundError(f"Attendance record {attendance_id} not found")
        return record

    def open_session(self, member_id: int, work_date: Union[str, date]) -> Optional[AttendanceRecord]:
        return self._attendance.find_open(int(member_id), parse_iso_date(work_date))

    def list(
        self,
        *,
        member_id: Optional[int] = None,
        month: Optional[str] = None,
        work_date: Union[str, date, None] = None,
        open_only: bool = False,
    ) -> Sequence[AttendanceRecord]:
        flt = AttendanceFilter(
            member_id=int(member_id) if member_id is not None else None,
            month=parse_month(month) if month else None,
            work_date=parse_iso_date(work_date) if work_date else None,
            open_only=bool(open_only),
        )
        return self._attendance.list(flt)
