from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional, Protocol, Sequence

from .model import AttendanceFilter, AttendanceRecord


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def find_open(self, member_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list(self, flt: Optional[AttendanceFilter] = None) -> Sequence[AttendanceRecord]:
        """Snapshot ordered by work_date DESC, clock_in DESC."""

        raise NotImplementedError

    def create_clock_in(
        self,
        *,
        member_id: int,
        location: Optional[str],
        work_date: date,
        clock_in: time,
        created_at: datetime,
    ) -> int:
        raise NotImplementedError

    def close(self, *, attendance_id: int, clock_out: time, total_hours: float) -> bool:
        """Fill clock_out/total_hours of an OPEN record; False if missing or already closed."""

        raise NotImplementedError

    def delete_by_id(self, attendance_id: int) -> bool:
        raise NotImplementedError
