from __future__ import annotations

import threading
from dataclasses import replace
from datetime import date, datetime, time
from typing import Optional, Sequence

from .model import AttendanceFilter, AttendanceRecord
from .repository import AttendanceRepository


def _newest_first(r: AttendanceRecord):
    return (r.work_date, r.clock_in, r.attendance_id)


class InMemoryAttendanceRepository(AttendanceRepository):
    """Process-local store; one instance per container, so tests get a fresh ledger."""

    def __init__(self):
        self._lock = threading.Lock()
        self._by_id: dict[int, AttendanceRecord] = {}
        self._next_id = 1

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        return self._by_id.get(int(attendance_id))

    def find_open(self, member_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with self._lock:
            for r in self._by_id.values():
                if r.member_id == member_id and r.work_date == work_date and r.is_open:
                    return r
        return None

    def list(self, flt: Optional[AttendanceFilter] = None) -> Sequence[AttendanceRecord]:
        flt = flt or AttendanceFilter()
        with self._lock:
            items = [r for r in self._by_id.values() if flt.matches(r)]
        items.sort(key=_newest_first, reverse=True)
        return items

    def create_clock_in(
        self,
        *,
        member_id: int,
        location: Optional[str],
        work_date: date,
        clock_in: time,
        created_at: datetime,
    ) -> int:
        with self._lock:
            attendance_id = self._next_id
            self._next_id += 1
            self._by_id[attendance_id] = AttendanceRecord(
                attendance_id=attendance_id,
                member_id=int(member_id),
                location=location,
                work_date=work_date,
                clock_in=clock_in,
                created_at=created_at,
            )
            return attendance_id

    def close(self, *, attendance_id: int, clock_out: time, total_hours: float) -> bool:
        with self._lock:
            current = self._by_id.get(int(attendance_id))
            if not current or not current.is_open:
                return False
            self._by_id[current.attendance_id] = replace(current, clock_out=clock_out, total_hours=total_hours)
            return True

    def delete_by_id(self, attendance_id: int) -> bool:
        with self._lock:
            return self._by_id.pop(int(attendance_id), None) is not None
