from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from ..common.datetime_utils import format_date, format_time, in_month


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one clock-in/clock-out session of a member at a location.

    OPEN while ``clock_out`` is None; CLOSED once clock-out filled both
    ``clock_out`` and the derived ``total_hours``. Closed records are never
    edited, only deleted.
    """

    attendance_id: int
    member_id: int
    location: Optional[str]
    work_date: date
    clock_in: time
    created_at: datetime
    clock_out: Optional[time] = None
    total_hours: Optional[float] = None

    @property
    def is_open(self) -> bool:
        return self.clock_out is None

    def to_dict(self, *, member_name: Optional[str] = None) -> dict:
        return {
            "id": self.attendance_id,
            "member_id": self.member_id,
            "member_name": member_name,
            "location": self.location or "",
            "date": format_date(self.work_date),
            "clock_in": format_time(self.clock_in),
            "clock_out": format_time(self.clock_out),
            "total_hours": self.total_hours,
            "created_at": self.created_at.isoformat(timespec="seconds"),
        }


@dataclass(frozen=True)
class AttendanceFilter:
    member_id: Optional[int] = None
    month: Optional[str] = None
    work_date: Optional[date] = None
    open_only: bool = False
    location: Optional[str] = None

    def matches(self, r: AttendanceRecord) -> bool:
        if self.member_id is not None and r.member_id != self.member_id:
            return False
        if self.month and not in_month(r.work_date, self.month):
            return False
        if self.work_date is not None and r.work_date != self.work_date:
            return False
        if self.open_only and not r.is_open:
            return False
        if self.location is not None and (r.location or "") != self.location:
            return False
        return True
