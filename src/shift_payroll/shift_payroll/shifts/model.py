from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from ..common.datetime_utils import format_date, format_time, hours_between
from ..core.enums import ShiftStatus


@dataclass(frozen=True)
class ShiftRecord:
    """Domain entity: a planned (not actual) work entry submitted by a member."""

    shift_id: int
    member_id: int
    location: str
    work_date: date
    start_time: time
    end_time: time
    status: ShiftStatus
    created_at: datetime
    transport_fee: Optional[float] = None

    @property
    def planned_hours(self) -> float:
        return hours_between(self.start_time, self.end_time)

    def to_dict(self, *, member_name: Optional[str] = None) -> dict:
        return {
            "id": self.shift_id,
            "member_id": self.member_id,
            "member_name": member_name,
            "location": self.location,
            "date": format_date(self.work_date),
            "start_time": format_time(self.start_time),
            "end_time": format_time(self.end_time),
            "planned_hours": self.planned_hours,
            "status": self.status.value,
            "transport_fee": self.transport_fee,
            "created_at": self.created_at.isoformat(timespec="seconds"),
        }
