from __future__ import annotations

import threading
from dataclasses import replace
from datetime import date, datetime, time
from typing import Optional, Sequence

from ..common.datetime_utils import in_month
from ..core.enums import ShiftStatus
from .model import ShiftRecord
from .repository import ShiftRepository


class InMemoryShiftRepository(ShiftRepository):
    def __init__(self):
        self._lock = threading.Lock()
        self._by_id: dict[int, ShiftRecord] = {}
        self._next_id = 1

    def get_by_id(self, shift_id: int) -> Optional[ShiftRecord]:
        return self._by_id.get(int(shift_id))

    def list(
        self,
        *,
        member_id: Optional[int] = None,
        month: Optional[str] = None,
        status: Optional[ShiftStatus] = None,
    ) -> Sequence[ShiftRecord]:
        with self._lock:
            items = list(self._by_id.values())
        if member_id is not None:
            items = [s for s in items if s.member_id == member_id]
        if month:
            items = [s for s in items if in_month(s.work_date, month)]
        if status is not None:
            items = [s for s in items if s.status == status]
        items.sort(key=lambda s: (s.work_date, s.start_time, s.shift_id), reverse=True)
        return items

    def create(
        self,
        *,
        member_id: int,
        location: str,
        work_date: date,
        start_time: time,
        end_time: time,
        transport_fee: Optional[float],
        created_at: datetime,
    ) -> int:
        with self._lock:
            shift_id = self._next_id
            self._next_id += 1
            self._by_id[shift_id] = ShiftRecord(
                shift_id=shift_id,
                member_id=int(member_id),
                location=location,
                work_date=work_date,
                start_time=start_time,
                end_time=end_time,
                status=ShiftStatus.SUBMITTED,
                transport_fee=transport_fee,
                created_at=created_at,
            )
            return shift_id

    def update(
        self,
        *,
        shift_id: int,
        location: str,
        work_date: date,
        start_time: time,
        end_time: time,
        transport_fee: Optional[float],
    ) -> bool:
        with self._lock:
            current = self._by_id.get(int(shift_id))
            if not current:
                return False
            self._by_id[current.shift_id] = replace(
                current,
                location=location,
                work_date=work_date,
                start_time=start_time,
                end_time=end_time,
                transport_fee=transport_fee,
            )
            return True

    def set_status(self, *, shift_id: int, status: ShiftStatus) -> bool:
        with self._lock:
            current = self._by_id.get(int(shift_id))
            if not current:
                return False
            self._by_id[current.shift_id] = replace(current, status=status)
            return True

    def delete_by_id(self, shift_id: int) -> bool:
        with self._lock:
            return self._by_id.pop(int(shift_id), None) is not None
