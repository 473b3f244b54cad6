from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional, Protocol, Sequence

from ..core.enums import ShiftStatus
from .model import ShiftRecord


class ShiftRepository(Protocol):
    def get_by_id(self, shift_id: int) -> Optional[ShiftRecord]:
        raise NotImplementedError

    def list(
        self,
        *,
        member_id: Optional[int] = None,
        month: Optional[str] = None,
        status: Optional[ShiftStatus] = None,
    ) -> Sequence[ShiftRecord]:
        """Ordered by work_date DESC, start_time DESC."""

        raise NotImplementedError

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
        raise NotImplementedError

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
        raise NotImplementedError

    def set_status(self, *, shift_id: int, status: ShiftStatus) -> bool:
        raise NotImplementedError

    def delete_by_id(self, shift_id: int) -> bool:
        raise NotImplementedError
