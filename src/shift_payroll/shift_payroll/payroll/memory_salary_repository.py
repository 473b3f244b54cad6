from __future__ import annotations

import threading
from datetime import datetime
from typing import Optional, Sequence

from ..core.exceptions import ConflictError
from .model import LocationBreakdown, SalaryRecord
from .repository import SalaryRepository


class InMemorySalaryRepository(SalaryRepository):
    def __init__(self):
        self._lock = threading.Lock()
        self._by_id: dict[int, SalaryRecord] = {}
        self._next_id = 1

    def get_by_id(self, salary_id: int) -> Optional[SalaryRecord]:
        return self._by_id.get(int(salary_id))

    def get_for_member_month(self, member_id: int, month: str) -> Optional[SalaryRecord]:
        with self._lock:
            for s in self._by_id.values():
                if s.member_id == member_id and s.month == month:
                    return s
        return None

    def list(self, *, member_id: Optional[int] = None, month: Optional[str] = None) -> Sequence[SalaryRecord]:
        with self._lock:
            items = list(self._by_id.values())
        if member_id is not None:
            items = [s for s in items if s.member_id == member_id]
        if month:
            items = [s for s in items if s.month == month]
        items.sort(key=lambda s: s.member_id)
        items.sort(key=lambda s: s.month, reverse=True)
        return items

    def create(
        self,
        *,
        member_id: int,
        month: str,
        total_hours: float,
        total_salary: float,
        breakdown: Sequence[LocationBreakdown],
        finalized_at: datetime,
    ) -> int:
        with self._lock:
            if any(s.member_id == member_id and s.month == month for s in self._by_id.values()):
                raise ConflictError(f"Payroll for member {member_id} in {month} is already finalized")
            salary_id = self._next_id
            self._next_id += 1
            self._by_id[salary_id] = SalaryRecord(
                salary_id=salary_id,
                member_id=int(member_id),
                month=month,
                total_hours=float(total_hours),
                total_salary=float(total_salary),
                breakdown=tuple(breakdown),
                finalized_at=finalized_at,
            )
            return salary_id

    def delete_by_id(self, salary_id: int) -> bool:
        with self._lock:
            return self._by_id.pop(int(salary_id), None) is not None
