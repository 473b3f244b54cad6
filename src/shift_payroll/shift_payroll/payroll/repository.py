from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import LocationBreakdown, SalaryRecord


class SalaryRepository(Protocol):
    def get_by_id(self, salary_id: int) -> Optional[SalaryRecord]:
        raise NotImplementedError

    def get_for_member_month(self, member_id: int, month: str) -> Optional[SalaryRecord]:
        raise NotImplementedError

    def list(self, *, member_id: Optional[int] = None, month: Optional[str] = None) -> Sequence[SalaryRecord]:
        """Ordered by month DESC, member_id ASC."""

        raise NotImplementedError

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
        """Raises ConflictError when (member_id, month) is already finalized."""

        raise NotImplementedError

    def delete_by_id(self, salary_id: int) -> bool:
        raise NotImplementedError
