from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import format_date


@dataclass(frozen=True)
class LocationBreakdown:
    location: str
    hours: float
    wage: float
    salary: float

    def to_dict(self) -> dict:
        return {
            "location": self.location,
            "hours": self.hours,
            "hourly_wage": self.wage,
            "salary": self.salary,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "LocationBreakdown":
        return cls(
            location=str(d["location"]),
            hours=float(d["hours"]),
            wage=float(d["hourly_wage"]),
            salary=float(d["salary"]),
        )


@dataclass(frozen=True)
class PayrollSummary:
    """Hours and salary of one member for one month, grouped by location."""

    member_id: int
    month: str
    breakdown: tuple[LocationBreakdown, ...] = ()
    total_hours: float = 0.0
    total_salary: float = 0.0

    def to_dict(self, *, member_name: Optional[str] = None) -> dict:
        return {
            "member_id": self.member_id,
            "member_name": member_name,
            "month": self.month,
            "breakdown": [b.to_dict() for b in self.breakdown],
            "total_hours": self.total_hours,
            "total_salary": self.total_salary,
        }


@dataclass(frozen=True)
class TransportDay:
    work_date: date
    fee: float

    def to_dict(self) -> dict:
        return {"date": format_date(self.work_date), "fee": self.fee}


@dataclass(frozen=True)
class TransportSummary:
    """Transport fee owed for a month: the highest applicable fee, once per worked day."""

    member_id: int
    month: str
    per_day: tuple[TransportDay, ...] = ()

    @property
    def days(self) -> int:
        return len(self.per_day)

    @property
    def total_fee(self) -> float:
        return sum(d.fee for d in self.per_day)

    def to_dict(self) -> dict:
        return {
            "member_id": self.member_id,
            "month": self.month,
            "days": self.days,
            "total_fee": self.total_fee,
            "per_day": [d.to_dict() for d in self.per_day],
        }


@dataclass(frozen=True)
class SalaryRecord:
    """A finalized (locked) payroll snapshot of one member-month."""

    salary_id: int
    member_id: int
    month: str
    total_hours: float
    total_salary: float
    finalized_at: datetime
    breakdown: tuple[LocationBreakdown, ...] = field(default_factory=tuple)

    def to_dict(self, *, member_name: Optional[str] = None) -> dict:
        return {
            "id": self.salary_id,
            "member_id": self.member_id,
            "member_name": member_name,
            "month": self.month,
            "total_hours": self.total_hours,
            "total_salary": self.total_salary,
            "breakdown": [b.to_dict() for b in self.breakdown],
            "finalized_at": self.finalized_at.isoformat(timespec="seconds"),
        }


@dataclass(frozen=True)
class PayrollStatement:
    summary: PayrollSummary
    transport: TransportSummary

    @property
    def grand_total(self) -> float:
        return self.summary.total_salary + self.transport.total_fee

    def to_dict(self, *, member_name: Optional[str] = None) -> dict:
        return {
            **self.summary.to_dict(member_name=member_name),
            "transport": self.transport.to_dict(),
            "grand_total": self.grand_total,
        }
