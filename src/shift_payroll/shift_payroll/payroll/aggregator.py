"""Pure payroll computations over attendance-like entries.

Entries are duck-typed: anything with ``member_id``, ``location``,
``work_date`` and ``total_hours`` works (attendance records, or planned
entries derived from shift plans). Entries without ``total_hours`` are open
sessions and are ignored.
"""

from __future__ import annotations

import math
from collections import defaultdict
from typing import Callable, Iterable, Mapping, Optional, Protocol

from ..common.datetime_utils import in_month
from ..core.constants import UNSPECIFIED_LOCATION
from ..core.enums import LocationCategory
from ..locations.model import Location
from .model import LocationBreakdown, PayrollSummary, TransportDay, TransportSummary

WageLookup = Callable[[str], Optional[float]]


class WorkEntry(Protocol):
    member_id: int
    location: Optional[str]
    work_date: object
    total_hours: Optional[float]


def _month_entries(member_id: int, month: str, entries: Iterable[WorkEntry]) -> list[WorkEntry]:
    return [
        e
        for e in entries
        if e.member_id == member_id and e.total_hours is not None and in_month(e.work_date, month)
    ]


def aggregate(member_id: int, month: str, entries: Iterable[WorkEntry], wage_lookup: WageLookup) -> PayrollSummary:
    """Group a member's closed entries of ``month`` by location and price them.

    Unknown locations are paid at wage 0. Hours are summed as stored, never
    re-rounded. Sums use ``math.fsum`` and the breakdown is sorted by location
    name, so the result does not depend on input order.
    """
    hours_by_location: dict[str, list[float]] = defaultdict(list)
    for e in _month_entries(member_id, month, entries):
        hours_by_location[e.location or UNSPECIFIED_LOCATION].append(float(e.total_hours))

    breakdown = []
    for name in sorted(hours_by_location):
        hours = math.fsum(hours_by_location[name])
        wage = wage_lookup(name)
        wage = float(wage) if wage is not None else 0.0
        breakdown.append(LocationBreakdown(location=name, hours=hours, wage=wage, salary=hours * wage))

    return PayrollSummary(
        member_id=member_id,
        month=month,
        breakdown=tuple(breakdown),
        total_hours=math.fsum(b.hours for b in breakdown),
        total_salary=math.fsum(b.salary for b in breakdown),
    )


def location_fee(location: Optional[Location], member_id: int, office_fee: float) -> float:
    """Per-day transport fee one visit to ``location`` earns the member."""
    if location is None:
        return 0.0
    if location.category == LocationCategory.OFFICE:
        return float(office_fee or 0)
    if member_id in location.member_transport_fees:
        return float(location.member_transport_fees[member_id])
    return float(location.transport_fee or 0)


def transport_fees(
    member_id: int,
    month: str,
    entries: Iterable[WorkEntry],
    locations: Mapping[str, Location],
    *,
    office_fee: float = 0.0,
) -> TransportSummary:
    """Apply the highest fee among each worked day's locations, once per day."""
    best: dict[object, float] = {}
    for e in _month_entries(member_id, month, entries):
        fee = location_fee(locations.get(e.location or ""), member_id, office_fee)
        best[e.work_date] = max(best.get(e.work_date, 0.0), fee)

    per_day = tuple(TransportDay(work_date=d, fee=best[d]) for d in sorted(best))
    return TransportSummary(member_id=member_id, month=month, per_day=per_day)
