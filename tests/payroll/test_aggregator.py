from __future__ import annotations

import random
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

import pytest

from shift_payroll.core.enums import LocationCategory
from shift_payroll.locations.model import Location
from shift_payroll.payroll.aggregator import aggregate, location_fee, transport_fees


@dataclass(frozen=True)
class Entry:
    member_id: int
    location: Optional[str]
    work_date: date
    total_hours: Optional[float]


WAGES = {"ClientA": 2000.0, "ClientB": 1800.0, "Office": 1500.0}


def _location(name, category, *, fee=None, member_fees=None):
    return Location(
        location_id=1,
        name=name,
        category=category,
        hourly_wage=WAGES.get(name, 0),
        created_at=datetime(2024, 1, 1),
        transport_fee=fee,
        member_transport_fees=member_fees or {},
    )


def test_empty_input_gives_zero_summary():
    summary = aggregate(1, "2024-05", [], WAGES.get)

    assert summary.breakdown == ()
    assert summary.total_hours == 0
    assert summary.total_salary == 0


def test_single_location_scenario():
    summary = aggregate(1, "2024-05", [Entry(1, "ClientA", date(2024, 5, 1), 8.5)], WAGES.get)

    assert summary.total_hours == 8.5
    assert summary.total_salary == 17000
    assert [b.location for b in summary.breakdown] == ["ClientA"]
    assert summary.breakdown[0].wage == 2000


def test_filters_member_month_and_open_entries():
    entries = [
        Entry(1, "ClientA", date(2024, 5, 1), 8.0),
        Entry(1, "ClientA", date(2024, 5, 2), None),
        Entry(1, "ClientA", date(2024, 4, 30), 8.0),
        Entry(2, "ClientA", date(2024, 5, 1), 8.0),
    ]

    summary = aggregate(1, "2024-05", entries, WAGES.get)

    assert summary.total_hours == 8.0
    assert summary.total_salary == 16000


def test_groups_by_location_and_sums():
    entries = [
        Entry(1, "ClientA", date(2024, 5, 1), 4.0),
        Entry(1, "Office", date(2024, 5, 1), 2.0),
        Entry(1, "ClientA", date(2024, 5, 2), 3.5),
    ]

    summary = aggregate(1, "2024-05", entries, WAGES.get)

    assert [(b.location, b.hours, b.salary) for b in summary.breakdown] == [
        ("ClientA", 7.5, 15000.0),
        ("Office", 2.0, 3000.0),
    ]
    assert summary.total_hours == 9.5
    assert summary.total_salary == 18000


def test_empty_location_goes_to_unspecified_bucket():
    entries = [Entry(1, None, date(2024, 5, 1), 3.0), Entry(1, "", date(2024, 5, 2), 1.0)]

    summary = aggregate(1, "2024-05", entries, WAGES.get)

    assert [(b.location, b.hours, b.wage) for b in summary.breakdown] == [("unspecified", 4.0, 0.0)]


def test_unknown_location_is_paid_zero():
    summary = aggregate(1, "2024-05", [Entry(1, "Gone Inc", date(2024, 5, 1), 5.0)], WAGES.get)

    assert summary.total_hours == 5.0
    assert summary.total_salary == 0
    assert summary.breakdown[0].wage == 0


def test_result_independent_of_input_order():
    entries = [
        Entry(1, "ClientA", date(2024, 5, d), h)
        for d, h in [(1, 8.0), (2, 7.25), (3, 6.5)]
    ] + [Entry(1, "ClientB", date(2024, 5, 4), 4.75), Entry(1, None, date(2024, 5, 5), 1.0)]
    expected = aggregate(1, "2024-05", entries, WAGES.get)

    rng = random.Random(1234)
    for _ in range(5):
        shuffled = entries[:]
        rng.shuffle(shuffled)
        assert aggregate(1, "2024-05", shuffled, WAGES.get) == expected


def test_location_fee_rules():
    office = _location("Office", LocationCategory.OFFICE, fee=999)
    client = _location("ClientA", LocationCategory.CLIENT, fee=800, member_fees={1: 1200})

    assert location_fee(office, 1, office_fee=500) == 500
    assert location_fee(client, 1, office_fee=500) == 1200
    assert location_fee(client, 2, office_fee=500) == 800
    assert location_fee(_location("ClientB", LocationCategory.CLIENT), 1, office_fee=500) == 0
    assert location_fee(None, 1, office_fee=500) == 0


def test_transport_takes_highest_fee_once_per_day():
    locations = {
        "Office": _location("Office", LocationCategory.OFFICE),
        "ClientA": _location("ClientA", LocationCategory.CLIENT, member_fees={1: 1200}),
    }
    entries = [
        Entry(1, "Office", date(2024, 5, 1), 2.0),
        Entry(1, "ClientA", date(2024, 5, 1), 6.0),
        Entry(1, "Office", date(2024, 5, 2), 8.0),
        Entry(1, "Office", date(2024, 5, 3), None),
    ]

    summary = transport_fees(1, "2024-05", entries, locations, office_fee=500)

    assert summary.days == 2
    assert [d.fee for d in summary.per_day] == [1200, 500]
    assert summary.total_fee == 1700


def test_inexact_hours_sum_the_same_in_any_order():
    hours = [0.1, 0.2, 0.3, 0.33, 0.67]
    entries = [Entry(1, "ClientA", date(2024, 5, i + 1), h) for i, h in enumerate(hours)]
    wages = {"ClientA": 1000.0}.get

    forward = aggregate(1, "2024-05", entries, wages)
    backward = aggregate(1, "2024-05", list(reversed(entries)), wages)

    assert forward == backward
    assert forward.total_hours == pytest.approx(1.6)
    assert forward.total_salary == pytest.approx(1600.0)
