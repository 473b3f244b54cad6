"""Example: drive the service layer directly (no Flask).

Controllers are thin; the rules live in the services. Runs on in-memory storage.
"""

import json

from shift_payroll.container import build_container
from shift_payroll.core.enums import LocationCategory


def main():
    container = build_container(storage="memory")

    aoki = container.member_service.register(name="Aoki", email="aoki@example.com", transport_fee=500)
    container.location_service.create(name="ClientA", hourly_wage=2000, category=LocationCategory.CLIENT, transport_fee=800)
    container.location_service.create(name="Office", hourly_wage=1500, category=LocationCategory.OFFICE)

    rec = container.attendance_service.clock_in(member_id=aoki, location="ClientA", work_date="2024-05-01", clock_in="09:00")
    container.attendance_service.clock_out(rec, "17:30")

    rec = container.attendance_service.clock_in(member_id=aoki, location="Office", work_date="2024-05-02", clock_in="10:00")
    container.attendance_service.clock_out(rec, "12:00")

    statement = container.payroll_service.statement(aoki, "2024-05")
    print(json.dumps(statement.to_dict(member_name="Aoki"), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
