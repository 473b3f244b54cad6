from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.memory_attendance_repository import InMemoryAttendanceRepository
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.enums import StorageBackend
from .core.exceptions import ValidationError
from .database.connection import DBConfig, DatabaseConnection
from .locations.memory_location_repository import InMemoryLocationRepository
from .locations.mysql_location_repository import MySQLLocationRepository
from .locations.repository import LocationRepository
from .locations.service import LocationService
from .members.memory_member_repository import InMemoryMemberRepository
from .members.mysql_member_repository import MySQLMemberRepository
from .members.repository import MemberRepository
from .members.service import MemberService
from .notifications.notifier import Notifier, NullNotifier
from .payroll.memory_salary_repository import InMemorySalaryRepository
from .payroll.mysql_salary_repository import MySQLSalaryRepository
from .payroll.repository import SalaryRepository
from .payroll.service import PayrollService
from .shifts.memory_shift_repository import InMemoryShiftRepository
from .shifts.mysql_shift_repository import MySQLShiftRepository
from .shifts.repository import ShiftRepository
from .shifts.service import ShiftService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]
    notifier: Notifier

    members_repo: MemberRepository
    locations_repo: LocationRepository
    attendance_repo: AttendanceRepository
    shifts_repo: ShiftRepository
    salaries_repo: SalaryRepository

    member_service: MemberService
    location_service: LocationService
    attendance_service: AttendanceService
    shift_service: ShiftService
    payroll_service: PayrollService


def build_container(
    *,
    storage: str = StorageBackend.MEMORY.value,
    db_config: Optional[dict] = None,
    notifier: Optional[Notifier] = None,
) -> Container:
    """Wire repositories and services. Every call owns fresh in-memory state."""
    try:
        backend = StorageBackend(str(storage).strip().lower())
    except ValueError:
        raise ValidationError(f"Unsupported STORAGE backend: {storage!r}", field="STORAGE")

    notifier = notifier or NullNotifier()
    conn: Optional[DatabaseConnection] = None

    if backend == StorageBackend.MYSQL:
        conn = DatabaseConnection(DBConfig.from_dict(db_config or {}))
        members_repo = MySQLMemberRepository(conn)
        locations_repo = MySQLLocationRepository(conn)
        attendance_repo = MySQLAttendanceRepository(conn)
        shifts_repo = MySQLShiftRepository(conn)
        salaries_repo = MySQLSalaryRepository(conn)
    else:
        members_repo = InMemoryMemberRepository()
        locations_repo = InMemoryLocationRepository()
        attendance_repo = InMemoryAttendanceRepository()
        shifts_repo = InMemoryShiftRepository()
        salaries_repo = InMemorySalaryRepository()

    member_service = MemberService(members_repo)
    location_service = LocationService(locations_repo, attendance_repo)
    attendance_service = AttendanceService(attendance_repo, members_repo, notifier=notifier)
    shift_service = ShiftService(shifts_repo, members_repo)
    payroll_service = PayrollService(
        attendance_repo,
        locations_repo,
        members_repo,
        shifts_repo,
        salaries_repo,
        notifier=notifier,
    )

    return Container(
        conn=conn,
        notifier=notifier,
        members_repo=members_repo,
        locations_repo=locations_repo,
        attendance_repo=attendance_repo,
        shifts_repo=shifts_repo,
        salaries_repo=salaries_repo,
        member_service=member_service,
        location_service=location_service,
        attendance_service=attendance_service,
        shift_service=shift_service,
        payroll_service=payroll_service,
    )
