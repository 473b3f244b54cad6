from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time, optional_float
from .model import AttendanceFilter, AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "attendance_id, member_id, location, work_date, clock_in, clock_out, total_hours, created_at"


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        member_id=int(r["member_id"]),
        location=r.get("location"),
        work_date=r["work_date"],
        clock_in=normalize_mysql_time(r["clock_in"]),
        clock_out=normalize_mysql_time(r.get("clock_out")),
        total_hours=optional_float(r.get("total_hours")),
        created_at=r["created_at"],
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE attendance_id=%s", (int(attendance_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def find_open(self, member_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE member_id=%s AND work_date=%s AND clock_out IS NULL
                ORDER BY attendance_id DESC
                LIMIT 1
                """,
                (int(member_id), work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list(self, flt: Optional[AttendanceFilter] = None) -> Sequence[AttendanceRecord]:
        flt = flt or AttendanceFilter()
        clauses: list[str] = []
        params: list[object] = []

        if flt.member_id is not None:
            clauses.append("member_id=%s")
            params.append(int(flt.member_id))
        if flt.month:
            clauses.append("DATE_FORMAT(work_date, '%%Y-%%m')=%s")
            params.append(flt.month)
        if flt.work_date is not None:
            clauses.append("work_date=%s")
            params.append(flt.work_date)
        if flt.open_only:
            clauses.append("clock_out IS NULL")
        if flt.location is not None:
            clauses.append("location=%s")
            params.append(flt.location)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                {where}
                ORDER BY work_date DESC, clock_in DESC, attendance_id DESC
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def create_clock_in(
        self,
        *,
        member_id: int,
        location: Optional[str],
        work_date: date,
        clock_in: time,
        created_at: datetime,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(member_id, location, work_date, clock_in, created_at)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(member_id), location, work_date, clock_in, created_at),
            )
            return int(cur.lastrowid)

    def close(self, *, attendance_id: int, clock_out: time, total_hours: float) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET clock_out=%s, total_hours=%s
                WHERE attendance_id=%s AND clock_out IS NULL
                """,
                (clock_out, total_hours, int(attendance_id)),
            )
            return cur.rowcount > 0

    def delete_by_id(self, attendance_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_records WHERE attendance_id=%s", (int(attendance_id),))
            return cur.rowcount > 0
