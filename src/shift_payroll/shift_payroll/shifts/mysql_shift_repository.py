from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional, Sequence

from ..core.enums import ShiftStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time, optional_float
from .model import ShiftRecord
from .repository import ShiftRepository

_COLUMNS = "shift_id, member_id, location, work_date, start_time, end_time, status, transport_fee, created_at"


def _to_shift(r: dict) -> ShiftRecord:
    return ShiftRecord(
        shift_id=int(r["shift_id"]),
        member_id=int(r["member_id"]),
        location=r["location"],
        work_date=r["work_date"],
        start_time=normalize_mysql_time(r["start_time"]),
        end_time=normalize_mysql_time(r["end_time"]),
        status=ShiftStatus(r["status"]),
        transport_fee=optional_float(r.get("transport_fee")),
        created_at=r["created_at"],
    )


class MySQLShiftRepository(ShiftRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, shift_id: int) -> Optional[ShiftRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM shift_plans WHERE shift_id=%s", (int(shift_id),))
            r = fetchone(cur)
            return _to_shift(r) if r else None

    def list(
        self,
        *,
        member_id: Optional[int] = None,
        month: Optional[str] = None,
        status: Optional[ShiftStatus] = None,
    ) -> Sequence[ShiftRecord]:
        clauses: list[str] = []
        params: list[object] = []
        if member_id is not None:
            clauses.append("member_id=%s")
            params.append(int(member_id))
        if month:
            clauses.append("DATE_FORMAT(work_date, '%%Y-%%m')=%s")
            params.append(month)
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM shift_plans
                {where}
                ORDER BY work_date DESC, start_time DESC, shift_id DESC
                """,
                tuple(params),
            )
            return [_to_shift(r) for r in fetchall(cur)]

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO shift_plans(member_id, location, work_date, start_time, end_time, status, transport_fee, created_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(member_id),
                    location,
                    work_date,
                    start_time,
                    end_time,
                    ShiftStatus.SUBMITTED.value,
                    transport_fee,
                    created_at,
                ),
            )
            return int(cur.lastrowid)

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE shift_plans
                SET location=%s, work_date=%s, start_time=%s, end_time=%s, transport_fee=%s
                WHERE shift_id=%s
                """,
                (location, work_date, start_time, end_time, transport_fee, int(shift_id)),
            )
            return cur.rowcount > 0

    def set_status(self, *, shift_id: int, status: ShiftStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE shift_plans SET status=%s WHERE shift_id=%s", (status.value, int(shift_id)))
            return cur.rowcount > 0

    def delete_by_id(self, shift_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM shift_plans WHERE shift_id=%s", (int(shift_id),))
            return cur.rowcount > 0
