from __future__ import annotations

import json
from datetime import datetime
from typing import Optional, Sequence

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import LocationBreakdown, SalaryRecord
from .repository import SalaryRepository

_COLUMNS = "salary_id, member_id, month, total_hours, total_salary, breakdown_json, finalized_at"


def _to_salary(r: dict) -> SalaryRecord:
    return SalaryRecord(
        salary_id=int(r["salary_id"]),
        member_id=int(r["member_id"]),
        month=r["month"],
        total_hours=float(r["total_hours"]),
        total_salary=float(r["total_salary"]),
        breakdown=tuple(LocationBreakdown.from_dict(d) for d in json.loads(r["breakdown_json"] or "[]")),
        finalized_at=r["finalized_at"],
    )


class MySQLSalaryRepository(SalaryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, salary_id: int) -> Optional[SalaryRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM salary_snapshots WHERE salary_id=%s", (int(salary_id),))
            r = fetchone(cur)
            return _to_salary(r) if r else None

    def get_for_member_month(self, member_id: int, month: str) -> Optional[SalaryRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM salary_snapshots WHERE member_id=%s AND month=%s",
                (int(member_id), month),
            )
            r = fetchone(cur)
            return _to_salary(r) if r else None

    def list(self, *, member_id: Optional[int] = None, month: Optional[str] = None) -> Sequence[SalaryRecord]:
        clauses: list[str] = []
        params: list[object] = []
        if member_id is not None:
            clauses.append("member_id=%s")
            params.append(int(member_id))
        if month:
            clauses.append("month=%s")
            params.append(month)
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM salary_snapshots {where} ORDER BY month DESC, member_id ASC",
                tuple(params),
            )
            return [_to_salary(r) for r in fetchall(cur)]

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
        payload = json.dumps([b.to_dict() for b in breakdown], ensure_ascii=False)
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO salary_snapshots(member_id, month, total_hours, total_salary, breakdown_json, finalized_at)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    (int(member_id), month, total_hours, total_salary, payload, finalized_at),
                )
                return int(cur.lastrowid)
        except mysql.connector.IntegrityError as e:
            if e.errno == errorcode.ER_DUP_ENTRY:
                raise ConflictError(f"Payroll for member {member_id} in {month} is already finalized") from e
            raise

    def delete_by_id(self, salary_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM salary_snapshots WHERE salary_id=%s", (int(salary_id),))
            return cur.rowcount > 0
