from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Member
from .repository import MemberRepository

_COLUMNS = "member_id, name, email, transport_fee, created_at, updated_at"


def _to_member(r: dict) -> Member:
    return Member(
        member_id=int(r["member_id"]),
        name=r["name"],
        email=r.get("email"),
        transport_fee=float(r.get("transport_fee") or 0),
        created_at=r["created_at"],
        updated_at=r.get("updated_at"),
    )


class MySQLMemberRepository(MemberRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, member_id: int) -> Optional[Member]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM members WHERE member_id=%s", (int(member_id),))
            r = fetchone(cur)
            return _to_member(r) if r else None

    def get_by_email(self, email: str) -> Optional[Member]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM members WHERE LOWER(email)=LOWER(%s)", (email,))
            r = fetchone(cur)
            return _to_member(r) if r else None

    def list_all(self) -> Sequence[Member]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM members ORDER BY member_id")
            return [_to_member(r) for r in fetchall(cur)]

    def create(self, *, name: str, email: Optional[str], transport_fee: float, created_at: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO members(name, email, transport_fee, created_at)
                VALUES(%s,%s,%s,%s)
                """,
                (name, email, transport_fee, created_at),
            )
            return int(cur.lastrowid)

    def update(
        self,
        *,
        member_id: int,
        name: str,
        email: Optional[str],
        transport_fee: float,
        updated_at: datetime,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE members
                SET name=%s, email=%s, transport_fee=%s, updated_at=%s
                WHERE member_id=%s
                """,
                (name, email, transport_fee, updated_at, int(member_id)),
            )
            return cur.rowcount > 0

    def delete_by_id(self, member_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM members WHERE member_id=%s", (int(member_id),))
            return cur.rowcount > 0
