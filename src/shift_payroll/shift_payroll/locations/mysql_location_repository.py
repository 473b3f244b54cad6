from __future__ import annotations

from datetime import datetime
from typing import Mapping, Optional, Sequence

from ..core.enums import LocationCategory
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, optional_float
from .model import Location
from .repository import LocationRepository

_COLUMNS = "location_id, name, category, hourly_wage, transport_fee, logo, created_at, updated_at"


def _to_location(r: dict, fees: dict[int, float]) -> Location:
    return Location(
        location_id=int(r["location_id"]),
        name=r["name"],
        category=LocationCategory(r["category"]),
        hourly_wage=float(r.get("hourly_wage") or 0),
        transport_fee=optional_float(r.get("transport_fee")),
        member_transport_fees=fees,
        logo=r.get("logo"),
        created_at=r["created_at"],
        updated_at=r.get("updated_at"),
    )


class MySQLLocationRepository(LocationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _fees_for(self, cur, location_id: int) -> dict[int, float]:
        cur.execute("SELECT member_id, fee FROM location_member_fees WHERE location_id=%s", (int(location_id),))
        return {int(r["member_id"]): float(r["fee"]) for r in fetchall(cur)}

    def get_by_id(self, location_id: int) -> Optional[Location]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM locations WHERE location_id=%s", (int(location_id),))
            r = fetchone(cur)
            if not r:
                return None
            return _to_location(r, self._fees_for(cur, r["location_id"]))

    def get_by_name(self, name: str) -> Optional[Location]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM locations WHERE name=%s", (name,))
            r = fetchone(cur)
            if not r:
                return None
            return _to_location(r, self._fees_for(cur, r["location_id"]))

    def list_all(self) -> Sequence[Location]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM locations ORDER BY location_id")
            rows = fetchall(cur)
            cur.execute("SELECT location_id, member_id, fee FROM location_member_fees")
            fees: dict[int, dict[int, float]] = {}
            for f in fetchall(cur):
                fees.setdefault(int(f["location_id"]), {})[int(f["member_id"])] = float(f["fee"])
            return [_to_location(r, fees.get(int(r["location_id"]), {})) for r in rows]

    def create(
        self,
        *,
        name: str,
        category: LocationCategory,
        hourly_wage: float,
        transport_fee: Optional[float],
        logo: Optional[str],
        created_at: datetime,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO locations(name, category, hourly_wage, transport_fee, logo, created_at)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (name, category.value, hourly_wage, transport_fee, logo, created_at),
            )
            return int(cur.lastrowid)

    def update(
        self,
        *,
        location_id: int,
        name: str,
        category: LocationCategory,
        hourly_wage: float,
        transport_fee: Optional[float],
        logo: Optional[str],
        updated_at: datetime,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE locations
                SET name=%s, category=%s, hourly_wage=%s, transport_fee=%s, logo=%s, updated_at=%s
                WHERE location_id=%s
                """,
                (name, category.value, hourly_wage, transport_fee, logo, updated_at, int(location_id)),
            )
            return cur.rowcount > 0

    def set_member_fees(self, *, location_id: int, fees: Mapping[int, float], updated_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE locations SET updated_at=%s WHERE location_id=%s", (updated_at, int(location_id)))
            if cur.rowcount == 0:
                return False
            cur.execute("DELETE FROM location_member_fees WHERE location_id=%s", (int(location_id),))
            if fees:
                cur.executemany(
                    "INSERT INTO location_member_fees(location_id, member_id, fee) VALUES(%s,%s,%s)",
                    [(int(location_id), int(member_id), float(fee)) for member_id, fee in fees.items()],
                )
            return True

    def delete_by_id(self, location_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM locations WHERE location_id=%s", (int(location_id),))
            return cur.rowcount > 0
