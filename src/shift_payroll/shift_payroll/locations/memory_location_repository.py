from __future__ import annotations

import threading
from dataclasses import replace
from datetime import datetime
from typing import Mapping, Optional, Sequence

from ..core.enums import LocationCategory
from .model import Location
from .repository import LocationRepository


class InMemoryLocationRepository(LocationRepository):
    def __init__(self):
        self._lock = threading.Lock()
        self._by_id: dict[int, Location] = {}
        self._next_id = 1

    def get_by_id(self, location_id: int) -> Optional[Location]:
        return self._by_id.get(int(location_id))

    def get_by_name(self, name: str) -> Optional[Location]:
        for loc in list(self._by_id.values()):
            if loc.name == name:
                return loc
        return None

    def list_all(self) -> Sequence[Location]:
        with self._lock:
            return sorted(self._by_id.values(), key=lambda loc: loc.location_id)

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
        with self._lock:
            location_id = self._next_id
            self._next_id += 1
            self._by_id[location_id] = Location(
                location_id=location_id,
                name=name,
                category=category,
                hourly_wage=float(hourly_wage),
                transport_fee=transport_fee,
                logo=logo,
                created_at=created_at,
            )
            return location_id

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
        with self._lock:
            current = self._by_id.get(int(location_id))
            if not current:
                return False
            self._by_id[current.location_id] = replace(
                current,
                name=name,
                category=category,
                hourly_wage=float(hourly_wage),
                transport_fee=transport_fee,
                logo=logo,
                updated_at=updated_at,
            )
            return True

    def set_member_fees(self, *, location_id: int, fees: Mapping[int, float], updated_at: datetime) -> bool:
        with self._lock:
            current = self._by_id.get(int(location_id))
            if not current:
                return False
            self._by_id[current.location_id] = replace(
                current,
                member_transport_fees={int(k): float(v) for k, v in fees.items()},
                updated_at=updated_at,
            )
            return True

    def delete_by_id(self, location_id: int) -> bool:
        with self._lock:
            return self._by_id.pop(int(location_id), None) is not None
