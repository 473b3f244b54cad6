from __future__ import annotations

from datetime import datetime
from typing import Mapping, Optional, Protocol, Sequence

from ..core.enums import LocationCategory
from .model import Location


class LocationRepository(Protocol):
    def get_by_id(self, location_id: int) -> Optional[Location]:
        raise NotImplementedError

    def get_by_name(self, name: str) -> Optional[Location]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Location]:
        raise NotImplementedError

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
        raise NotImplementedError

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
        raise NotImplementedError

    def set_member_fees(self, *, location_id: int, fees: Mapping[int, float], updated_at: datetime) -> bool:
        """Replace the whole member → transport fee mapping of a location."""

        raise NotImplementedError

    def delete_by_id(self, location_id: int) -> bool:
        raise NotImplementedError
