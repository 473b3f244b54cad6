from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..core.enums import LocationCategory


@dataclass(frozen=True)
class Location:
    """Domain entity: a work site (own office or a client) with its hourly wage."""

    location_id: int
    name: str
    category: LocationCategory
    hourly_wage: float
    created_at: datetime
    transport_fee: Optional[float] = None
    member_transport_fees: dict[int, float] = field(default_factory=dict)
    logo: Optional[str] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.location_id,
            "name": self.name,
            "type": self.category.value,
            "hourly_wage": self.hourly_wage,
            "transport_fee": self.transport_fee,
            "member_transport_fees": {str(k): v for k, v in sorted(self.member_transport_fees.items())},
            "logo": self.logo or "",
            "created_at": self.created_at.isoformat(timespec="seconds"),
            "updated_at": self.updated_at.isoformat(timespec="seconds") if self.updated_at else None,
        }
