from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Member:
    """Domain entity: a team member who works shifts.

    Attendance and shift records refer to members by ``member_id``; the display
    name is resolved only when presenting data.
    """

    member_id: int
    name: str
    email: Optional[str]
    transport_fee: float
    created_at: datetime
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.member_id,
            "name": self.name,
            "email": self.email,
            "transport_fee": self.transport_fee,
            "created_at": self.created_at.isoformat(timespec="seconds"),
            "updated_at": self.updated_at.isoformat(timespec="seconds") if self.updated_at else None,
        }
