from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import Member


class MemberRepository(Protocol):
    """Repository interface for Member.

    Note (DIP): services depend on this interface, not on a concrete store.
    """

    def get_by_id(self, member_id: int) -> Optional[Member]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Member]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Member]:
        raise NotImplementedError

    def create(self, *, name: str, email: Optional[str], transport_fee: float, created_at: datetime) -> int:
        raise NotImplementedError

    def update(
        self,
        *,
        member_id: int,
        name: str,
        email: Optional[str],
        transport_fee: float,
        updated_at: datetime,
    ) -> bool:
        raise NotImplementedError

    def delete_by_id(self, member_id: int) -> bool:
        raise NotImplementedError
