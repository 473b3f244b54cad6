from __future__ import annotations

import threading
from dataclasses import replace
from datetime import datetime
from typing import Optional, Sequence

from .model import Member
from .repository import MemberRepository


class InMemoryMemberRepository(MemberRepository):
    def __init__(self):
        self._lock = threading.Lock()
        self._by_id: dict[int, Member] = {}
        self._next_id = 1

    def get_by_id(self, member_id: int) -> Optional[Member]:
        return self._by_id.get(int(member_id))

    def get_by_email(self, email: str) -> Optional[Member]:
        wanted = email.lower()
        for m in list(self._by_id.values()):
            if m.email and m.email.lower() == wanted:
                return m
        return None

    def list_all(self) -> Sequence[Member]:
        with self._lock:
            return sorted(self._by_id.values(), key=lambda m: m.member_id)

    def create(self, *, name: str, email: Optional[str], transport_fee: float, created_at: datetime) -> int:
        with self._lock:
            member_id = self._next_id
            self._next_id += 1
            self._by_id[member_id] = Member(
                member_id=member_id,
                name=name,
                email=email,
                transport_fee=float(transport_fee),
                created_at=created_at,
            )
            return member_id

    def update(
        self,
        *,
        member_id: int,
        name: str,
        email: Optional[str],
        transport_fee: float,
        updated_at: datetime,
    ) -> bool:
        with self._lock:
            current = self._by_id.get(int(member_id))
            if not current:
                return False
            self._by_id[current.member_id] = replace(
                current,
                name=name,
                email=email,
                transport_fee=float(transport_fee),
                updated_at=updated_at,
            )
            return True

    def delete_by_id(self, member_id: int) -> bool:
        with self._lock:
            return self._by_id.pop(int(member_id), None) is not None
