from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import optional_email, require_amount, require_non_empty
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from .model import Member
from .repository import MemberRepository

logger = logging.getLogger(__name__)

_EDITABLE = {"name", "email", "transport_fee"}


class MemberService:
    """Use case: register and maintain team members (admin)."""

    def __init__(self, members: MemberRepository):
        self._members = members

    def register(self, *, name: str, email: Optional[str] = None, transport_fee: Any = 0) -> int:
        name = require_non_empty(name, "name")
        email = optional_email(email)
        fee = require_amount(transport_fee if transport_fee is not None else 0, "transport_fee")

        if email and self._members.get_by_email(email):
            raise ConflictError("A member with this e-mail already exists")

        member_id = self._members.create(name=name, email=email, transport_fee=fee, created_at=now_local())
        logger.info("Registered member %s (%s)", member_id, name)
        return member_id

    def update(self, member_id: int, **changes: Any) -> Member:
        unknown = set(changes) - _EDITABLE
        if unknown:
            raise ValidationError(f"Unknown member field(s): {', '.join(sorted(unknown))}", field=sorted(unknown)[0])

        current = self.get(member_id)
        name = require_non_empty(changes["name"], "name") if "name" in changes else current.name
        email = optional_email(changes["email"]) if "email" in changes else current.email
        fee = (
            require_amount(changes["transport_fee"], "transport_fee")
            if "transport_fee" in changes
            else current.transport_fee
        )

        if email and email != current.email:
            other = self._members.get_by_email(email)
            if other and other.member_id != current.member_id:
                raise ConflictError("A member with this e-mail already exists")

        if not self._members.update(
            member_id=current.member_id,
            name=name,
            email=email,
            transport_fee=fee,
            updated_at=now_local(),
        ):
            raise NotFoundError(f"Member {member_id} not found")
        return self.get(member_id)

    def delete(self, member_id: int) -> None:
        # Attendance and shift rows of the member are left in place.
        if not self._members.delete_by_id(int(member_id)):
            raise NotFoundError(f"Member {member_id} not found")
        logger.info("Deleted member %s", member_id)

    def get(self, member_id: int) -> Member:
        member = self._members.get_by_id(int(member_id))
        if not member:
            raise NotFoundError(f"Member {member_id} not found")
        return member

    def exists(self, member_id: int) -> bool:
        return self._members.get_by_id(int(member_id)) is not None

    def list(self) -> Sequence[Member]:
        return self._members.list_all()

    def display_names(self) -> dict[int, str]:
        return {m.member_id: m.name for m in self._members.list_all()}
