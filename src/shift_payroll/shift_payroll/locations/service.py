from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from ..attendance.model import AttendanceFilter
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_local
from ..common.validators import optional_amount, require_amount, require_non_empty, require_positive_id
from ..core.enums import LocationCategory
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from .model import Location
from .repository import LocationRepository

logger = logging.getLogger(__name__)

_EDITABLE = {"name", "category", "hourly_wage", "transport_fee", "logo", "member_transport_fees"}


def parse_category(value: Any) -> LocationCategory:
    if isinstance(value, LocationCategory):
        return value
    try:
        return LocationCategory(str(value or LocationCategory.CLIENT.value).strip().lower())
    except ValueError:
        raise ValidationError("type must be 'office' or 'client'", field="type")


def clean_member_fees(fees: Any) -> dict[int, float]:
    """Validate a ``{member_id: fee}`` mapping; keys may arrive as JSON strings."""
    if not isinstance(fees, Mapping):
        raise ValidationError("member_transport_fees must be an object", field="member_transport_fees")
    return {require_positive_id(member_id, "member_id"): require_amount(fee, "transport_fee") for member_id, fee in fees.items()}


class LocationService:
    """Use case: manage work sites and their wages / transport fees (admin).

    Attendance refers to locations by name, so a location with recorded
    attendance cannot be renamed.
    """

    def __init__(self, locations: LocationRepository, attendance: Optional[AttendanceRepository] = None):
        self._locations = locations
        self._attendance = attendance

    def create(
        self,
        *,
        name: str,
        hourly_wage: Any,
        category: Any = LocationCategory.CLIENT,
        transport_fee: Any = None,
        logo: Optional[str] = None,
        member_transport_fees: Any = None,
    ) -> int:
        name = require_non_empty(name, "name")
        wage = require_amount(hourly_wage, "hourly_wage")
        cat = parse_category(category)
        fee = optional_amount(transport_fee, "transport_fee")
        member_fees = clean_member_fees(member_transport_fees) if member_transport_fees else {}

        if self._locations.get_by_name(name):
            raise ConflictError(f"Location '{name}' already exists")

        now = now_local()
        location_id = self._locations.create(
            name=name,
            category=cat,
            hourly_wage=wage,
            transport_fee=fee,
            logo=(logo or "").strip() or None,
            created_at=now,
        )
        if member_fees:
            self._locations.set_member_fees(location_id=location_id, fees=member_fees, updated_at=now)
        logger.info("Created location %s (%s, %s/h)", location_id, name, wage)
        return location_id

    def update(self, location_id: int, **changes: Any) -> Location:
        unknown = set(changes) - _EDITABLE
        if unknown:
            raise ValidationError(f"Unknown location field(s): {', '.join(sorted(unknown))}", field=sorted(unknown)[0])

        current = self.get(location_id)
        name = require_non_empty(changes["name"], "name") if "name" in changes else current.name
        category = parse_category(changes["category"]) if "category" in changes else current.category
        wage = require_amount(changes["hourly_wage"], "hourly_wage") if "hourly_wage" in changes else current.hourly_wage
        fee = (
            optional_amount(changes["transport_fee"], "transport_fee")
            if "transport_fee" in changes
            else current.transport_fee
        )
        logo = ((changes["logo"] or "").strip() or None) if "logo" in changes else current.logo
        member_fees = (
            clean_member_fees(changes["member_transport_fees"] or {}) if "member_transport_fees" in changes else None
        )

        if name != current.name:
            other = self._locations.get_by_name(name)
            if other and other.location_id != current.location_id:
                raise ConflictError(f"Location '{name}' already exists")
            if self._attendance is not None and self._attendance.list(AttendanceFilter(location=current.name)):
                logger.warning("Rejected rename of location %s: attendance still references it", current.location_id)
                raise ConflictError(f"Location '{current.name}' has recorded attendance and cannot be renamed")

        now = now_local()
        ok = self._locations.update(
            location_id=current.location_id,
            name=name,
            category=category,
            hourly_wage=wage,
            transport_fee=fee,
            logo=logo,
            updated_at=now,
        )
        if not ok:
            raise NotFoundError(f"Location {location_id} not found")
        if member_fees is not None:
            self._locations.set_member_fees(location_id=current.location_id, fees=member_fees, updated_at=now)
        return self.get(location_id)

    def set_member_transport_fees(self, location_id: int, fees: Mapping[Any, Any]) -> Location:
        cleaned = clean_member_fees(fees)
        if not self._locations.set_member_fees(location_id=int(location_id), fees=cleaned, updated_at=now_local()):
            raise NotFoundError(f"Location {location_id} not found")
        return self.get(location_id)

    def delete(self, location_id: int) -> None:
        if not self._locations.delete_by_id(int(location_id)):
            raise NotFoundError(f"Location {location_id} not found")
        logger.info("Deleted location %s", location_id)

    def get(self, location_id: int) -> Location:
        loc = self._locations.get_by_id(int(location_id))
        if not loc:
            raise NotFoundError(f"Location {location_id} not found")
        return loc

    def get_by_name(self, name: str) -> Optional[Location]:
        return self._locations.get_by_name(name)

    def list(self) -> Sequence[Location]:
        return self._locations.list_all()

    def wage_for(self, name: str) -> Optional[float]:
        loc = self._locations.get_by_name(name)
        return loc.hourly_wage if loc else None
