"""
Request/response bodies of the v1 API.

Request models only check JSON shape and types. Business rules (name length,
email format, fee sign, date order, ...) stay on the entities' `is_valid()`, so
create schemas accept plain `str`/`int` for enum-like fields and let the entity
report which fields are wrong.
"""
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from membership_api.models import Member, MemberStatus, MembershipStatus, MembershipType


# ------------------------------
# Members
# ------------------------------
class MemberCreate(BaseModel):
    name: str
    email: str
    phone_number: str
    address: str = ""
    join_date: datetime | None = None


class MemberUpdate(BaseModel):
    """Every field is optional; only the supplied ones change."""
    name: str | None = None
    email: str | None = None
    phone_number: str | None = None
    address: str | None = None
    join_date: datetime | None = None
    status: int | None = None


class MemberRead(BaseModel):
    id: UUID
    name: str
    email: str
    phone_number: str
    address: str
    join_date: datetime
    status: str   # "Active" / "Inactive", or the raw stored value when it is not a known status

    @classmethod
    def from_member(cls, member: Member) -> "MemberRead":
        return cls(
            id=member.id,
            name=member.name,
            email=member.email,
            phone_number=member.phone_number,
            address=member.address,
            join_date=member.join_date,
            status=_status_label(member.status),
        )


def _status_label(status) -> str:
    # the store accepts any status value, only known ones get a label
    try:
        return MemberStatus(status).label
    except ValueError:
        return str(status)


# ------------------------------
# Sports
# ------------------------------
class SportCreate(BaseModel):
    name: str
    description: str = ""


class SportUpdate(BaseModel):
    name: str | None = None
    description: str | None = None


class SportRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: str


# ------------------------------
# Memberships
# ------------------------------
class MembershipCreate(BaseModel):
    member_id: UUID
    sport_id: UUID
    type: str
    start_date: datetime
    due_date: datetime
    status: int = MembershipStatus.ACTIVE.value
    fee: float


class MembershipRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    member_id: UUID
    sport_id: UUID
    type: MembershipType | str   # raw value when the stored type is not a known one
    start_date: datetime
    due_date: datetime
    status: int
    fee: float


class ErrorResponse(BaseModel):
    detail: str
    code: str
    fields: list[str] | None = None
