from sqlalchemy import String, DateTime, UUID
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime, timezone
from enum import IntEnum
from membership_api.database.base import Base
from membership_api.database.types import ValueEnum
import re
import uuid

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
PHONE_NUMBER_LENGTH = 10
MIN_NAME_LENGTH = 3


class MemberStatus(IntEnum):
    """Whether a member is currently active in the club."""
    INACTIVE = 0
    ACTIVE = 1

    @property
    def label(self) -> str:
        return self.name.capitalize()   # "Active" / "Inactive"


class Member(Base):
    """
    SQLAlchemy model for a club Member.

    The store generates `id` on insert and enforces email uniqueness. Every other rule
    (name length, email shape, phone length, known status) is a business rule checked
    by `is_valid()`; the store does not call it.
    """
    __tablename__ = "members"

    # Primary key, generated by the store on insert
    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(
        String,
        nullable=False
    )

    # Secondary lookup key (must be unique and non-null)
    email: Mapped[str] = mapped_column(
        String,
        unique=True,
        nullable=False
    )

    phone_number: Mapped[str] = mapped_column(
        "phone",
        String,
        nullable=False
    )

    address: Mapped[str] = mapped_column(
        String,
        nullable=False,
        default=""
    )

    join_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc)
    )

    status: Mapped[MemberStatus] = mapped_column(
        ValueEnum(MemberStatus),
        nullable=False,
        default=MemberStatus.ACTIVE
    )

    def __init__(self, **kwargs):
        # Column defaults only fire on INSERT; apply them here too so a freshly built
        # Member can be validated before it reaches the store.
        kwargs.setdefault("address", "")
        kwargs.setdefault("status", MemberStatus.ACTIVE)
        kwargs.setdefault("join_date", datetime.now(timezone.utc))
        super().__init__(**kwargs)

    def invalid_fields(self) -> list[str]:
        """Return the names of the fields that break a Member rule (empty when valid)."""
        invalid = []
        if not self.name or len(self.name) < MIN_NAME_LENGTH:
            invalid.append("name")
        if not self.email or not EMAIL_PATTERN.match(self.email):
            invalid.append("email")
        if self.phone_number is None or len(self.phone_number) != PHONE_NUMBER_LENGTH:
            invalid.append("phone_number")
        if self.status not in (MemberStatus.INACTIVE, MemberStatus.ACTIVE):
            invalid.append("status")
        return invalid

    def is_valid(self) -> bool:
        return not self.invalid_fields()

    def __repr__(self) -> str:
        return f"<Member(id={self.id!r}, name={self.name!r}, status={self.status!r})>"
