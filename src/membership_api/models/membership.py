from sqlalchemy import DateTime, Float, ForeignKey, UUID
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime, timezone
from enum import Enum as PyEnum, IntEnum
from membership_api.database.base import Base
from membership_api.database.types import ValueEnum
import uuid


# ------------------------------
# Enums
# ------------------------------
class MembershipType(str, PyEnum):
    """What the member signed up for."""
    MEMBERSHIP = "membership"
    TRAINING = "training"


class MembershipStatus(IntEnum):
    INACTIVE = 0
    ACTIVE = 1


def _as_utc(value: datetime) -> datetime:
    # Naive timestamps are taken to be UTC so they can be compared with aware ones.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# ------------------------------
# Membership Model
# ------------------------------
class Membership(Base):
    """
    SQLAlchemy model linking a Member to a Sport for a period of time.

    `member_id` and `sport_id` are plain references: the engine enforces that they
    point at existing rows, and memberships are removed together with the member or
    sport they reference (ON DELETE CASCADE).
    """
    __tablename__ = "memberships"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    member_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("members.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    sport_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("sports.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    type: Mapped[MembershipType] = mapped_column(
        ValueEnum(MembershipType),
        nullable=False
    )

    start_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False
    )

    due_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False
    )

    status: Mapped[MembershipStatus] = mapped_column(
        ValueEnum(MembershipStatus),
        nullable=False,
        default=MembershipStatus.ACTIVE
    )

    fee: Mapped[float] = mapped_column(
        Float,
        nullable=False
    )

    def __init__(self, **kwargs):
        kwargs.setdefault("status", MembershipStatus.ACTIVE)
        super().__init__(**kwargs)

    def invalid_fields(self) -> list[str]:
        """Return the names of the fields that break a Membership rule (empty when valid)."""
        invalid = []
        if self.type not in (MembershipType.MEMBERSHIP, MembershipType.TRAINING):
            invalid.append("type")
        if self.fee is None or self.fee <= 0:
            invalid.append("fee")
        if self.status not in (MembershipStatus.INACTIVE, MembershipStatus.ACTIVE):
            invalid.append("status")
        if self.start_date is None:
            invalid.append("start_date")
        if self.due_date is None:
            invalid.append("due_date")
        elif self.start_date is not None and _as_utc(self.start_date) > _as_utc(self.due_date):
            # due date must not precede the start date
            invalid.append("due_date")
        return invalid

    def is_valid(self) -> bool:
        return not self.invalid_fields()

    def __repr__(self) -> str:
        return (
            f"<Membership(id={self.id!r}, member_id={self.member_id!r}, "
            f"sport_id={self.sport_id!r}, type={self.type!r})>"
        )
