from sqlalchemy import String, Text, UUID
from sqlalchemy.orm import Mapped, mapped_column
from membership_api.database.base import Base
import uuid

MIN_NAME_LENGTH = 3


class Sport(Base):
    """
    SQLAlchemy model for a Sport offered by the club.

    Sport names are unique at the storage layer; a duplicate surfaces as AlreadyExistsError.
    """
    __tablename__ = "sports"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(
        String,
        unique=True,
        nullable=False
    )

    # Free text, no rules
    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default=""
    )

    def __init__(self, **kwargs):
        kwargs.setdefault("description", "")
        super().__init__(**kwargs)

    def invalid_fields(self) -> list[str]:
        if not self.name or len(self.name) < MIN_NAME_LENGTH:
            return ["name"]
        return []

    def is_valid(self) -> bool:
        return not self.invalid_fields()

    def __repr__(self) -> str:
        return f"<Sport(id={self.id!r}, name={self.name!r})>"
