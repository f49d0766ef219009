"""
Membership repository.

Memberships are append-only through the store: they can be added and read, and
they disappear with the member or sport they reference.
"""
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from membership_api.models.membership import Membership
from .base_repository import BaseRepository


class MembershipRepository(BaseRepository[Membership]):
    """Store adapter for `Membership` entities."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        super().__init__(Membership, session_factory)

    async def add_membership(self, membership: Membership) -> Membership:
        """
        Insert a membership.

        Raises:
            ReferenceNotFoundError: `member_id` or `sport_id` does not reference an existing row
                (kind MISSING_REQUIRED_FIELD)
            MissingRequiredFieldError: a required column was left empty
        """
        return await self._add(membership)

    async def get_membership_by_id(self, membership_id: UUID) -> Membership:
        return await self._get_by_id(membership_id)

    async def get_all_memberships(self) -> list[Membership]:
        return await self._get_all()
