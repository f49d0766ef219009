"""
Member repository: CRUD over the `members` table.

Email is the secondary lookup key; its uniqueness is enforced by the engine and
surfaces as `AlreadyExistsError` on add and update.
"""
from datetime import datetime
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from membership_api.models.member import Member, MemberStatus
from .base_repository import BaseRepository


class MemberRepository(BaseRepository[Member]):
    """Store adapter for `Member` entities."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        super().__init__(Member, session_factory)

    async def add_member(self, member: Member) -> Member:
        """
        Insert a new member and return it with its generated id.

        `is_valid()` is not called here; the caller validates before adding.
        """
        return await self._add(member)

    async def get_member_by_id(self, member_id: UUID) -> Member:
        return await self._get_by_id(member_id)

    async def get_member_by_email(self, email: str) -> Member:
        """
        Look a member up by email (exact match, as stored).

        Raises:
            NotFoundError: no member has this email
        """
        return await self._get_one_by("email", email)

    async def get_all_members(self) -> list[Member]:
        return await self._get_all()

    async def update_member(
        self,
        member_id: UUID,
        *,
        name: str | None = None,
        email: str | None = None,
        phone_number: str | None = None,
        address: str | None = None,
        join_date: datetime | None = None,
        status: MemberStatus | None = None,
    ) -> Member:
        """
        Change the supplied fields of a member; arguments left as None are untouched.

        Returns:
            The member as stored after the update

        Raises:
            NotFoundError: no member with this id
            AlreadyExistsError: the new email belongs to another member
        """
        return await self._update(
            member_id,
            {
                "name": name,
                "email": email,
                "phone_number": phone_number,
                "address": address,
                "join_date": join_date,
                "status": status,
            },
        )

    async def delete_member(self, member_id: UUID) -> None:
        """Delete a member (and, through the cascade, its memberships)."""
        await self._delete(member_id)
