"""
The store facade.

Callers (the HTTP layer, tests) depend on capabilities, not on SQLAlchemy:

- `MemberStore`, `SportStore`, `MembershipStore` describe one entity each;
- `Store` is all three together.

`SQLStore` satisfies `Store` by composing one repository per entity and delegating
to it. Anything with the same methods (e.g. the in-memory fake used by the API
tests) can stand in for it.
"""
from datetime import datetime
from typing import Protocol
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from membership_api.models import Member, MemberStatus, Membership, Sport
from .member_repository import MemberRepository
from .membership_repository import MembershipRepository
from .sport_repository import SportRepository


class MemberStore(Protocol):
    async def add_member(self, member: Member) -> Member: ...

    async def get_member_by_id(self, member_id: UUID) -> Member: ...

    async def get_member_by_email(self, email: str) -> Member: ...

    async def get_all_members(self) -> list[Member]: ...

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
    ) -> Member: ...

    async def delete_member(self, member_id: UUID) -> None: ...


class SportStore(Protocol):
    async def add_sport(self, sport: Sport) -> Sport: ...

    async def get_sport_by_id(self, sport_id: UUID) -> Sport: ...

    async def get_all_sports(self) -> list[Sport]: ...

    async def update_sport(
        self,
        sport_id: UUID,
        *,
        name: str | None = None,
        description: str | None = None,
    ) -> Sport: ...

    async def delete_sport(self, sport_id: UUID) -> None: ...


class MembershipStore(Protocol):
    async def add_membership(self, membership: Membership) -> Membership: ...

    async def get_membership_by_id(self, membership_id: UUID) -> Membership: ...

    async def get_all_memberships(self) -> list[Membership]: ...


class Store(MemberStore, SportStore, MembershipStore, Protocol):
    """Every capability the HTTP API needs."""


class SQLStore:
    """
    Relational implementation of `Store`.

    Holds nothing but the three repositories, which in turn hold only the shared
    session factory.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.members = MemberRepository(session_factory)
        self.sports = SportRepository(session_factory)
        self.memberships = MembershipRepository(session_factory)

    # Members
    async def add_member(self, member: Member) -> Member:
        return await self.members.add_member(member)

    async def get_member_by_id(self, member_id: UUID) -> Member:
        return await self.members.get_member_by_id(member_id)

    async def get_member_by_email(self, email: str) -> Member:
        return await self.members.get_member_by_email(email)

    async def get_all_members(self) -> list[Member]:
        return await self.members.get_all_members()

    async def update_member(self, member_id: UUID, **changes) -> Member:
        return await self.members.update_member(member_id, **changes)

    async def delete_member(self, member_id: UUID) -> None:
        await self.members.delete_member(member_id)

    # Sports
    async def add_sport(self, sport: Sport) -> Sport:
        return await self.sports.add_sport(sport)

    async def get_sport_by_id(self, sport_id: UUID) -> Sport:
        return await self.sports.get_sport_by_id(sport_id)

    async def get_all_sports(self) -> list[Sport]:
        return await self.sports.get_all_sports()

    async def update_sport(self, sport_id: UUID, **changes) -> Sport:
        return await self.sports.update_sport(sport_id, **changes)

    async def delete_sport(self, sport_id: UUID) -> None:
        await self.sports.delete_sport(sport_id)

    # Memberships
    async def add_membership(self, membership: Membership) -> Membership:
        return await self.memberships.add_membership(membership)

    async def get_membership_by_id(self, membership_id: UUID) -> Membership:
        return await self.memberships.get_membership_by_id(membership_id)

    async def get_all_memberships(self) -> list[Membership]:
        return await self.memberships.get_all_memberships()
