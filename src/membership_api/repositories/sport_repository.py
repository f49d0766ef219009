from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from membership_api.models.sport import Sport
from .base_repository import BaseRepository


class SportRepository(BaseRepository[Sport]):
    """Store adapter for `Sport` entities. Sport names are unique."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        super().__init__(Sport, session_factory)

    async def add_sport(self, sport: Sport) -> Sport:
        return await self._add(sport)

    async def get_sport_by_id(self, sport_id: UUID) -> Sport:
        return await self._get_by_id(sport_id)

    async def get_all_sports(self) -> list[Sport]:
        return await self._get_all()

    async def update_sport(
        self,
        sport_id: UUID,
        *,
        name: str | None = None,
        description: str | None = None,
    ) -> Sport:
        """
        Partial update: updating only the description keeps the name, and vice versa.

        Raises:
            NotFoundError: no sport with this id
            AlreadyExistsError: another sport already has the new name
        """
        return await self._update(sport_id, {"name": name, "description": description})

    async def delete_sport(self, sport_id: UUID) -> None:
        await self._delete(sport_id)
