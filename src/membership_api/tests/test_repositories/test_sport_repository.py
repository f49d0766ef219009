import uuid

import pytest

from membership_api.exceptions import AlreadyExistsError, ErrorKind, NotFoundError
from membership_api.models import Sport


@pytest.mark.asyncio
class TestSportRepository:

    async def test_add_and_get_round_trip(self, sport_repository):
        added = await sport_repository.add_sport(Sport(name="Badminton", description="Hall B"))

        fetched = await sport_repository.get_sport_by_id(added.id)

        assert isinstance(fetched.id, uuid.UUID)
        assert (fetched.name, fetched.description) == ("Badminton", "Hall B")

    async def test_duplicate_name_raises_already_exists(self, sport_repository):
        await sport_repository.add_sport(Sport(name="Squash"))

        with pytest.raises(AlreadyExistsError) as exc_info:
            await sport_repository.add_sport(Sport(name="Squash", description="another one"))

        assert exc_info.value.kind is ErrorKind.ALREADY_EXISTS

    async def test_get_unknown_id_raises_not_found(self, sport_repository):
        with pytest.raises(NotFoundError):
            await sport_repository.get_sport_by_id(uuid.uuid4())

    async def test_get_all_empty(self, sport_repository):
        assert await sport_repository.get_all_sports() == []

    async def test_get_all(self, sport_repository, make_sport):
        names = {(await sport_repository.add_sport(make_sport())).name for _ in range(2)}
        assert {s.name for s in await sport_repository.get_all_sports()} == names

    async def test_partial_update_of_description_keeps_name(self, sport_repository, created_sport):
        updated = await sport_repository.update_sport(created_sport.id, description="Outdoor courts")

        assert updated.name == created_sport.name
        assert updated.description == "Outdoor courts"
        fetched = await sport_repository.get_sport_by_id(created_sport.id)
        assert (fetched.name, fetched.description) == (created_sport.name, "Outdoor courts")

    async def test_description_can_be_cleared(self, sport_repository, created_sport):
        """An empty string is a supplied value, only None means 'not supplied'."""
        updated = await sport_repository.update_sport(created_sport.id, description="")
        assert updated.description == ""

    async def test_rename_to_existing_name_raises_already_exists(self, sport_repository):
        await sport_repository.add_sport(Sport(name="Rowing"))
        other = await sport_repository.add_sport(Sport(name="Sailing"))

        with pytest.raises(AlreadyExistsError):
            await sport_repository.update_sport(other.id, name="Rowing")

    async def test_update_unknown_id_raises_not_found(self, sport_repository):
        with pytest.raises(NotFoundError):
            await sport_repository.update_sport(uuid.uuid4(), description="x")

    async def test_delete(self, sport_repository, created_sport):
        await sport_repository.delete_sport(created_sport.id)

        with pytest.raises(NotFoundError):
            await sport_repository.get_sport_by_id(created_sport.id)

    async def test_delete_unknown_id_raises_not_found(self, sport_repository):
        with pytest.raises(NotFoundError):
            await sport_repository.delete_sport(uuid.uuid4())
