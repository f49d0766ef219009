import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from membership_api.api.v1.dependencies import get_store
from membership_api.api.v1.error_handlers import InvalidEntityError
from membership_api.api.v1.schemas import SportCreate, SportRead, SportUpdate
from membership_api.models import Sport
from membership_api.repositories.store import Store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sports", tags=["sports"])


@router.post("", response_model=SportRead, status_code=status.HTTP_201_CREATED)
async def add_sport(payload: SportCreate, store: Store = Depends(get_store)) -> SportRead:
    sport = Sport(name=payload.name, description=payload.description)

    invalid = sport.invalid_fields()
    if invalid:
        raise InvalidEntityError("sport", invalid)

    sport = await store.add_sport(sport)
    logger.info("sport.added", extra={"sport_id": str(sport.id)})
    return SportRead.model_validate(sport)


@router.get("/{sport_id}", response_model=SportRead)
async def get_sport_by_id(sport_id: UUID, store: Store = Depends(get_store)) -> SportRead:
    return SportRead.model_validate(await store.get_sport_by_id(sport_id))


@router.get("", response_model=list[SportRead])
async def get_all_sports(store: Store = Depends(get_store)) -> list[SportRead]:
    return [SportRead.model_validate(sport) for sport in await store.get_all_sports()]


@router.patch("/{sport_id}", response_model=SportRead)
async def update_sport(sport_id: UUID, payload: SportUpdate, store: Store = Depends(get_store)) -> SportRead:
    current = await store.get_sport_by_id(sport_id)
    changes = payload.model_dump(exclude_none=True)

    # validate the merged result without touching the stored entity
    candidate = Sport(
        name=changes.get("name", current.name),
        description=changes.get("description", current.description),
    )
    invalid = candidate.invalid_fields()
    if invalid:
        raise InvalidEntityError("sport", invalid)

    return SportRead.model_validate(await store.update_sport(sport_id, **changes))


@router.delete("/{sport_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_sport(sport_id: UUID, store: Store = Depends(get_store)) -> Response:
    await store.delete_sport(sport_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
