import logging
from uuid import UUID

from fastapi import APIRouter, Depends, status

from membership_api.api.v1.dependencies import get_store
from membership_api.api.v1.error_handlers import InvalidEntityError
from membership_api.api.v1.schemas import MembershipCreate, MembershipRead
from membership_api.models import Membership, MembershipStatus, MembershipType
from membership_api.repositories.store import Store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/memberships", tags=["memberships"])


@router.post("", response_model=MembershipRead, status_code=status.HTTP_201_CREATED)
async def add_membership(payload: MembershipCreate, store: Store = Depends(get_store)) -> MembershipRead:
    membership = Membership(**payload.model_dump())

    invalid = membership.invalid_fields()
    if invalid:
        raise InvalidEntityError("membership", invalid)

    # only known values get this far
    membership.type = MembershipType(membership.type)
    membership.status = MembershipStatus(membership.status)

    membership = await store.add_membership(membership)
    logger.info(
        "membership.added",
        extra={"membership_id": str(membership.id), "member_id": str(membership.member_id)},
    )
    return MembershipRead.model_validate(membership)


@router.get("/{membership_id}", response_model=MembershipRead)
async def get_membership_by_id(membership_id: UUID, store: Store = Depends(get_store)) -> MembershipRead:
    return MembershipRead.model_validate(await store.get_membership_by_id(membership_id))


@router.get("", response_model=list[MembershipRead])
async def get_all_memberships(store: Store = Depends(get_store)) -> list[MembershipRead]:
    return [MembershipRead.model_validate(m) for m in await store.get_all_memberships()]
