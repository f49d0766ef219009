"""
Member routes.

PATCH follows read-merge-validate-write: the current member is fetched, the
supplied fields are merged into a detached copy, the copy must pass
`is_valid()`, and only then are the supplied fields sent to `update_member`.
"""
import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from membership_api.api.v1.dependencies import get_store
from membership_api.api.v1.error_handlers import InvalidEntityError
from membership_api.api.v1.schemas import MemberCreate, MemberRead, MemberUpdate
from membership_api.models import Member, MemberStatus
from membership_api.repositories.store import Store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/members", tags=["members"])

_MEMBER_FIELDS = ("name", "email", "phone_number", "address", "join_date", "status")


def _merge(member: Member, changes: dict) -> Member:
    fields = {name: getattr(member, name) for name in _MEMBER_FIELDS}
    fields.update(changes)
    return Member(id=member.id, **fields)


@router.post("", response_model=MemberRead, status_code=status.HTTP_201_CREATED)
async def add_member(payload: MemberCreate, store: Store = Depends(get_store)) -> MemberRead:
    # New members always start Active; join_date falls back to now
    member = Member(**payload.model_dump(exclude_none=True), status=MemberStatus.ACTIVE)

    invalid = member.invalid_fields()
    if invalid:
        raise InvalidEntityError("member", invalid)

    member = await store.add_member(member)
    logger.info("member.added", extra={"member_id": str(member.id)})
    return MemberRead.from_member(member)


@router.get("/email/{email}", response_model=MemberRead)
async def get_member_by_email(email: str, store: Store = Depends(get_store)) -> MemberRead:
    return MemberRead.from_member(await store.get_member_by_email(email))


@router.get("/{member_id}", response_model=MemberRead)
async def get_member_by_id(member_id: UUID, store: Store = Depends(get_store)) -> MemberRead:
    return MemberRead.from_member(await store.get_member_by_id(member_id))


@router.get("", response_model=list[MemberRead])
async def get_all_members(store: Store = Depends(get_store)) -> list[MemberRead]:
    return [MemberRead.from_member(member) for member in await store.get_all_members()]


@router.patch("/{member_id}", response_model=MemberRead)
async def update_member(member_id: UUID, payload: MemberUpdate, store: Store = Depends(get_store)) -> MemberRead:
    current = await store.get_member_by_id(member_id)
    changes = payload.model_dump(exclude_none=True)

    invalid = _merge(current, changes).invalid_fields()
    if invalid:
        raise InvalidEntityError("member", invalid)

    if "status" in changes:
        changes["status"] = MemberStatus(changes["status"])

    updated = await store.update_member(member_id, **changes)
    logger.info("member.updated", extra={"member_id": str(member_id), "changed": sorted(changes)})
    return MemberRead.from_member(updated)


@router.delete("/{member_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_member(member_id: UUID, store: Store = Depends(get_store)) -> Response:
    await store.delete_member(member_id)
    logger.info("member.deleted", extra={"member_id": str(member_id)})
    return Response(status_code=status.HTTP_204_NO_CONTENT)
