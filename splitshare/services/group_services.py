import logging
from datetime import datetime
from typing import Awaitable, Callable, List

from splitshare.core.errors import NotFoundError, ValidationError
from splitshare.core.utils import parse_identifier, utcnow
from splitshare.db.store import GroupStore
from splitshare.schemas.group import GroupCreate, GroupOut
from splitshare.schemas.user import User

logger = logging.getLogger(__name__)

# (group_id, payer) -> ids of the users a new expense is split across
MemberResolver = Callable[[str, User], Awaitable[List[str]]]


async def create_group(store: GroupStore, data: GroupCreate, now: datetime | None = None) -> GroupOut:
    members = {}
    for user in data.users or []:
        # first occurrence of a user id wins
        members.setdefault(user.user_id, user.to_user())

    group = GroupOut(
        name=data.name,
        group_type=data.group_type,
        simplify_by_default=True,
        updated_at=now or utcnow(),
        members=list(members.values()),
    )
    group = await store.insert_group(group)

    logger.info("Created group %s with %d members", group.id, len(group.members))
    return group


async def get_group(store: GroupStore, group_id: str) -> GroupOut:
    group_id = parse_identifier(group_id, "group id")
    group = await store.get_group(group_id)

    if group is None:
        raise NotFoundError(f"Group {group_id} not found")

    return group


async def list_group_for_user(store: GroupStore, user_id: str) -> List[GroupOut]:
    user_id = parse_identifier(user_id, "user id")
    return await store.list_user_groups(user_id)


async def payer_only(group_id: str, payer: User) -> List[str]:
    return [payer.id]


def group_roster(store: GroupStore) -> MemberResolver:
    """Resolve members from the group's roster; the payer must be one of them."""

    async def resolve(group_id: str, payer: User) -> List[str]:
        group = await get_group(store, group_id)
        member_ids = [member.id for member in group.members]

        if payer.id not in member_ids:
            raise ValidationError(f"Payer {payer.id} is not a member of group {group_id}")

        return member_ids

    return resolve
