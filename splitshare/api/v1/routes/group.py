from typing import List

from fastapi import APIRouter, Depends

from splitshare.core.dependencies import get_group_store
from splitshare.db.store import GroupStore
from splitshare.schemas.group import GroupCreate, GroupOut
from splitshare.services.group_services import create_group, get_group, list_group_for_user

router = APIRouter()


@router.post("/", response_model=GroupOut)
async def create_new_group(data: GroupCreate, store: GroupStore = Depends(get_group_store)):
    return await create_group(store, data)


@router.get("/", response_model=List[GroupOut])
async def user_groups(user_id: str, store: GroupStore = Depends(get_group_store)):
    return await list_group_for_user(store, user_id)


@router.get("/{group_id}", response_model=GroupOut)
async def fetch_group(group_id: str, store: GroupStore = Depends(get_group_store)):
    return await get_group(store, group_id)
