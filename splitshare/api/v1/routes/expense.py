from typing import List

from fastapi import APIRouter, Depends, Query

from splitshare.core.config import Settings
from splitshare.core.dependencies import get_expense_store, get_member_resolver, get_settings
from splitshare.db.store import ExpenseStore
from splitshare.schemas.expense import ExpenseCreate, ExpenseOut, ExpenseUpdate
from splitshare.services.expense_services import (
    create_expense,
    delete_expense,
    get_expense,
    list_expenses,
    restore_expense,
    update_expense,
)
from splitshare.services.group_services import MemberResolver

router = APIRouter()


@router.post("/", response_model=ExpenseOut)
async def add_expense(
    data: ExpenseCreate,
    store: ExpenseStore = Depends(get_expense_store),
    resolve_members: MemberResolver = Depends(get_member_resolver),
):
    return await create_expense(store, data, resolve_members)


@router.get("/", response_model=List[ExpenseOut])
async def group_expenses(
    group_id: str,
    limit: int | None = Query(None, ge=1, le=100),
    offset: int = Query(0, ge=0),
    store: ExpenseStore = Depends(get_expense_store),
    settings: Settings = Depends(get_settings),
):
    return await list_expenses(store, group_id, limit=limit or settings.DEFAULT_PAGE_SIZE, offset=offset)


@router.get("/{expense_id}", response_model=ExpenseOut)
async def fetch(expense_id: str, store: ExpenseStore = Depends(get_expense_store)):
    return await get_expense(store, expense_id)


@router.patch("/{expense_id}", response_model=ExpenseOut)
async def edit(
    expense_id: str,
    data: ExpenseUpdate,
    store: ExpenseStore = Depends(get_expense_store),
    settings: Settings = Depends(get_settings),
):
    return await update_expense(store, expense_id, data, recompute=settings.RECOMPUTE_SHARES_ON_UPDATE)


@router.delete("/{expense_id}", response_model=ExpenseOut)
async def del_expense(expense_id: str, store: ExpenseStore = Depends(get_expense_store)):
    return await delete_expense(store, expense_id)


@router.post("/{expense_id}/restore", response_model=ExpenseOut)
async def undo_delete(expense_id: str, store: ExpenseStore = Depends(get_expense_store)):
    return await restore_expense(store, expense_id)
