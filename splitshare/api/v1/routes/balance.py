from typing import List

from fastapi import APIRouter, Depends

from splitshare.core.dependencies import get_expense_store
from splitshare.db.store import ExpenseStore
from splitshare.schemas.balances import GroupBalanceOut, MemberBalance
from splitshare.services.balance_service import group_balance, user_balance

router = APIRouter()


@router.get("/", response_model=List[GroupBalanceOut])
async def get_balances(group_id: str, store: ExpenseStore = Depends(get_expense_store)):
    members = await group_balance(store, group_id)
    if not members:
        return []
    return [GroupBalanceOut(group_id=group_id.strip(), members=members)]


@router.get("/users/{user_id}", response_model=MemberBalance)
async def get_user_balance(user_id: str, store: ExpenseStore = Depends(get_expense_store)):
    return await user_balance(store, user_id)
