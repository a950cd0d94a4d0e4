from fastapi import APIRouter, Depends, Request

from splitshare.core.dependencies import get_expense_store, get_group_store
from splitshare.db.store import ExpenseStore, GroupStore
from splitshare.services.system_services import check_db_service, system_health, system_metrics

router = APIRouter()


@router.get("/health/db")
async def check_db(request: Request):
    return await check_db_service(request.app.state.engine)


@router.get("/metrics")
async def metrics(
    groups: GroupStore = Depends(get_group_store),
    expenses: ExpenseStore = Depends(get_expense_store),
):
    return await system_metrics(groups, expenses)


@router.get("/health")
async def health():
    return await system_health()
