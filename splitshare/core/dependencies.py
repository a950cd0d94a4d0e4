from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from splitshare.core.config import Settings
from splitshare.db.sql_store import SqlExpenseStore, SqlGroupStore
from splitshare.db.store import ExpenseStore, GroupStore
from splitshare.services.group_services import MemberResolver, group_roster, payer_only


async def get_db(request: Request):
    async with request.app.state.session_factory() as session:
        yield session


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_expense_store(db: AsyncSession = Depends(get_db)) -> ExpenseStore:
    return SqlExpenseStore(db)


def get_group_store(db: AsyncSession = Depends(get_db)) -> GroupStore:
    return SqlGroupStore(db)


def get_member_resolver(
    settings: Settings = Depends(get_settings),
    groups: GroupStore = Depends(get_group_store),
) -> MemberResolver:
    if settings.SPLIT_MODE == "group":
        return group_roster(groups)
    return payer_only
