from datetime import datetime, timezone
from typing import Dict, List, Optional
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from splitshare.core.config import Settings
from splitshare.db.session import build_engine, build_sessionmaker, create_tables
from splitshare.main import create_app
from splitshare.schemas.expense import ExpenseOut, UserShare
from splitshare.schemas.group import GroupOut


class InMemoryExpenseStore:
    def __init__(self):
        self.expenses: Dict[str, ExpenseOut] = {}

    async def insert_expense(self, expense: ExpenseOut) -> ExpenseOut:
        stored = expense.model_copy(update={"id": expense.id or uuid4().hex}, deep=True)
        self.expenses[stored.id] = stored
        return stored.model_copy(deep=True)

    async def get_expense(self, expense_id: str) -> Optional[ExpenseOut]:
        expense = self.expenses.get(expense_id)
        return expense.model_copy(deep=True) if expense else None

    async def update_expense(self, expense_id: str, changes: dict, derive=None) -> Optional[ExpenseOut]:
        if expense_id not in self.expenses:
            return None
        if derive is not None:
            changes = {**changes, **derive(self.expenses[expense_id].model_copy(deep=True))}
        updated = self.expenses[expense_id].model_copy(update=changes, deep=True)
        self.expenses[expense_id] = updated
        return updated.model_copy(deep=True)

    async def list_expenses(self, group_id: str, limit: int, offset: int) -> List[ExpenseOut]:
        live = [
            e for e in self.expenses.values()
            if e.group_id == group_id and e.deleted_at is None
        ]
        live.sort(key=lambda e: e.created_at, reverse=True)
        return [e.model_copy(deep=True) for e in live[offset:offset + limit]]

    async def list_group_shares(self, group_id: str) -> List[UserShare]:
        return [
            share.model_copy()
            for e in self.expenses.values()
            if e.group_id == group_id and e.deleted_at is None
            for share in e.users
        ]

    async def list_user_shares(self, user_id: str) -> List[UserShare]:
        return [
            share.model_copy()
            for e in self.expenses.values()
            if e.deleted_at is None
            for share in e.users
            if share.user_id == user_id
        ]

    async def count_expenses(self) -> int:
        return sum(1 for e in self.expenses.values() if e.deleted_at is None)


class InMemoryGroupStore:
    def __init__(self):
        self.groups: Dict[str, GroupOut] = {}

    async def insert_group(self, group: GroupOut) -> GroupOut:
        stored = group.model_copy(update={"id": group.id or uuid4().hex}, deep=True)
        self.groups[stored.id] = stored
        return stored.model_copy(deep=True)

    async def get_group(self, group_id: str) -> Optional[GroupOut]:
        group = self.groups.get(group_id)
        return group.model_copy(deep=True) if group else None

    async def list_user_groups(self, user_id: str) -> List[GroupOut]:
        return [
            g.model_copy(deep=True)
            for g in self.groups.values()
            if any(m.id == user_id for m in g.members)
        ]

    async def count_groups(self) -> int:
        return len(self.groups)


@pytest.fixture
def expense_store():
    return InMemoryExpenseStore()


@pytest.fixture
def group_store():
    return InMemoryGroupStore()


@pytest.fixture
def now():
    return datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
async def db_session(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'store.db'}")
    await create_tables(engine)
    async with build_sessionmaker(engine)() as session:
        yield session
    await engine.dispose()


@pytest.fixture
def make_client(tmp_path):
    def factory(**overrides):
        settings = Settings(
            DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'api.db'}",
            DB_CONNECT_RETRIES=1,
            DB_CONNECT_DELAY=0,
            **overrides,
        )
        return TestClient(create_app(settings))

    return factory


@pytest.fixture
def client(make_client):
    with make_client() as c:
        yield c
