from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from splitshare.core.utils import as_utc
from splitshare.db.store import Derive
from splitshare.models.expense import Expense
from splitshare.models.expense_share import ExpenseShare
from splitshare.models.group import Group
from splitshare.models.group_member import GroupMember
from splitshare.schemas.expense import ExpenseOut, UserShare
from splitshare.schemas.group import GroupOut
from splitshare.schemas.user import User


def _share_rows(shares: List[UserShare]) -> List[ExpenseShare]:
    return [
        ExpenseShare(
            position=position,
            user_id=share.user_id,
            paid_share=share.paid_share,
            owed_share=share.owed_share,
            net_balance=share.net_balance,
        )
        for position, share in enumerate(shares)
    ]


def _to_share(row: ExpenseShare) -> UserShare:
    return UserShare(
        user_id=row.user_id,
        paid_share=row.paid_share,
        owed_share=row.owed_share,
        net_balance=row.net_balance,
    )


def _to_expense(row: Expense) -> ExpenseOut:
    return ExpenseOut(
        id=row.id,
        cost=row.cost,
        description=row.description,
        details=row.details,
        date=as_utc(row.date),
        repeat_interval=row.repeat_interval,
        currency_code=row.currency_code,
        group_id=row.group_id,
        created_by=User.model_validate(row.created_by),
        created_at=as_utc(row.created_at),
        updated_at=as_utc(row.updated_at),
        deleted_at=as_utc(row.deleted_at),
        users=[_to_share(s) for s in row.shares],
    )


def _to_group(row: Group) -> GroupOut:
    return GroupOut(
        id=row.id,
        name=row.name,
        group_type=row.group_type,
        simplify_by_default=row.simplify_by_default,
        updated_at=as_utc(row.updated_at),
        members=[
            User(id=m.user_id, first_name=m.first_name, last_name=m.last_name, email=m.email)
            for m in row.members
        ],
    )


class SqlExpenseStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def insert_expense(self, expense: ExpenseOut) -> ExpenseOut:
        row = Expense(
            group_id=expense.group_id,
            cost=expense.cost,
            description=expense.description,
            details=expense.details,
            date=expense.date,
            repeat_interval=expense.repeat_interval,
            currency_code=expense.currency_code,
            created_by=expense.created_by.model_dump(mode="json", by_alias=True, exclude_none=True),
            created_at=expense.created_at,
            updated_at=expense.updated_at,
            deleted_at=expense.deleted_at,
            shares=_share_rows(expense.users),
        )
        if expense.id:
            row.id = expense.id

        self.db.add(row)
        await self.db.commit()
        return _to_expense(row)

    async def get_expense(self, expense_id: str) -> Optional[ExpenseOut]:
        q = select(Expense).where(Expense.id == expense_id)
        res = await self.db.execute(q)
        row = res.scalar_one_or_none()
        return _to_expense(row) if row else None

    async def update_expense(
        self,
        expense_id: str,
        changes: dict,
        derive: Optional[Derive] = None,
    ) -> Optional[ExpenseOut]:
        q = select(Expense).where(Expense.id == expense_id).with_for_update()
        res = await self.db.execute(q)
        row = res.scalar_one_or_none()

        if row is None:
            await self.db.rollback()
            return None

        if derive is not None:
            changes = {**changes, **derive(_to_expense(row))}

        for field, value in changes.items():
            if field == "users":
                row.shares = _share_rows(value)
            elif field == "created_by":
                row.created_by = value.model_dump(mode="json", by_alias=True, exclude_none=True)
            else:
                setattr(row, field, value)

        await self.db.commit()
        return _to_expense(row)

    async def list_expenses(self, group_id: str, limit: int, offset: int) -> List[ExpenseOut]:
        q = (
            select(Expense)
            .where(Expense.group_id == group_id, Expense.deleted_at.is_(None))
            .order_by(Expense.created_at.desc(), Expense.id.desc())
            .limit(limit)
            .offset(offset)
        )
        res = await self.db.execute(q)
        return [_to_expense(row) for row in res.scalars().all()]

    async def list_group_shares(self, group_id: str) -> List[UserShare]:
        q = (
            select(ExpenseShare)
            .join(Expense, Expense.id == ExpenseShare.expense_id)
            .where(Expense.group_id == group_id, Expense.deleted_at.is_(None))
            .order_by(Expense.created_at, Expense.id, ExpenseShare.position)
        )
        res = await self.db.execute(q)
        return [_to_share(row) for row in res.scalars().all()]

    async def list_user_shares(self, user_id: str) -> List[UserShare]:
        q = (
            select(ExpenseShare)
            .join(Expense, Expense.id == ExpenseShare.expense_id)
            .where(ExpenseShare.user_id == user_id, Expense.deleted_at.is_(None))
            .order_by(Expense.created_at, Expense.id, ExpenseShare.position)
        )
        res = await self.db.execute(q)
        return [_to_share(row) for row in res.scalars().all()]

    async def count_expenses(self) -> int:
        q = select(func.count(Expense.id)).where(Expense.deleted_at.is_(None))
        res = await self.db.execute(q)
        return res.scalar()


class SqlGroupStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def insert_group(self, group: GroupOut) -> GroupOut:
        row = Group(
            name=group.name,
            group_type=group.group_type,
            simplify_by_default=group.simplify_by_default,
            updated_at=group.updated_at,
            members=[
                GroupMember(
                    user_id=m.id,
                    first_name=m.first_name,
                    last_name=m.last_name,
                    email=m.email,
                )
                for m in group.members
            ],
        )
        if group.id:
            row.id = group.id

        self.db.add(row)
        await self.db.commit()
        return _to_group(row)

    async def get_group(self, group_id: str) -> Optional[GroupOut]:
        q = select(Group).where(Group.id == group_id)
        res = await self.db.execute(q)
        row = res.scalar_one_or_none()
        return _to_group(row) if row else None

    async def list_user_groups(self, user_id: str) -> List[GroupOut]:
        q = (
            select(Group)
            .join(GroupMember)
            .where(GroupMember.user_id == user_id)
            .order_by(Group.created_at, Group.id)
        )
        res = await self.db.execute(q)
        return [_to_group(row) for row in res.scalars().all()]

    async def count_groups(self) -> int:
        res = await self.db.execute(select(func.count(Group.id)))
        return res.scalar()
