import logging
from datetime import datetime
from decimal import Decimal
from typing import List

from splitshare.core.errors import NotFoundError
from splitshare.core.utils import parse_identifier, utcnow
from splitshare.db.store import ExpenseStore
from splitshare.schemas.expense import ExpenseCreate, ExpenseOut, ExpenseUpdate, UserShare
from splitshare.services.group_services import MemberResolver
from splitshare.services.share_calculator import equal_share

logger = logging.getLogger(__name__)


def build_expense(data: ExpenseCreate, members: List[str], now: datetime) -> ExpenseOut:
    """
    Assemble a new expense record: the payer paid the whole cost and it is
    split equally across members.
    """
    shares = equal_share(data.cost, data.user.id, members)

    return ExpenseOut(
        cost=data.cost,
        description=data.description,
        details=data.details,
        date=data.date or now,
        repeat_interval=data.repeat_interval,
        currency_code=data.currency_code,
        group_id=data.group_id,
        created_by=data.user,
        created_at=now,
        updated_at=now,
        users=shares,
    )


def recompute_shares(expense: ExpenseOut, cost: Decimal) -> List[UserShare]:
    # same membership as the stored split, same payer
    members = [share.user_id for share in expense.users]
    payer_id = expense.created_by.id
    if payer_id not in members:
        # a users patch may have dropped the payer
        members.append(payer_id)
    return equal_share(cost, payer_id, members)


async def create_expense(
    store: ExpenseStore,
    data: ExpenseCreate,
    resolve_members: MemberResolver,
    now: datetime | None = None,
) -> ExpenseOut:
    members = await resolve_members(data.group_id, data.user)
    expense = build_expense(data, members, now or utcnow())
    expense = await store.insert_expense(expense)

    logger.info(
        "Created expense %s in group %s: cost %s split across %d members",
        expense.id, expense.group_id, expense.cost, len(members),
    )
    return expense


async def get_expense(store: ExpenseStore, expense_id: str) -> ExpenseOut:
    expense_id = parse_identifier(expense_id, "expense id")
    expense = await store.get_expense(expense_id)

    if expense is None:
        raise NotFoundError(f"Expense {expense_id} not found")

    return expense


async def list_expenses(
    store: ExpenseStore,
    group_id: str,
    limit: int = 20,
    offset: int = 0,
) -> List[ExpenseOut]:
    group_id = parse_identifier(group_id, "group id")
    return await store.list_expenses(group_id, limit=limit, offset=offset)


async def update_expense(
    store: ExpenseStore,
    expense_id: str,
    patch: ExpenseUpdate,
    recompute: bool = True,
    now: datetime | None = None,
) -> ExpenseOut:
    """
    Apply a partial patch to a stored expense and refresh updated_at.

    When recompute is set and the patch changes cost without supplying users,
    the shares are split again over the stored membership, inside the same
    store update. Otherwise shares are only replaced when the patch carries
    them.
    """
    expense_id = parse_identifier(expense_id, "expense id")
    changes = patch.changes()

    derive = None
    if recompute and "cost" in changes and "users" not in changes:
        cost = changes["cost"]

        def derive(current: ExpenseOut) -> dict:
            return {"users": recompute_shares(current, cost)}

    changes["updated_at"] = now or utcnow()

    expense = await store.update_expense(expense_id, changes, derive=derive)
    if expense is None:
        raise NotFoundError(f"Expense {expense_id} not found")

    logger.info("Updated expense %s: %s", expense_id, sorted(changes))
    return expense


async def delete_expense(
    store: ExpenseStore,
    expense_id: str,
    now: datetime | None = None,
) -> ExpenseOut:
    expense = await get_expense(store, expense_id)
    if expense.deleted_at is not None:
        return expense

    expense = await store.update_expense(expense.id, {"deleted_at": now or utcnow()})
    if expense is None:
        raise NotFoundError(f"Expense {expense_id} not found")

    logger.info("Deleted expense %s", expense.id)
    return expense


async def restore_expense(store: ExpenseStore, expense_id: str) -> ExpenseOut:
    expense = await get_expense(store, expense_id)
    if expense.deleted_at is None:
        return expense

    expense = await store.update_expense(expense.id, {"deleted_at": None})
    if expense is None:
        raise NotFoundError(f"Expense {expense_id} not found")

    logger.info("Restored expense %s", expense.id)
    return expense
