from typing import Callable, List, Optional, Protocol

from splitshare.schemas.expense import ExpenseOut, UserShare
from splitshare.schemas.group import GroupOut

# current expense -> further changes, computed under the update's lock
Derive = Callable[[ExpenseOut], dict]


class ExpenseStore(Protocol):
    async def insert_expense(self, expense: ExpenseOut) -> ExpenseOut:
        """Persist a new expense and return it with its generated id."""

    async def get_expense(self, expense_id: str) -> Optional[ExpenseOut]:
        ...

    async def update_expense(
        self,
        expense_id: str,
        changes: dict,
        derive: Optional[Derive] = None,
    ) -> Optional[ExpenseOut]:
        """
        Apply changes (field name -> new value) in one atomic step.

        derive, when given, is called with the expense as read inside that
        step and its result is applied on top of changes.
        Returns the updated expense, or None when it does not exist.
        """

    async def list_expenses(self, group_id: str, limit: int, offset: int) -> List[ExpenseOut]:
        """Non-deleted expenses of a group, newest first."""

    async def list_group_shares(self, group_id: str) -> List[UserShare]:
        """Every share of every non-deleted expense of a group."""

    async def list_user_shares(self, user_id: str) -> List[UserShare]:
        """Every share a user holds in non-deleted expenses, across groups."""

    async def count_expenses(self) -> int:
        ...


class GroupStore(Protocol):
    async def insert_group(self, group: GroupOut) -> GroupOut:
        ...

    async def get_group(self, group_id: str) -> Optional[GroupOut]:
        ...

    async def list_user_groups(self, user_id: str) -> List[GroupOut]:
        ...

    async def count_groups(self) -> int:
        ...
