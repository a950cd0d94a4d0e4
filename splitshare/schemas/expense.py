from datetime import datetime
from typing import List, Literal

from pydantic import Field, field_validator, model_validator

from splitshare.core.utils import ZERO, Money, parse_identifier
from splitshare.schemas.base import CamelModel
from splitshare.schemas.user import User

RepeatInterval = Literal["never", "weekly", "fortnightly", "monthly", "yearly"]


class UserShare(CamelModel):
    """
    One participant's part of an expense.

    net_balance is always paid_share - owed_share. It is computed when
    omitted and rejected when it disagrees.
    """

    user_id: str
    paid_share: Money = ZERO
    owed_share: Money = ZERO
    net_balance: Money | None = None

    @field_validator("user_id", mode="before")
    @classmethod
    def check_user_id(cls, value):
        return parse_identifier(value, "user id")

    @model_validator(mode="after")
    def check_net_balance(self):
        expected = self.paid_share - self.owed_share
        if self.net_balance is None:
            self.net_balance = expected
        elif self.net_balance != expected:
            raise ValueError(
                f"netBalance {self.net_balance} must equal paidShare - owedShare ({expected})"
            )
        return self


class ExpenseCreate(CamelModel):
    cost: Money
    group_id: str
    user: User
    description: str | None = None
    details: str | None = None
    date: datetime | None = None
    repeat_interval: RepeatInterval | None = None
    currency_code: str | None = None

    @field_validator("cost")
    @classmethod
    def check_cost(cls, value):
        if value < 0:
            raise ValueError("cost must not be negative")
        return value

    @field_validator("group_id", mode="before")
    @classmethod
    def check_group_id(cls, value):
        return parse_identifier(value, "group id")


class ExpenseUpdate(CamelModel):
    # null and absent are treated the same: the stored field is kept
    cost: Money | None = None
    description: str | None = None
    details: str | None = None
    date: datetime | None = None
    repeat_interval: RepeatInterval | None = None
    currency_code: str | None = None
    group_id: str | None = None
    users: List[UserShare] | None = None

    @field_validator("cost")
    @classmethod
    def check_cost(cls, value):
        if value is not None and value < 0:
            raise ValueError("cost must not be negative")
        return value

    @field_validator("group_id", mode="before")
    @classmethod
    def check_group_id(cls, value):
        if value is None:
            return value
        return parse_identifier(value, "group id")

    def changes(self) -> dict:
        return {
            name: getattr(self, name)
            for name in self.model_fields_set
            if getattr(self, name) is not None
        }


class ExpenseOut(CamelModel):
    id: str | None = None
    cost: Money
    description: str | None = None
    details: str | None = None
    date: datetime | None = None
    repeat_interval: RepeatInterval | None = None
    currency_code: str | None = None
    group_id: str
    created_by: User
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None
    users: List[UserShare] = Field(default_factory=list)
