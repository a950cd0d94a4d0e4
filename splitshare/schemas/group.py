from datetime import datetime
from typing import List, Literal

from pydantic import Field, field_validator

from splitshare.core.utils import parse_identifier
from splitshare.schemas.base import CamelModel
from splitshare.schemas.user import User

GroupType = Literal["apartment", "house", "trip", "other"]


class GroupUser(CamelModel):
    user_id: str
    first_name: str | None = None

    @field_validator("user_id", mode="before")
    @classmethod
    def check_user_id(cls, value):
        return parse_identifier(value, "user id")

    def to_user(self) -> User:
        return User(id=self.user_id, first_name=self.first_name)


class GroupCreate(CamelModel):
    name: str = Field(min_length=1)
    group_type: GroupType | None = None
    users: List[GroupUser] | None = None


class GroupOut(CamelModel):
    id: str | None = None
    name: str
    group_type: GroupType | None = None
    simplify_by_default: bool = True
    updated_at: datetime | None = None
    members: List[User] = Field(default_factory=list)
