from pydantic import field_validator

from splitshare.core.utils import parse_identifier
from splitshare.schemas.base import CamelModel


class User(CamelModel):
    id: str
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def check_id(cls, value):
        return parse_identifier(value, "user id")
