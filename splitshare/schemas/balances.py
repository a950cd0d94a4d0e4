from typing import List

from splitshare.core.utils import Money
from splitshare.schemas.base import CamelModel


class MemberBalance(CamelModel):
    user_id: str
    paid_share: Money
    owed_share: Money
    net_balance: Money


class GroupBalanceOut(CamelModel):
    group_id: str
    members: List[MemberBalance]
