from decimal import Decimal
from typing import Dict, Iterable, List

from splitshare.core.utils import ZERO, ensure_in_range, parse_identifier, qround
from splitshare.db.store import ExpenseStore
from splitshare.schemas.balances import MemberBalance
from splitshare.schemas.expense import UserShare


def aggregate_balances(shares: Iterable[UserShare]) -> List[MemberBalance]:
    """
    Fold share records into one balance per user.

    Sums are exact Decimal sums, rounded once at the end. Users appear in
    the order of their first share.
    """
    paid: Dict[str, Decimal] = {}
    owed: Dict[str, Decimal] = {}
    net: Dict[str, Decimal] = {}

    for share in shares:
        uid = share.user_id
        paid[uid] = paid.get(uid, Decimal("0")) + share.paid_share
        owed[uid] = owed.get(uid, Decimal("0")) + share.owed_share
        net[uid] = net.get(uid, Decimal("0")) + share.net_balance

    return [
        MemberBalance(
            user_id=uid,
            paid_share=ensure_in_range(qround(paid[uid])),
            owed_share=ensure_in_range(qround(owed[uid])),
            net_balance=ensure_in_range(qround(net[uid])),
        )
        for uid in paid
    ]


async def group_balance(store: ExpenseStore, group_id: str) -> List[MemberBalance]:
    group_id = parse_identifier(group_id, "group id")
    shares = await store.list_group_shares(group_id)
    return aggregate_balances(shares)


async def user_balance(store: ExpenseStore, user_id: str) -> MemberBalance:
    """A user's totals over every non-deleted expense they share, in any group."""
    user_id = parse_identifier(user_id, "user id")
    balances = aggregate_balances(await store.list_user_shares(user_id))

    if not balances:
        return MemberBalance(user_id=user_id, paid_share=ZERO, owed_share=ZERO, net_balance=ZERO)

    return balances[0]
