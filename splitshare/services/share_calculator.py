import logging
from decimal import Decimal
from typing import List, Sequence

from splitshare.core.utils import ZERO, parse_money, qround
from splitshare.schemas.expense import UserShare

logger = logging.getLogger(__name__)


def equal_share(
    cost: str | Decimal,
    payer_id: str,
    group_members: Sequence[str],
) -> List[UserShare]:
    """
    Split cost equally across group_members, payer_id having paid all of it.

    Every member, the payer included, owes the common share rounded to
    cents. Members other than the payer come first, in input order; the
    payer's record comes last with a net balance of cost - common share.
    When cost does not divide evenly the nets sum to the leftover cents
    (at most half a cent per member). An empty group yields no shares.
    """
    if not group_members:
        return []

    cost = parse_money(cost)
    # we assume that the payer is a part of the group
    count = len(group_members)
    common_share = qround(cost / count)

    shares = [
        UserShare(
            user_id=user_id,
            paid_share=ZERO,
            owed_share=common_share,
            net_balance=ZERO - common_share,
        )
        for user_id in group_members
        if user_id != payer_id
    ]

    shares.append(
        UserShare(
            user_id=payer_id,
            paid_share=cost,
            owed_share=common_share,
            net_balance=cost - common_share,
        )
    )

    logger.debug("Split %s across %d members: common share %s", cost, count, common_share)
    return shares
