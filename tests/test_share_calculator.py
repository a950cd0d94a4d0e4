from decimal import Decimal

import pytest

from splitshare.core.errors import AmountOutOfRangeError, ValidationError
from splitshare.core.utils import format_money
from splitshare.services.share_calculator import equal_share


def _by_user(shares):
    return {share.user_id: share for share in shares}


def _as_text(share):
    return (
        format_money(share.paid_share),
        format_money(share.owed_share),
        format_money(share.net_balance),
    )


def test_three_way_split():
    shares = _by_user(equal_share("42.00", "1", ["1", "2", "3"]))

    assert len(shares) == 3
    assert _as_text(shares["1"]) == ("42.00", "14.00", "28.00")
    assert _as_text(shares["2"]) == ("0.00", "14.00", "-14.00")
    assert _as_text(shares["3"]) == ("0.00", "14.00", "-14.00")


def test_four_way_split():
    shares = _by_user(equal_share("42.00", "1", ["1", "2", "3", "4"]))

    assert len(shares) == 4
    assert _as_text(shares["1"]) == ("42.00", "10.50", "31.50")
    for uid in ("2", "3", "4"):
        assert _as_text(shares[uid]) == ("0.00", "10.50", "-10.50")


def test_single_member_group():
    shares = equal_share("42.00", "u1", ["u1"])

    assert len(shares) == 1
    assert shares[0].user_id == "u1"
    assert _as_text(shares[0]) == ("42.00", "42.00", "0.00")


def test_empty_group_has_no_shares():
    assert equal_share("42.00", "u1", []) == []


def test_payer_is_listed_last_and_others_keep_order():
    shares = equal_share("30.00", "b", ["a", "b", "c"])
    assert [s.user_id for s in shares] == ["a", "c", "b"]


@pytest.mark.parametrize("cost", ["0.00", "0.01", "1.00", "10.00", "99.99", "100.00", "12345.67"])
@pytest.mark.parametrize("size", [1, 2, 3, 6, 7, 13])
def test_net_balances_sum_to_zero_within_rounding(cost, size):
    members = [str(i) for i in range(size)]
    shares = equal_share(cost, "0", members)

    assert len(shares) == size
    # each owed share is off by at most half a cent
    assert abs(sum(s.net_balance for s in shares)) <= Decimal("0.005") * size
    for s in shares:
        assert s.net_balance == s.paid_share - s.owed_share


@pytest.mark.parametrize("cost", ["0.01", "0.03", "10.00", "99.99", "12345.67"])
def test_two_way_split_is_off_by_at_most_a_cent(cost):
    shares = equal_share(cost, "1", ["1", "2"])
    assert abs(sum(s.net_balance for s in shares)) <= Decimal("0.01")


def test_payer_owes_the_common_share():
    shares = _by_user(equal_share("10.00", "1", ["1", "2", "3"]))

    assert _as_text(shares["1"]) == ("10.00", "3.33", "6.67")
    assert _as_text(shares["2"]) == ("0.00", "3.33", "-3.33")
    assert _as_text(shares["3"]) == ("0.00", "3.33", "-3.33")
    assert sum(s.net_balance for s in shares.values()) == Decimal("0.01")


def test_rounded_up_share_leaves_a_negative_leftover():
    shares = _by_user(equal_share("2.00", "1", ["1", "2", "3"]))

    assert _as_text(shares["1"]) == ("2.00", "0.67", "1.33")
    assert _as_text(shares["2"]) == ("0.00", "0.67", "-0.67")
    assert sum(s.net_balance for s in shares.values()) == Decimal("-0.01")


@pytest.mark.parametrize(
    "cost, owed, payer_net",
    [("0.25", "0.12", "0.13"), ("0.35", "0.18", "0.17"), ("0.01", "0.00", "0.01")],
)
def test_half_cent_ties_round_to_even(cost, owed, payer_net):
    shares = _by_user(equal_share(cost, "1", ["1", "2"]))

    assert shares["2"].owed_share == Decimal(owed)
    assert shares["1"].owed_share == Decimal(owed)
    assert shares["1"].net_balance == Decimal(payer_net)


def test_accepts_decimal_cost():
    shares = _by_user(equal_share(Decimal("42"), "1", ["1", "2"]))
    assert _as_text(shares["1"]) == ("42.00", "21.00", "21.00")


def test_zero_cost_never_renders_negative_zero():
    shares = equal_share("0.00", "1", ["1", "2"])
    assert all(_as_text(s) == ("0.00", "0.00", "0.00") for s in shares)


@pytest.mark.parametrize("cost", ["abc", "", "12.345", "NaN", "Infinity"])
def test_rejects_malformed_cost(cost):
    with pytest.raises(ValidationError):
        equal_share(cost, "1", ["1", "2"])


def test_rejects_cost_out_of_range():
    with pytest.raises(AmountOutOfRangeError):
        equal_share("100000000000000000.00", "1", ["1", "2"])
