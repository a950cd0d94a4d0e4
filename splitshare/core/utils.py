from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation, ROUND_HALF_EVEN, getcontext
from typing import Annotated

from pydantic import BeforeValidator, PlainSerializer

from splitshare.core.errors import AmountOutOfRangeError, ValidationError

getcontext().prec = 28
CENTS = Decimal("0.01")
ZERO = Decimal("0.00")

# Numeric(18, 2) columns
MAX_AMOUNT = Decimal("9999999999999999.99")
MAX_ID_LENGTH = 64


def qround(d: Decimal) -> Decimal:
    # half to even, same as format(d, ".2f")
    return d.quantize(CENTS, rounding=ROUND_HALF_EVEN)


def ensure_in_range(amount: Decimal) -> Decimal:
    if abs(amount) > MAX_AMOUNT:
        raise AmountOutOfRangeError(f"Amount {amount} exceeds the supported range")
    return amount


def parse_money(value) -> Decimal:
    """
    Parse a money amount into a Decimal with exactly two fractional digits.

    Accepts str, int, float and Decimal. Raises ValidationError when the value
    is not a finite number with at most two decimals and
    AmountOutOfRangeError when it is too large to store.
    """
    if isinstance(value, bool) or value is None:
        raise ValidationError(f"{value!r} is not a valid amount")

    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationError(f"{value!r} is not a valid amount")

    if not amount.is_finite():
        raise ValidationError(f"{value!r} is not a valid amount")

    ensure_in_range(amount)

    rounded = qround(amount)
    if rounded != amount:
        raise ValidationError(f"{value!r} has more than two decimal places")

    return rounded


def format_money(amount: Decimal) -> str:
    amount = qround(amount)
    if amount.is_zero():
        # never render "-0.00"
        amount = abs(amount)
    return f"{amount:.2f}"


Money = Annotated[
    Decimal,
    BeforeValidator(parse_money),
    PlainSerializer(format_money, return_type=str, when_used="json"),
]


def parse_identifier(value, label: str = "id") -> str:
    if not isinstance(value, str):
        raise ValidationError(f"Invalid {label}: expected a string")

    value = value.strip()
    if not value or len(value) > MAX_ID_LENGTH:
        raise ValidationError(f"Invalid {label}: {value!r}")

    return value


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(dt: datetime | None) -> datetime | None:
    # sqlite drops tzinfo on the way back
    if dt is not None and dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt
