"""
In-memory ledger types consumed by the split, balance and settlement engines.

These are plain value objects: the ORM models convert into them (see
``Expense.to_ledger``) so the engines never touch a database session.
"""
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Hashable

CENT = Decimal("0.01")
TOLERANCE = Decimal("0.01")


class SplitType(str, Enum):
    equal = "equal"
    percentage = "percentage"
    exact = "exact"


def to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() first so floats like 33.3 don't drag binary noise along
    return Decimal(str(value))


def round_money(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class Split:
    user_id: Hashable
    share: Decimal
    settled: bool = False
    settled_at: datetime | None = None


@dataclass(frozen=True)
class Expense:
    paid_by: Hashable
    amount: Decimal
    splits: tuple[Split, ...] = ()
    split_type: SplitType = SplitType.equal
    currency: str = "USD"


@dataclass(frozen=True)
class Transaction:
    from_user: Hashable
    to_user: Hashable
    amount: Decimal


@dataclass
class UserBreakdown:
    """Settlement-aware view of one participant's position in a group."""

    paid: Decimal = Decimal("0")
    owed_to_them: Decimal = Decimal("0")
    settled_to_them: Decimal = Decimal("0")
    owes: Decimal = Decimal("0")
    settled_by_them: Decimal = Decimal("0")
    net_balance: Decimal = field(default=Decimal("0"))
