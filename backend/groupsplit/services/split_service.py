from decimal import Decimal
from typing import Hashable, Iterable, Mapping

from groupsplit.core.errors import ValidationError
from groupsplit.services.ledger import Split, SplitType, TOLERANCE, round_money, to_decimal

# amounts are stored as Numeric(12, 2)
MAX_AMOUNT = Decimal("9999999999.99")


def allocate(
    amount,
    split_type: SplitType | str,
    participants: Iterable[Hashable] | None,
    details: Mapping[Hashable, object] | None = None,
) -> list[Split]:
    """
    Split ``amount`` into per-user shares that sum EXACTLY to ``amount``.

    equal:      amount / n each, rounded to cents.
    percentage: details maps user -> percent; percents must total 100 (+/- 0.01).
    exact:      details maps user -> share; shares must total amount (+/- 0.01).

    Whatever cents rounding leaves over go to the first user in iteration
    order, so the same input always yields the same shares.

    Raises ValidationError for any malformed input.
    """
    amount = _parse(amount, "Invalid expense amount")
    # quantize() fails on values past the context precision, so only round in range.
    if abs(amount) <= MAX_AMOUNT:
        amount = round_money(amount)
    if amount <= 0:
        raise ValidationError("Invalid expense amount")
    if amount > MAX_AMOUNT:
        raise ValidationError(f"Expense amount cannot exceed {MAX_AMOUNT}")

    try:
        split_type = SplitType(split_type)
    except ValueError:
        raise ValidationError(f"Invalid split type: {split_type}")

    if split_type == SplitType.equal:
        users = _unique(participants or [])
        if not users:
            raise ValidationError("No users provided for split calculation")
        share = round_money(amount / len(users))
        shares = {uid: share for uid in users}
    else:
        values = _parse_details(details, split_type)
        if split_type == SplitType.percentage:
            total_pct = sum(values.values(), Decimal("0"))
            if abs(total_pct - 100) > TOLERANCE:
                raise ValidationError(f"Total percentage must equal 100 (got {total_pct})")
            shares = {uid: round_money(amount * pct / 100) for uid, pct in values.items()}
        else:
            total_exact = sum(values.values(), Decimal("0"))
            if abs(total_exact - amount) > TOLERANCE:
                raise ValidationError(
                    f"Total shares must equal expense amount (got {total_exact}, expected {amount})"
                )
            shares = {uid: round_money(value) for uid, value in values.items()}

    _absorb_remainder(shares, amount)
    splits = [Split(user_id=uid, share=share) for uid, share in shares.items()]
    _check_allocation(splits, amount)
    return splits


def _parse(value, message: str) -> Decimal:
    try:
        parsed = to_decimal(value)
    except (ArithmeticError, TypeError, ValueError):
        raise ValidationError(message)
    if not parsed.is_finite():
        raise ValidationError(message)
    return parsed


def _unique(users: Iterable[Hashable]) -> list[Hashable]:
    users = list(users)
    if len(set(users)) != len(users):
        raise ValidationError("Each user can appear only once in a split")
    return users


def _parse_details(details, split_type: SplitType) -> dict[Hashable, Decimal]:
    if not details:
        raise ValidationError(f"Please provide split details for {split_type.value} split")
    values = {}
    for uid, raw in details.items():
        value = _parse(raw, f"Invalid {split_type.value} value for user {uid}")
        if value < 0:
            raise ValidationError(f"Negative {split_type.value} value for user {uid}")
        values[uid] = value
    return values


def _absorb_remainder(shares: dict[Hashable, Decimal], amount: Decimal) -> None:
    remainder = amount - sum(shares.values(), Decimal("0"))
    if not remainder:
        return
    # First user that can take the remainder without going negative; with an
    # equal or percentage split that is always the first user.
    for uid, share in shares.items():
        if share + remainder >= 0:
            shares[uid] = share + remainder
            return
    raise AssertionError(f"Cannot reconcile remainder {remainder} against {amount}")


def _check_allocation(splits: list[Split], amount: Decimal) -> None:
    total = sum((s.share for s in splits), Decimal("0"))
    if total != amount or any(s.share < 0 for s in splits):
        raise AssertionError(f"Allocation drifted: shares total {total}, expense is {amount}")
