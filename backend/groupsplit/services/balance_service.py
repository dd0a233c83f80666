"""
Two views of a group's balances, computed from the expense ledger.

aggregate():  raw net balance, payer credit minus split shares, settled or not.
              This is what debt simplification runs on.
breakdown():  settlement-aware statistics for display, keeping what has
              already been settled apart from what is still outstanding.

Both accumulate in full precision and round to cents only on output.
"""
from collections import defaultdict
from decimal import Decimal
from typing import Hashable, Iterable

from groupsplit.services.ledger import Expense, UserBreakdown, round_money


def aggregate(expenses: Iterable[Expense], participants: Iterable[Hashable]) -> dict[Hashable, Decimal]:
    """Positive balance = is owed money, negative = owes money."""
    net: dict = {uid: Decimal("0") for uid in participants}

    for expense in expenses:
        net[expense.paid_by] = net.get(expense.paid_by, Decimal("0")) + expense.amount
        for split in expense.splits:
            net[split.user_id] = net.get(split.user_id, Decimal("0")) - split.share

    return {uid: round_money(amount) for uid, amount in net.items()}


def breakdown(expenses: Iterable[Expense], participants: Iterable[Hashable]) -> dict[Hashable, UserBreakdown]:
    totals: dict = defaultdict(UserBreakdown, {uid: UserBreakdown() for uid in participants})

    for expense in expenses:
        payer = totals[expense.paid_by]
        payer.paid += expense.amount
        for split in expense.splits:
            # The payer's own share is neither owed to nor by anyone.
            if split.user_id == expense.paid_by:
                continue
            member = totals[split.user_id]
            if split.settled:
                payer.settled_to_them += split.share
                member.settled_by_them += split.share
            else:
                payer.owed_to_them += split.share
                member.owes += split.share

    result = {}
    for uid, data in totals.items():
        result[uid] = UserBreakdown(
            paid=round_money(data.paid),
            owed_to_them=round_money(data.owed_to_them),
            settled_to_them=round_money(data.settled_to_them),
            owes=round_money(data.owes),
            settled_by_them=round_money(data.settled_by_them),
            net_balance=round_money(data.owed_to_them - data.owes),
        )
    return result


def user_balance(expenses: Iterable[Expense], user_id: Hashable) -> tuple[Decimal, Decimal]:
    """
    Returns (owes, is_owed) for one user: the sum of the user's shares and
    the sum of the expenses the user paid for.
    """
    owes = Decimal("0")
    is_owed = Decimal("0")
    for expense in expenses:
        if expense.paid_by == user_id:
            is_owed += expense.amount
        for split in expense.splits:
            if split.user_id == user_id:
                owes += split.share
    return round_money(owes), round_money(is_owed)
