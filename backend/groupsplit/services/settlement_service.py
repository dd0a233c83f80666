import uuid
from decimal import Decimal
from typing import Hashable, Mapping

from sqlalchemy.ext.asyncio import AsyncSession

from groupsplit.services.balance_service import aggregate, breakdown
from groupsplit.services.expense_service import get_group_ledger
from groupsplit.services.ledger import TOLERANCE, Transaction, round_money, to_decimal


def simplify(balances: Mapping[Hashable, object]) -> list[Transaction]:
    """
    Greedy settlement plan: the largest debtor pays the largest creditor
    until one side runs out. Produces at most creditors + debtors - 1
    transfers. Ties keep the input order (sorted() is stable).
    """
    debtors = []
    creditors = []
    for user_id, amount in balances.items():
        amount = round_money(to_decimal(amount))
        if amount >= TOLERANCE:
            creditors.append([user_id, amount])
        elif amount <= -TOLERANCE:
            debtors.append([user_id, -amount])

    debtors.sort(key=lambda x: x[1], reverse=True)
    creditors.sort(key=lambda x: x[1], reverse=True)

    result = []
    i, j = 0, 0
    while i < len(debtors) and j < len(creditors):
        debtor_id, debt_amount = debtors[i]
        creditor_id, credit_amount = creditors[j]
        transfer = min(debt_amount, credit_amount)
        if transfer > 0:
            result.append(Transaction(from_user=debtor_id, to_user=creditor_id, amount=round_money(transfer)))
        debtors[i][1] -= transfer
        creditors[j][1] -= transfer
        if debtors[i][1] < TOLERANCE:
            i += 1
        if creditors[j][1] < TOLERANCE:
            j += 1

    return result


async def calculate_group_balances(db: AsyncSession, group_id: uuid.UUID) -> dict:
    """
    Balances, settlement-aware breakdown and settlement plan for a group.
    The plan is computed from the raw balances, so it ignores settled flags.
    """
    members, expenses = await get_group_ledger(db, group_id)

    balances = aggregate(expenses, members)
    stats = breakdown(expenses, members)
    transactions = simplify(balances)

    return {
        "balances": balances,
        "breakdown": stats,
        "transactions": transactions,
        "total_expenses": round_money(sum((e.amount for e in expenses), Decimal("0"))),
    }
