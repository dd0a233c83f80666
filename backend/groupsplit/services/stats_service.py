import uuid
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from groupsplit.models.group import GroupMember
from groupsplit.services.balance_service import user_balance
from groupsplit.services.expense_service import get_group_ledger
from groupsplit.services.ledger import round_money


async def get_user_stats(db: AsyncSession, user_id: uuid.UUID) -> dict:
    """
    Totals for one user across every group they belong to.
    total_owed = what the user paid for, total_owing = the user's shares,
    overall_balance = total_owed - total_owing (positive = owed money).
    """
    result = await db.execute(
        select(GroupMember.group_id).where(GroupMember.user_id == user_id)
    )
    group_ids = list(result.scalars().all())

    total_owed = Decimal("0")
    total_owing = Decimal("0")
    total_expenses = 0

    for group_id in group_ids:
        _, expenses = await get_group_ledger(db, group_id)
        owes, is_owed = user_balance(expenses, user_id)
        total_owed += is_owed
        total_owing += owes
        total_expenses += sum(
            1 for e in expenses
            if e.paid_by == user_id or any(s.user_id == user_id for s in e.splits)
        )

    return {
        "total_groups": len(group_ids),
        "total_expenses": total_expenses,
        "total_owed": round_money(total_owed),
        "total_owing": round_money(total_owing),
        "overall_balance": round_money(total_owed - total_owing),
    }
