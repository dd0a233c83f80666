import logging
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Mapping

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from groupsplit.core.errors import NotFoundError, PermissionDeniedError, ValidationError
from groupsplit.models.expense import Expense, ExpenseSplit
from groupsplit.models.group import Group
from groupsplit.services import ledger
from groupsplit.services.ledger import SplitType
from groupsplit.services.split_service import allocate

logger = logging.getLogger(__name__)


async def get_member_group(db: AsyncSession, group_id: uuid.UUID, user_id: uuid.UUID) -> Group:
    group = await db.get(Group, group_id)
    if not group:
        raise NotFoundError("Group not found")
    if user_id not in group.member_ids:
        raise PermissionDeniedError("Not a member of this group")
    return group


async def create_expense(
    db: AsyncSession,
    group_id: uuid.UUID,
    paid_by: uuid.UUID,
    title: str,
    amount: Decimal,
    split_type: SplitType | str,
    split_details: Mapping[uuid.UUID, Decimal] | None = None,
    currency: str = "USD",
    category: str | None = None,
    notes: str | None = None,
) -> Expense:
    group = await get_member_group(db, group_id, paid_by)
    members = group.member_ids

    for user_id in (split_details or {}):
        if user_id not in members:
            raise ValidationError(f"User {user_id} is not a member of this group")

    try:
        shares = allocate(amount, split_type, members, split_details)
    except ValidationError as e:
        logger.warning(f"Rejected expense for group {group_id}: {e}")
        raise

    expense = Expense(
        group_id=group_id,
        paid_by=paid_by,
        title=title.strip(),
        amount=sum((s.share for s in shares), Decimal("0")),
        currency=currency.upper(),
        split_type=SplitType(split_type),
        category=category or "general",
        notes=notes,
        splits=[
            ExpenseSplit(user_id=s.user_id, share=s.share, position=i)
            for i, s in enumerate(shares)
        ],
    )
    db.add(expense)
    await db.commit()
    await db.refresh(expense)
    logger.info(f"Expense {expense.id} ({expense.currency} {expense.amount}) added to group {group_id}")
    return expense


async def list_group_expenses(db: AsyncSession, group_id: uuid.UUID) -> list[Expense]:
    result = await db.execute(
        select(Expense)
        .where(Expense.group_id == group_id)
        .order_by(Expense.created_at.desc())
    )
    return list(result.scalars().all())


async def delete_expense(db: AsyncSession, expense_id: uuid.UUID, user_id: uuid.UUID) -> None:
    expense = await db.get(Expense, expense_id)
    if not expense:
        raise NotFoundError("Expense not found")
    if expense.paid_by != user_id:
        raise PermissionDeniedError("Not authorized to delete this expense")
    await db.delete(expense)
    await db.commit()
    logger.info(f"Expense {expense_id} deleted by {user_id}")


async def settle_split(
    db: AsyncSession, expense_id: uuid.UUID, user_id: uuid.UUID, acting_user_id: uuid.UUID
) -> ExpenseSplit:
    """
    Mark one user's share of an expense as paid back. Either the debtor or
    the payer may do this. Settling twice keeps the first timestamp.
    """
    expense = await db.get(Expense, expense_id)
    if not expense:
        raise NotFoundError("Expense not found")
    if acting_user_id not in (user_id, expense.paid_by):
        raise PermissionDeniedError("Only the payer or the debtor can settle this share")

    split = next((s for s in expense.splits if s.user_id == user_id), None)
    if split is None:
        raise NotFoundError("Split not found")
    if split.user_id == expense.paid_by:
        raise ValidationError("The payer's own share cannot be settled")

    if not split.settled:
        split.settled = True
        split.settled_at = datetime.now(timezone.utc)
        await db.commit()
        await db.refresh(split)
        logger.info(f"Split of {user_id} on expense {expense_id} marked settled")
    return split


async def get_group_ledger(db: AsyncSession, group_id: uuid.UUID) -> tuple[list[uuid.UUID], list[ledger.Expense]]:
    """Group members plus the group's whole expense history as ledger values."""
    group = await db.get(Group, group_id)
    if not group:
        raise NotFoundError("Group not found")
    expenses = await list_group_expenses(db, group_id)
    return group.member_ids, [e.to_ledger() for e in expenses]
