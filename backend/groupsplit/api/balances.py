import uuid
from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from groupsplit.core.auth import get_current_user
from groupsplit.core.database import get_db
from groupsplit.core.errors import NotFoundError, PermissionDeniedError
from groupsplit.models.user import User
from groupsplit.schemas.balance import GroupBalancesResponse, MemberBalance, TransactionEntry, UserStatsResponse
from groupsplit.services.expense_service import get_member_group
from groupsplit.services.settlement_service import calculate_group_balances
from groupsplit.services.stats_service import get_user_stats

router = APIRouter(tags=["balances"])


@router.get("/api/groups/{group_id}/balances", response_model=GroupBalancesResponse)
async def group_balances(
    group_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    try:
        await get_member_group(db, group_id, user.id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PermissionDeniedError as e:
        raise HTTPException(status_code=403, detail=str(e))

    result = await calculate_group_balances(db, group_id)
    stats = result["breakdown"]
    return GroupBalancesResponse(
        balances=[
            MemberBalance(user_id=uid, balance=balance, **asdict(stats[uid]))
            for uid, balance in result["balances"].items()
        ],
        transactions=[
            TransactionEntry(from_user_id=t.from_user, to_user_id=t.to_user, amount=t.amount)
            for t in result["transactions"]
        ],
        total_expenses=result["total_expenses"],
    )


@router.get("/api/users/stats", response_model=UserStatsResponse)
async def user_stats(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await get_user_stats(db, user.id)
