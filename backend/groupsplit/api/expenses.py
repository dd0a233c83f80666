import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from groupsplit.core.auth import get_current_user
from groupsplit.core.database import get_db
from groupsplit.core.errors import NotFoundError, PermissionDeniedError, ValidationError
from groupsplit.models.user import User
from groupsplit.schemas.expense import ExpenseCreate, ExpenseResponse, SplitResponse
from groupsplit.services.expense_service import (
    create_expense, delete_expense, get_member_group, list_group_expenses, settle_split,
)

router = APIRouter(tags=["expenses"])


@router.post("/api/expenses", response_model=ExpenseResponse, status_code=201)
async def add_expense(
    body: ExpenseCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    try:
        return await create_expense(
            db,
            body.group_id,
            user.id,
            body.title,
            body.amount,
            body.split_type,
            split_details=body.splits,
            currency=body.currency,
            category=body.category,
            notes=body.notes,
        )
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PermissionDeniedError:
        raise HTTPException(status_code=403, detail="Not authorized to add expenses to this group")


@router.get("/api/groups/{group_id}/expenses", response_model=list[ExpenseResponse])
async def group_expenses(
    group_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    try:
        await get_member_group(db, group_id, user.id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PermissionDeniedError:
        raise HTTPException(status_code=403, detail="Not authorized to view expenses for this group")
    return await list_group_expenses(db, group_id)


@router.delete("/api/expenses/{expense_id}", status_code=204)
async def remove_expense(
    expense_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    try:
        await delete_expense(db, expense_id, user.id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PermissionDeniedError as e:
        raise HTTPException(status_code=403, detail=str(e))


@router.post("/api/expenses/{expense_id}/splits/{user_id}/settle", response_model=SplitResponse)
async def settle(
    expense_id: uuid.UUID,
    user_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    try:
        return await settle_split(db, expense_id, user_id, user.id)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PermissionDeniedError as e:
        raise HTTPException(status_code=403, detail=str(e))
