import uuid
from decimal import Decimal
from datetime import datetime
from pydantic import BaseModel, ConfigDict

from groupsplit.services.ledger import SplitType


class ExpenseCreate(BaseModel):
    title: str
    amount: Decimal
    group_id: uuid.UUID
    split_type: SplitType
    # user_id -> percentage or exact share; unused for equal splits
    splits: dict[uuid.UUID, Decimal] | None = None
    currency: str = "USD"
    category: str | None = None
    notes: str | None = None


class SplitResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    user_id: uuid.UUID
    share: Decimal
    settled: bool
    settled_at: datetime | None = None


class ExpenseResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: uuid.UUID
    group_id: uuid.UUID
    paid_by: uuid.UUID
    title: str
    amount: Decimal
    currency: str
    split_type: SplitType
    category: str
    notes: str | None = None
    created_at: datetime
    splits: list[SplitResponse] = []
