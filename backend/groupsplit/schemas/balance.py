import uuid
from decimal import Decimal
from pydantic import BaseModel


class TransactionEntry(BaseModel):
    from_user_id: uuid.UUID
    to_user_id: uuid.UUID
    amount: Decimal


class MemberBalance(BaseModel):
    user_id: uuid.UUID
    balance: Decimal
    paid: Decimal = Decimal("0")
    owed_to_them: Decimal = Decimal("0")
    settled_to_them: Decimal = Decimal("0")
    owes: Decimal = Decimal("0")
    settled_by_them: Decimal = Decimal("0")
    net_balance: Decimal = Decimal("0")


class GroupBalancesResponse(BaseModel):
    balances: list[MemberBalance]
    transactions: list[TransactionEntry]
    total_expenses: Decimal = Decimal("0")


class UserStatsResponse(BaseModel):
    total_groups: int
    total_expenses: int
    total_owed: Decimal
    total_owing: Decimal
    overall_balance: Decimal


class ConversionResponse(BaseModel):
    from_currency: str
    to_currency: str
    amount: Decimal
    converted_amount: Decimal
