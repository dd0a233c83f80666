import uuid
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import String, DateTime, Numeric, Boolean, ForeignKey, Enum as SAEnum, Integer
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from groupsplit.core.database import Base
from groupsplit.services import ledger
from groupsplit.services.ledger import SplitType


class Expense(Base):
    __tablename__ = "expenses"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    group_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), ForeignKey("groups.id"), index=True, nullable=False)
    paid_by: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), ForeignKey("users.id"), index=True, nullable=False)
    title: Mapped[str] = mapped_column(String, nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), default="USD")
    split_type: Mapped[SplitType] = mapped_column(SAEnum(SplitType), nullable=False)
    category: Mapped[str] = mapped_column(String, default="general")
    notes: Mapped[str | None] = mapped_column(String, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    splits: Mapped[list["ExpenseSplit"]] = relationship(
        back_populates="expense", lazy="selectin", cascade="all, delete-orphan", order_by="ExpenseSplit.position"
    )

    def to_ledger(self) -> ledger.Expense:
        return ledger.Expense(
            paid_by=self.paid_by,
            amount=self.amount,
            splits=tuple(s.to_ledger() for s in self.splits),
            split_type=self.split_type,
            currency=self.currency,
        )


class ExpenseSplit(Base):
    __tablename__ = "expense_splits"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    expense_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("expenses.id", ondelete="CASCADE"), index=True, nullable=False
    )
    user_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), ForeignKey("users.id"), index=True, nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    share: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    settled: Mapped[bool] = mapped_column(Boolean, default=False)
    settled_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    expense: Mapped["Expense"] = relationship(back_populates="splits")

    def to_ledger(self) -> ledger.Split:
        return ledger.Split(
            user_id=self.user_id,
            share=self.share,
            settled=bool(self.settled),
            settled_at=self.settled_at,
        )
