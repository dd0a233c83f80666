import uuid
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, patch
import pytest

from groupsplit.services.ledger import Expense, Split
from groupsplit.services.stats_service import get_user_stats

ALICE = uuid.uuid4()
BOB = uuid.uuid4()
CHARLIE = uuid.uuid4()
GROUP_A = uuid.uuid4()
GROUP_B = uuid.uuid4()


def make_db(group_ids):
    db = AsyncMock()
    scalars = MagicMock()
    scalars.all.return_value = group_ids
    result = MagicMock()
    result.scalars.return_value = scalars
    db.execute.return_value = result
    return db


LEDGERS = {
    GROUP_A: ([ALICE, BOB], [
        Expense(paid_by=ALICE, amount=Decimal("100"), splits=(Split(ALICE, Decimal("50")), Split(BOB, Decimal("50")))),
    ]),
    GROUP_B: ([ALICE, BOB, CHARLIE], [
        Expense(paid_by=BOB, amount=Decimal("30"), splits=(
            Split(ALICE, Decimal("10")), Split(BOB, Decimal("10")), Split(CHARLIE, Decimal("10")),
        )),
        Expense(paid_by=CHARLIE, amount=Decimal("20"), splits=(Split(BOB, Decimal("10")), Split(CHARLIE, Decimal("10")))),
    ]),
}


async def fake_ledger(db, group_id):
    return LEDGERS[group_id]


@pytest.mark.asyncio
async def test_totals_across_groups():
    db = make_db([GROUP_A, GROUP_B])
    with patch("groupsplit.services.stats_service.get_group_ledger", side_effect=fake_ledger):
        result = await get_user_stats(db, ALICE)
    assert result == {
        "total_groups": 2,
        "total_expenses": 2,
        "total_owed": Decimal("100.00"),
        "total_owing": Decimal("60.00"),
        "overall_balance": Decimal("40.00"),
    }


@pytest.mark.asyncio
async def test_user_without_groups():
    db = make_db([])
    result = await get_user_stats(db, ALICE)
    assert result["total_groups"] == 0
    assert result["total_expenses"] == 0
    assert result["overall_balance"] == Decimal("0.00")
