from groupsplit.models.user import User
from groupsplit.models.group import Group, GroupMember
from groupsplit.models.expense import Expense, ExpenseSplit

__all__ = [
    "User", "Group", "GroupMember",
    "Expense", "ExpenseSplit",
]
