"""Ledger record validation utilities."""
from typing import List

from app.models.expense import Expense
from app.models.settlement import Settlement

# Float comparison tolerance for money (one cent)
AMOUNT_TOLERANCE = 0.01


class LedgerValidationError(Exception):
    """Raised when a stored record breaks a ledger invariant in strict mode."""
    pass


def validate_expense(expense: Expense) -> List[str]:
    """
    Check an expense read from storage.

    Rules:
    - amount must be non-negative
    - each split amount must be non-negative
    - split amounts must add up to the expense amount
    """
    problems = []

    if expense.amount < 0:
        problems.append(f"Expense {expense.id} has negative amount: {expense.amount}")

    for split in expense.splits:
        if split.amount < 0:
            problems.append(
                f"Expense {expense.id} has negative split for user {split.user_id}: {split.amount}"
            )

    if expense.splits:
        split_sum = sum(split.amount for split in expense.splits)
        if abs(split_sum - expense.amount) > AMOUNT_TOLERANCE:
            problems.append(
                f"Expense {expense.id}: split sum ({split_sum}) does not equal amount ({expense.amount})"
            )

    return problems


def validate_settlement(settlement: Settlement) -> List[str]:
    """
    Check a settlement read from storage.

    Rules:
    - amount must be non-negative
    - payer and receiver must be different users
    """
    problems = []

    if settlement.amount < 0:
        problems.append(f"Settlement {settlement.id} has negative amount: {settlement.amount}")

    if settlement.paid_by_user_id == settlement.received_by_user_id:
        problems.append(f"Settlement {settlement.id} is paid to its own payer")

    return problems
