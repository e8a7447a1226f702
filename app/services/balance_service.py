import asyncio
import logging
from typing import Iterable, List, Tuple

from motor.motor_asyncio import AsyncIOMotorDatabase

from app.core.config import settings
from app.models.expense import Expense
from app.models.group import Group
from app.models.settlement import Settlement
from app.repositories.expense_repo import ExpenseRepository
from app.repositories.group_repo import GroupRepository
from app.repositories.settlement_repo import SettlementRepository
from app.repositories.user_repo import UserRepository
from app.schemas.balance import (
    CounterpartBalance,
    GroupBalanceResponse,
    MonthlyTotal,
    OweDetails,
    PairwiseBalanceResponse,
)
from app.services import balance_calculator
from app.utils.ledger_validation import (
    LedgerValidationError,
    validate_expense,
    validate_settlement,
)

logger = logging.getLogger(__name__)


def check_records(expenses: Iterable[Expense], settlements: Iterable[Settlement] = ()) -> None:
    """
    Re-validate stored records before folding them.

    Invalid records are logged and still counted, unless
    LEDGER_STRICT_VALIDATION is on, in which case the first one aborts
    the whole computation.
    """
    problems = []
    for expense in expenses:
        problems.extend(validate_expense(expense))
    for settlement in settlements:
        problems.extend(validate_settlement(settlement))

    for problem in problems:
        if settings.LEDGER_STRICT_VALIDATION:
            raise LedgerValidationError(problem)
        logger.warning("Invalid ledger record: %s", problem)


class BalanceService:
    """Derived balances and spending totals for an already resolved user."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.expenses = ExpenseRepository(db)
        self.settlements = SettlementRepository(db)
        self.groups = GroupRepository(db)
        self.users = UserRepository(db)

    async def get_pairwise_balances(self, subject_id: str) -> PairwiseBalanceResponse:
        """How much the user owes / is owed across 1-to-1 expenses."""
        expenses, settlements = await asyncio.gather(
            self.expenses.list_personal_expenses(subject_id),
            self.settlements.list_personal_settlements(subject_id),
        )
        check_records(expenses, settlements)

        tally = balance_calculator.tally_pairwise(subject_id, expenses, settlements)
        you_owe, you_are_owed_by = tally.split_by_direction()

        counterpart_ids = [uid for uid, _ in you_owe] + [uid for uid, _ in you_are_owed_by]
        users = await self.users.get_users_by_ids(counterpart_ids)

        def describe(user_id: str, amount: float) -> CounterpartBalance:
            user = users.get(user_id)
            if user is None:
                logger.debug("Counterpart %s no longer exists", user_id)
                return CounterpartBalance(
                    user_id=user_id,
                    name=settings.UNKNOWN_USER_NAME,
                    amount=amount
                )
            return CounterpartBalance(
                user_id=user_id,
                name=user.name,
                image_url=user.image_url,
                amount=amount
            )

        return PairwiseBalanceResponse(
            you_owe=tally.you_owe,
            you_are_owed=tally.you_are_owed,
            total_balance=tally.total_balance,
            owe_details=OweDetails(
                you_owe=[describe(uid, amount) for uid, amount in you_owe],
                you_are_owed_by=[describe(uid, amount) for uid, amount in you_are_owed_by],
            ),
        )

    async def get_group_balances(self, subject_id: str) -> List[GroupBalanceResponse]:
        """Every group the user is in, with their net balance in it."""
        groups = await self.groups.list_groups_for_member(subject_id)
        # Records are checked only once every group read has finished
        loaded = await asyncio.gather(
            *(self._load_group_records(subject_id, group) for group in groups)
        )

        results = []
        for group, expenses, settlements in loaded:
            check_records(expenses, settlements)
            balance = balance_calculator.group_balance(subject_id, group.id, expenses, settlements)
            results.append(GroupBalanceResponse(
                id=group.id,
                name=group.name,
                description=group.description,
                created_by=group.created_by,
                members=group.members,
                balance=balance
            ))
        return results

    async def _load_group_records(
        self, subject_id: str, group: Group
    ) -> Tuple[Group, List[Expense], List[Settlement]]:
        expenses, settlements = await asyncio.gather(
            self.expenses.list_group_expenses(group.id),
            self.settlements.list_group_settlements(group.id, subject_id),
        )
        return group, expenses, settlements

    async def get_year_total(self, subject_id: str, year: int) -> float:
        """What the user personally spent in `year` (their own shares only)."""
        expenses = await self._expenses_in_year(subject_id, year)
        return balance_calculator.year_total(subject_id, expenses, year)

    async def get_monthly_totals(self, subject_id: str, year: int) -> List[MonthlyTotal]:
        """Personal spending per month of `year`; always 12 entries, January first."""
        expenses = await self._expenses_in_year(subject_id, year)
        return [
            MonthlyTotal(month=month, total=total)
            for month, total in balance_calculator.monthly_totals(subject_id, expenses, year)
        ]

    async def _expenses_in_year(self, subject_id: str, year: int) -> List[Expense]:
        start, end = balance_calculator.year_bounds(year)
        expenses = await self.expenses.list_user_expenses_between(subject_id, start, end)
        check_records(expenses)
        return expenses
