"""
Balance calculator - pure folds over expense and settlement records.

Core algorithms:
1. Pairwise (1-to-1) balances per counterpart
2. Net position of the subject inside one group
3. Personal-share spending totals per year and per month
4. Counterpart ids for contact discovery

Nothing here touches the database. Every function takes the subject id and
the records it should fold, and returns a new value.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Set, Tuple


def round_money(amount: float) -> float:
    # `+ 0.0` turns -0.0 into 0.0
    return round(amount, 2) + 0.0


@dataclass
class CounterpartTally:
    """Running totals between the subject and one other user."""
    owed: float = 0.0   # counterpart owes the subject
    owing: float = 0.0  # subject owes the counterpart

    @property
    def net(self) -> float:
        """Positive = counterpart owes subject, negative = subject owes counterpart."""
        return round_money(self.owed - self.owing)


@dataclass
class PairwiseTally:
    you_owe: float = 0.0
    you_are_owed: float = 0.0
    by_user: Dict[str, CounterpartTally] = field(default_factory=dict)

    def counterpart(self, user_id: str) -> CounterpartTally:
        if user_id not in self.by_user:
            self.by_user[user_id] = CounterpartTally()
        return self.by_user[user_id]

    @property
    def total_balance(self) -> float:
        return round_money(self.you_are_owed - self.you_owe)

    def split_by_direction(self) -> Tuple[List[Tuple[str, float]], List[Tuple[str, float]]]:
        """
        Split counterparts into (you_owe, you_are_owed_by) lists of
        (user_id, amount), both sorted by amount descending then user id.
        Fully settled counterparts are dropped.
        """
        you_owe = []
        you_are_owed_by = []

        for user_id, tally in self.by_user.items():
            net = tally.net
            if net > 0:
                you_are_owed_by.append((user_id, net))
            elif net < 0:
                you_owe.append((user_id, -net))

        you_owe.sort(key=lambda item: (-item[1], item[0]))
        you_are_owed_by.sort(key=lambda item: (-item[1], item[0]))
        return you_owe, you_are_owed_by


def tally_pairwise(subject_id: str, expenses: Iterable, settlements: Iterable) -> PairwiseTally:
    """
    Fold 1-to-1 expenses and settlements into per-counterpart tallies.

    Group expenses/settlements and records not involving the subject are
    ignored, so callers may pass a wider record set.
    """
    tally = PairwiseTally()

    for expense in expenses:
        if not expense.is_personal or not expense.involves(subject_id):
            continue

        if expense.paid_by_user_id == subject_id:
            # Subject fronted the money, everyone else's unpaid share is owed back
            for split in expense.splits:
                if split.user_id == subject_id or split.paid:
                    continue
                tally.you_are_owed += split.amount
                tally.counterpart(split.user_id).owed += split.amount
        else:
            own_split = expense.split_for(subject_id)
            if own_split is not None and own_split.is_outstanding_for(subject_id):
                tally.you_owe += own_split.amount
                tally.counterpart(expense.paid_by_user_id).owing += own_split.amount

    for settlement in settlements:
        if not settlement.applies_to(subject_id):
            continue

        counterpart = tally.counterpart(settlement.counterparty_of(subject_id))
        if settlement.paid_by_user_id == subject_id:
            tally.you_owe -= settlement.amount
            counterpart.owing -= settlement.amount
        else:
            tally.you_are_owed -= settlement.amount
            counterpart.owed -= settlement.amount

    tally.you_owe = round_money(tally.you_owe)
    tally.you_are_owed = round_money(tally.you_are_owed)
    return tally


def group_balance(subject_id: str, group_id: str, expenses: Iterable, settlements: Iterable) -> float:
    """
    Net position of the subject within one group.

    Positive = the group owes the subject, negative = the subject owes.
    """
    balance = 0.0

    for expense in expenses:
        if expense.group_id != group_id:
            continue

        if expense.paid_by_user_id == subject_id:
            for split in expense.splits:
                if split.user_id != subject_id and not split.paid:
                    balance += split.amount
        else:
            own_split = expense.split_for(subject_id)
            if own_split is not None and own_split.is_outstanding_for(subject_id):
                balance -= own_split.amount

    for settlement in settlements:
        if not settlement.applies_to(subject_id, group_id):
            continue
        if settlement.paid_by_user_id == subject_id:
            balance += settlement.amount
        else:
            balance -= settlement.amount

    return round_money(balance)


def year_bounds(year: int) -> Tuple[datetime, datetime]:
    """[start, end) of a calendar year in UTC."""
    return (
        datetime(year, 1, 1, tzinfo=timezone.utc),
        datetime(year + 1, 1, 1, tzinfo=timezone.utc),
    )


def month_starts(year: int) -> List[datetime]:
    return [datetime(year, month, 1, tzinfo=timezone.utc) for month in range(1, 13)]


def _personal_shares(subject_id: str, expenses: Iterable, year: int):
    """Yield (UTC expense date, subject's share) for the subject's expenses in `year`."""
    start, end = year_bounds(year)
    for expense in expenses:
        if not (start <= expense.date < end) or not expense.involves(subject_id):
            continue
        # Paying without a share of your own is not spending
        own_split = expense.split_for(subject_id)
        if own_split is None:
            continue
        yield expense.date.astimezone(timezone.utc), own_split.amount


def year_total(subject_id: str, expenses: Iterable, year: int) -> float:
    """Sum of the subject's own share across every expense in the year."""
    return round_money(sum(amount for _, amount in _personal_shares(subject_id, expenses, year)))


def monthly_totals(subject_id: str, expenses: Iterable, year: int) -> List[Tuple[datetime, float]]:
    """
    Subject's own share bucketed by calendar month.

    Always 12 (month_start, total) pairs, January first, zero for
    months without expenses.
    """
    buckets: Dict[datetime, float] = {month: 0.0 for month in month_starts(year)}

    for date, amount in _personal_shares(subject_id, expenses, year):
        month = datetime(date.year, date.month, 1, tzinfo=timezone.utc)
        buckets[month] += amount

    return [(month, round_money(buckets[month])) for month in sorted(buckets)]


def counterpart_ids(subject_id: str, expenses: Iterable) -> Set[str]:
    """Every other user appearing in the subject's 1-to-1 expenses."""
    ids: Set[str] = set()

    for expense in expenses:
        if not expense.is_personal or not expense.involves(subject_id):
            continue
        if expense.paid_by_user_id != subject_id:
            ids.add(expense.paid_by_user_id)
        for split in expense.splits:
            if split.user_id != subject_id:
                ids.add(split.user_id)

    return ids
