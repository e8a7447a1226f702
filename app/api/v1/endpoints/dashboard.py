from datetime import datetime, timezone
from typing import List, Optional
from fastapi import APIRouter, Depends, Query

from app.core.auth import get_current_user
from app.db.mongo import get_db
from app.models.user import UserInDB
from app.schemas.balance import (
    GroupBalanceResponse,
    MonthlyTotal,
    PairwiseBalanceResponse,
    YearTotalResponse,
)
from app.services.balance_service import BalanceService

router = APIRouter()


def _current_year() -> int:
    return datetime.now(timezone.utc).year


@router.get("/balances", response_model=PairwiseBalanceResponse)
async def get_my_balances(
    current_user: UserInDB = Depends(get_current_user),
    db = Depends(get_db)
):
    """1-to-1 balances: who you owe and who owes you"""
    return await BalanceService(db).get_pairwise_balances(current_user.id)


@router.get("/groups", response_model=List[GroupBalanceResponse])
async def get_my_groups(
    current_user: UserInDB = Depends(get_current_user),
    db = Depends(get_db)
):
    """Your groups with your net balance in each"""
    return await BalanceService(db).get_group_balances(current_user.id)


@router.get("/spending/total", response_model=YearTotalResponse)
async def get_total_spent(
    year: Optional[int] = Query(None, ge=1970, le=9999, description="Defaults to the current year"),
    current_user: UserInDB = Depends(get_current_user),
    db = Depends(get_db)
):
    """Your personal share of expenses in a year"""
    year = year or _current_year()
    total = await BalanceService(db).get_year_total(current_user.id, year)
    return YearTotalResponse(year=year, total=total)


@router.get("/spending/monthly", response_model=List[MonthlyTotal])
async def get_monthly_spending(
    year: Optional[int] = Query(None, ge=1970, le=9999, description="Defaults to the current year"),
    current_user: UserInDB = Depends(get_current_user),
    db = Depends(get_db)
):
    """Your personal share of expenses per month (12 entries)"""
    return await BalanceService(db).get_monthly_totals(current_user.id, year or _current_year())
