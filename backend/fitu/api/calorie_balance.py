from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from fitu.database import get_db
from fitu.api.auth import get_current_user_id
from fitu.schemas.balance import BalanceSummary, DailyBalance, WeeklyBalance
from fitu.services.balance_service import BalanceService
from fitu.utils.dates import local_today, parse_date, start_of_week

router = APIRouter(prefix="/api/calorie-balance", tags=["calorie-balance"])


@router.get("/daily", response_model=DailyBalance)
def get_daily_balance(
    date: Optional[str] = Query(None, description="YYYY-MM-DD, defaults to today"),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """
    Net calories (food - exercise) for one day compared with the daily goal.
    """
    day = parse_date(date, "date")
    return BalanceService(db).calculate_daily_balance(user_id, day)


@router.get("/weekly", response_model=WeeklyBalance)
def get_weekly_balance(
    week_start: Optional[str] = Query(None, description="YYYY-MM-DD, defaults to Monday of this week"),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    start = parse_date(week_start, "week_start") or start_of_week(local_today())
    return BalanceService(db).get_weekly_balance(user_id, start)


@router.get("/summary", response_model=BalanceSummary)
def get_balance_summary(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    return BalanceService(db).get_summary(user_id)
