from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional

from fitu.database import get_db
from fitu.api.auth import get_current_user_id
from fitu.schemas.tracking import DailyFoodLog, FoodEntryCreate, FoodEntryResponse, FoodEntryUpdate
from fitu.services import tracking_service
from fitu.utils.dates import parse_date

router = APIRouter(prefix="/api/calorie-entries", tags=["calorie-entries"])


@router.post("", response_model=FoodEntryResponse, status_code=status.HTTP_201_CREATED)
def log_food(
    request: FoodEntryCreate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """
    Log a food entry. consumed_at defaults to now in the server timezone.
    """
    return tracking_service.log_food_entry(db, user_id, request)


@router.get("/daily", response_model=DailyFoodLog)
def get_daily_entries(
    date: Optional[str] = Query(None, description="YYYY-MM-DD, defaults to today"),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    return tracking_service.get_daily_food_log(db, user_id, parse_date(date, "date"))


@router.put("/{entry_id}", response_model=FoodEntryResponse)
def update_entry(
    entry_id: int,
    request: FoodEntryUpdate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    return tracking_service.update_food_entry(db, user_id, entry_id, request)


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_entry(
    entry_id: int,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    tracking_service.delete_food_entry(db, user_id, entry_id)
