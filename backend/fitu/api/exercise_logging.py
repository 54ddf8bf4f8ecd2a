from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional

from fitu.database import get_db
from fitu.api.auth import get_current_user_id
from fitu.schemas.tracking import CaloriePreview, DailyExerciseLog, ExerciseCatalog, ExerciseLogCreate, ExerciseLogResult
from fitu.services import calorie_estimator, tracking_service
from fitu.utils.dates import parse_date

router = APIRouter(prefix="/api/exercise-logging", tags=["exercise-logging"])


@router.post("", response_model=ExerciseLogResult, status_code=status.HTTP_201_CREATED)
def log_exercise(
    request: ExerciseLogCreate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """
    Log an exercise session.
    A calories_burned value in the request overrides the preset estimate.
    """
    return calorie_estimator.log_exercise(db, user_id, request)


@router.get("/daily", response_model=DailyExerciseLog)
def get_daily_exercises(
    date: Optional[str] = Query(None, description="YYYY-MM-DD, defaults to today"),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    return tracking_service.get_daily_exercise_log(db, user_id, parse_date(date, "date"))


@router.get("/exercises", response_model=ExerciseCatalog)
def list_exercises(
    category: Optional[str] = None,
    difficulty_level: Optional[str] = None,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    return tracking_service.get_exercise_catalog(db, category, difficulty_level)


@router.get("/preview", response_model=CaloriePreview)
def preview_calories(
    exercise_id: int,
    duration_minutes: int,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Estimated calories for a session, without logging it."""
    return calorie_estimator.preview_calories(db, exercise_id, duration_minutes)
