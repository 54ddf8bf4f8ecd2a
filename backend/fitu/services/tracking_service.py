import logging
from collections import defaultdict
from datetime import date, datetime
from typing import Optional

from sqlalchemy.orm import Session

from fitu.crud import exercise as crud_exercise
from fitu.crud import exercise_log as crud_exercise_log
from fitu.crud import food_entry as crud_food_entry
from fitu.crud import user as crud_user
from fitu.exceptions import NotFoundError
from fitu.schemas.tracking import (
    DailyExerciseLog,
    DailyExerciseTotals,
    DailyFoodLog,
    DailyFoodTotals,
    ExerciseCatalog,
    ExerciseLogResponse,
    ExerciseSummary,
    FoodEntryCreate,
    FoodEntryResponse,
    FoodEntryUpdate,
)
from fitu.utils.dates import day_window, local_now, local_today, to_local_naive

logger = logging.getLogger(__name__)


# --- Food entries ---

def log_food_entry(db: Session, user_id: str, request: FoodEntryCreate, now: Optional[datetime] = None) -> FoodEntryResponse:
    if not crud_user.get_user(db, user_id):
        raise NotFoundError("User", user_id)

    consumed_at = to_local_naive(request.consumed_at) or now or local_now()
    entry = crud_food_entry.create_food_entry(db, user_id, request, consumed_at)
    logger.info(f"Logged food entry {entry.id} for user {user_id}: {entry.total_calories} kcal")
    return FoodEntryResponse.model_validate(entry)


def update_food_entry(db: Session, user_id: str, entry_id: int, request: FoodEntryUpdate) -> FoodEntryResponse:
    entry = crud_food_entry.update_food_entry(db, user_id, entry_id, request)
    if not entry:
        raise NotFoundError("Food entry", entry_id)
    return FoodEntryResponse.model_validate(entry)


def delete_food_entry(db: Session, user_id: str, entry_id: int) -> None:
    if not crud_food_entry.delete_food_entry(db, user_id, entry_id):
        raise NotFoundError("Food entry", entry_id)
    logger.info(f"Deleted food entry {entry_id} for user {user_id}")


def get_daily_food_log(db: Session, user_id: str, day: Optional[date] = None) -> DailyFoodLog:
    """Entries for the day with macro totals scaled by servings."""
    day = day or local_today()
    start, end = day_window(day)
    entries = crud_food_entry.get_food_entries_between(db, user_id, start, end)

    totals = DailyFoodTotals()
    for entry in entries:
        servings = entry.servings_consumed
        totals.total_calories += entry.calories_per_serving * servings
        totals.total_protein += (entry.protein_g or 0) * servings
        totals.total_carbs += (entry.carbs_g or 0) * servings
        totals.total_fat += (entry.fat_g or 0) * servings
        totals.total_fiber += (entry.fiber_g or 0) * servings
        totals.total_sugar += (entry.sugar_g or 0) * servings
        totals.total_sodium += (entry.sodium_mg or 0) * servings
        totals.entry_count += 1

    return DailyFoodLog(
        date=day.isoformat(),
        entries=[FoodEntryResponse.model_validate(e) for e in entries],
        daily_totals=totals,
    )


# --- Exercise logs ---

def get_daily_exercise_log(db: Session, user_id: str, day: Optional[date] = None) -> DailyExerciseLog:
    day = day or local_today()
    start, end = day_window(day)
    logs = crud_exercise_log.get_exercise_logs_between(db, user_id, start, end)

    totals = DailyExerciseTotals(
        total_calories_burned=sum(log.calories_burned or 0 for log in logs),
        total_duration_minutes=sum(log.duration_minutes or 0 for log in logs),
        total_exercises=len(logs),
    )
    return DailyExerciseLog(
        date=day.isoformat(),
        exercises=[ExerciseLogResponse.model_validate(log) for log in logs],
        daily_totals=totals,
    )


def get_exercise_catalog(db: Session, category: Optional[str] = None, difficulty_level: Optional[str] = None) -> ExerciseCatalog:
    exercises = [
        ExerciseSummary.model_validate(e)
        for e in crud_exercise.get_active_exercises(db, category, difficulty_level)
    ]

    grouped = defaultdict(list)
    for exercise in exercises:
        grouped[exercise.category].append(exercise)

    return ExerciseCatalog(
        exercises=exercises,
        grouped_by_category=dict(grouped),
        total_count=len(exercises),
    )
