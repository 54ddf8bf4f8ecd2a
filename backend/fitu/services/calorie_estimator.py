import logging
from datetime import datetime, timedelta
from typing import Iterable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from fitu.config import HISTORY_DAYS
from fitu.crud import exercise as crud_exercise
from fitu.crud import exercise_log as crud_exercise_log
from fitu.crud import user as crud_user
from fitu.exceptions import NotFoundError, ValidationError
from fitu.models.exercise import Exercise
from fitu.models.tracking import ExerciseLog
from fitu.schemas.tracking import (
    CalorieEstimate,
    CaloriePreview,
    ExerciseLogCreate,
    ExerciseLogResponse,
    ExerciseLogResult,
    ExerciseSummary,
    SmartSuggestion,
    UserExerciseStats,
)
from fitu.utils.dates import local_now, to_local_naive

logger = logging.getLogger(__name__)

"""
Calorie Estimator
-----------------
Hybrid exercise calorie logging.
1. Manual override from the user (e.g. fitness tracker data) always wins.
2. Otherwise: preset calories_per_minute x duration.
3. Looks at the last 30 days of logs to detect users who usually type their own
   numbers, and surfaces one advisory suggestion.
"""

MANUAL_DIFF_THRESHOLD_PCT = 5      # > 5% off the preset rate looks like manual input
TRACKER_USER_THRESHOLD_PCT = 30    # > 30% manual logs looks like a fitness tracker user
HIGH_INTENSITY_CPM = 10
LONG_STRENGTH_SESSION_MIN = 20
NEW_USER_WORKOUTS = 5


def estimate_calories(exercise: Exercise, duration_minutes: Optional[int], manual_calories: Optional[int] = None) -> CalorieEstimate:
    if manual_calories:
        return CalorieEstimate(calories=manual_calories, method="manual")

    cpm = exercise.calories_per_minute if exercise is not None else None
    if duration_minutes and cpm:
        return CalorieEstimate(calories=round(cpm * duration_minutes), method="automatic")

    return CalorieEstimate(calories=0, method="automatic")


def get_exercise_or_404(db: Session, exercise_id: int) -> Exercise:
    exercise = crud_exercise.get_exercise(db, exercise_id)
    if not exercise:
        raise NotFoundError("Exercise", exercise_id)
    return exercise


def estimate(db: Session, exercise_id: int, duration_minutes: Optional[int], manual_calories: Optional[int] = None) -> CalorieEstimate:
    """Calories for a session of a catalog exercise. Unknown ids raise NotFoundError."""
    return estimate_calories(get_exercise_or_404(db, exercise_id), duration_minutes, manual_calories)


def build_exercise_stats(logs: Iterable[ExerciseLog]) -> UserExerciseStats:
    """
    Classify each log with a comparable preset rate as manual when its calories
    differ from cpm x duration by more than 5%.
    """
    logs = list(logs)
    total_workouts = len(logs)
    if total_workouts == 0:
        return UserExerciseStats()

    manual_inputs = 0
    comparable = 0
    total_diff = 0.0

    for log in logs:
        cpm = log.exercise.calories_per_minute if log.exercise is not None else None
        if not cpm or not log.duration_minutes:
            continue

        expected = cpm * log.duration_minutes
        difference = abs((log.calories_burned or 0) - expected)
        if difference / expected * 100 > MANUAL_DIFF_THRESHOLD_PCT:
            manual_inputs += 1
            total_diff += difference
        comparable += 1

    manual_input_rate = manual_inputs / total_workouts * 100

    return UserExerciseStats(
        total_workouts=total_workouts,
        manual_input_rate=round(manual_input_rate),
        is_likely_tracker_user=manual_input_rate > TRACKER_USER_THRESHOLD_PCT,
        avg_manual_vs_preset_diff=round(total_diff / comparable) if comparable else 0,
    )


def get_user_exercise_stats(db: Session, user_id: str, now: Optional[datetime] = None) -> UserExerciseStats:
    now = now or local_now()
    try:
        logs = crud_exercise_log.get_exercise_history(db, user_id, now - timedelta(days=HISTORY_DAYS))
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning(f"Error calculating exercise stats for user {user_id}: {e}")
        return UserExerciseStats()
    return build_exercise_stats(logs)


def generate_smart_suggestion(stats: UserExerciseStats, exercise: Exercise, duration_minutes: Optional[int],
                              calculated_calories: int) -> Optional[SmartSuggestion]:
    """Most relevant suggestion only: tracker users, then high-variance sessions, then new users."""
    if stats.is_likely_tracker_user:
        return SmartSuggestion(
            type="fitness_tracker_detected",
            message="You often use custom calorie data. Have a more accurate number from your fitness tracker?",
            confidence="high",
            suggested_action="manual_input",
        )

    cpm = exercise.calories_per_minute or 0
    if exercise.category == "cardio" and cpm > HIGH_INTENSITY_CPM:
        return SmartSuggestion(
            type="high_intensity_cardio",
            message=f"High-intensity {exercise.category} can vary greatly by effort. Heart rate monitor data available?",
            confidence="medium",
            suggested_action="consider_manual",
        )

    if exercise.category == "strength" and (duration_minutes or 0) > LONG_STRENGTH_SESSION_MIN:
        return SmartSuggestion(
            type="strength_training_variation",
            message="Strength training calories vary by weight lifted and rest time. Know your actual burn?",
            confidence="medium",
            suggested_action="consider_manual",
        )

    if stats.total_workouts < NEW_USER_WORKOUTS:
        return SmartSuggestion(
            type="new_user_education",
            message=f"Estimated {calculated_calories} calories based on average rates. You can always enter custom amounts!",
            confidence="info",
            suggested_action="preset_ok",
        )

    return None


def log_exercise(db: Session, user_id: str, request: ExerciseLogCreate, now: Optional[datetime] = None) -> ExerciseLogResult:
    """
    Log an exercise session. calories_burned is fixed here and never recomputed.
    """
    now = now or local_now()

    if not crud_user.get_user(db, user_id):
        raise NotFoundError("User", user_id)

    result = estimate(db, request.exercise_id, request.duration_minutes, request.calories_burned)
    exercise = get_exercise_or_404(db, request.exercise_id)
    stats = get_user_exercise_stats(db, user_id, now)

    smart_suggestion = None
    if result.method == "automatic" and request.duration_minutes and exercise.calories_per_minute:
        smart_suggestion = generate_smart_suggestion(stats, exercise, request.duration_minutes, result.calories)

    new_log = crud_exercise_log.create_exercise_log(
        db,
        user_id,
        exercise_id=exercise.id,
        duration_minutes=request.duration_minutes,
        sets=request.sets,
        reps=request.reps,
        weight_kg=request.weight_kg,
        distance_km=request.distance_km,
        calories_burned=result.calories,
        performed_at=to_local_naive(request.performed_at) or now,
        notes=request.notes,
        rating=request.rating,
    )
    logger.info(f"Logged exercise {exercise.name} for user {user_id}: {result.calories} kcal ({result.method})")

    return ExerciseLogResult(
        log=ExerciseLogResponse.model_validate(new_log),
        calculation_method=result.method,
        preset_calories_per_min=exercise.calories_per_minute,
        smart_suggestion=smart_suggestion,
        user_stats={
            "total_workouts": stats.total_workouts,
            "manual_input_rate": stats.manual_input_rate,
            "fitness_tracker_user": stats.is_likely_tracker_user,
        },
    )


def preview_calories(db: Session, exercise_id: int, duration_minutes: int) -> CaloriePreview:
    """Estimate without logging."""
    if not duration_minutes or duration_minutes < 1:
        raise ValidationError("duration_minutes", "duration_minutes must be a positive integer")

    estimated = estimate(db, exercise_id, duration_minutes).calories
    exercise = get_exercise_or_404(db, exercise_id)

    return CaloriePreview(
        exercise=ExerciseSummary.model_validate(exercise),
        duration_minutes=duration_minutes,
        estimated_calories=estimated,
        calculation=f"{exercise.calories_per_minute} cal/min × {duration_minutes} min = {estimated} calories",
        suggestion="This is an estimate. You can always enter your actual calories burned when logging!",
    )
