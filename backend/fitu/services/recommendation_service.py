import logging
from collections import Counter
from datetime import datetime, timedelta
from typing import List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from fitu.config import HISTORY_DAYS
from fitu.crud import exercise as crud_exercise
from fitu.crud import exercise_log as crud_exercise_log
from fitu.crud import user as crud_user
from fitu.exceptions import CalculationError, NotFoundError, ValidationError
from fitu.models.exercise import Exercise
from fitu.models.tracking import ExerciseLog
from fitu.models.user import User
from fitu.schemas.recommendation import (
    AlgorithmBreakdown,
    QuickWorkoutExercise,
    QuickWorkoutPlan,
    QuickWorkoutResponse,
    QuickWorkoutSuggestion,
    Recommendation,
    RecommendationOptions,
    RecommendationResponse,
    UserFitnessProfile,
    WorkoutAnalysis,
)
from fitu.services import recommendation_scorers as scorers
from fitu.utils.dates import local_now

logger = logging.getLogger(__name__)

QUICK_WORKOUT_SIZE = 5
QUICK_WORKOUT_MINUTES_PER_EXERCISE = 8

SUGGESTED_DURATIONS = {
    "cardio": {"lose_weight": 15, "build_muscle": 10, "improve_fitness": 12},
    "strength": {"lose_weight": 8, "build_muscle": 12, "improve_fitness": 10},
    "flexibility": {"lose_weight": 5, "build_muscle": 5, "improve_fitness": 8},
    "functional": {"lose_weight": 12, "build_muscle": 10, "improve_fitness": 10},
}
DEFAULT_DURATION = 10

SUGGESTED_SETS = {"lose_weight": 3, "build_muscle": 4, "improve_fitness": 3, "maintain_weight": 2}
DEFAULT_SETS = 3

SUGGESTED_REPS = {"lose_weight": "12-15", "build_muscle": "6-10", "improve_fitness": "8-12", "maintain_weight": "10-12"}
DEFAULT_REPS = "8-12"

REST_TIMES = {
    "cardio": "30 seconds",
    "strength": "60-90 seconds",
    "flexibility": "15 seconds",
    "functional": "45 seconds",
}
DEFAULT_REST = "60 seconds"


def suggest_duration(category: str, goal: str) -> int:
    return SUGGESTED_DURATIONS.get(category, {}).get(goal, DEFAULT_DURATION)


def suggest_sets(category: str, goal: str) -> Optional[int]:
    if category == "cardio":
        return None
    return SUGGESTED_SETS.get(goal, DEFAULT_SETS)


def suggest_reps(category: str, goal: str) -> Optional[str]:
    if category == "cardio":
        return None
    return SUGGESTED_REPS.get(goal, DEFAULT_REPS)


def suggest_rest_time(category: str) -> str:
    return REST_TIMES.get(category, DEFAULT_REST)


def format_quick_workout(recommendations: List[Recommendation], goal: str) -> QuickWorkoutPlan:
    exercises = []
    estimated_calories = 0.0
    for index, rec in enumerate(recommendations, start=1):
        duration = suggest_duration(rec.category, goal)
        estimated_calories += (rec.calories_per_minute or 0) * duration
        exercises.append(QuickWorkoutExercise(
            order=index,
            exercise=rec.model_dump(),
            ai_suggestion=QuickWorkoutSuggestion(
                recommended_duration=duration,
                recommended_sets=suggest_sets(rec.category, goal),
                recommended_reps=suggest_reps(rec.category, goal),
                rest_time=suggest_rest_time(rec.category),
                reason=rec.recommendation_reason,
            ),
            confidence_score=rec.confidence,
        ))

    return QuickWorkoutPlan(
        goal=goal,
        estimated_duration=len(exercises) * QUICK_WORKOUT_MINUTES_PER_EXERCISE,
        total_exercises=len(exercises),
        estimated_calories=round(estimated_calories),
        exercises=exercises,
    )


class RecommendationService:
    """
    Personalised workout recommendations from the user's last 30 days of logs.
    History and catalog are read once per call; scoring itself never touches the DB.
    """

    def __init__(self, db: Session):
        self.db = db

    def _get_user(self, user_id: str) -> User:
        user = crud_user.get_user(self.db, user_id)
        if not user:
            raise NotFoundError("User", user_id)
        return user

    def _load_history_and_catalog(self, user_id: str, now: datetime) -> Tuple[List[ExerciseLog], List[Exercise]]:
        try:
            history = crud_exercise_log.get_exercise_history(self.db, user_id, now - timedelta(days=HISTORY_DAYS))
            catalog = crud_exercise.get_active_exercises(self.db)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to load workout history for user {user_id}: {e}")
            raise CalculationError(f"Error generating recommendations: {e}", user_id) from e
        return history, catalog

    def get_personalized_recommendations(self, user_id: str, options: Optional[RecommendationOptions] = None,
                                         now: Optional[datetime] = None) -> RecommendationResponse:
        options = options or RecommendationOptions()
        now = now or local_now()

        user = self._get_user(user_id)
        history, catalog = self._load_history_and_catalog(user_id, now)
        goal = options.override_goal or user.fitness_goal

        ctx = scorers.ScoringContext(
            fitness_goal=goal,
            activity_level=user.activity_level,
            history=history,
            catalog=catalog,
            options=options,
            now=now,
        )
        recommendations = scorers.fuse_recommendations(scorers.run_scorers(ctx), options.limit)
        logger.info(f"Generated {len(recommendations)} recommendations for user {user_id} "
                    f"from {len(history)} logs and {len(catalog)} exercises")

        return RecommendationResponse(
            user_profile=UserFitnessProfile(
                fitness_level=user.activity_level,
                primary_goal=goal,
                experience_score=scorers.calculate_experience_score(history),
            ),
            ai_recommendations=recommendations,
            algorithm_breakdown=AlgorithmBreakdown(),
            generated_at=now.isoformat(),
        )

    def get_quick_workout(self, user_id: str, goal: Optional[str], duration: Optional[int] = None,
                          equipment: Optional[str] = None, now: Optional[datetime] = None) -> QuickWorkoutResponse:
        if not goal:
            raise ValidationError("goal", "Fitness goal is required (lose_weight, build_muscle, improve_fitness)")

        options = RecommendationOptions(
            limit=QUICK_WORKOUT_SIZE,
            override_goal=goal,
            time_constraint=duration,
            equipment_available=equipment or "none",
        )
        result = self.get_personalized_recommendations(user_id, options, now)

        return QuickWorkoutResponse(
            user_profile=result.user_profile,
            workout_plan=format_quick_workout(result.ai_recommendations, goal),
            ai_analysis=result.algorithm_breakdown,
        )

    def analyze_workout_patterns(self, user_id: str, now: Optional[datetime] = None) -> WorkoutAnalysis:
        now = now or local_now()
        self._get_user(user_id)
        history, _ = self._load_history_and_catalog(user_id, now)

        categories = Counter(log.exercise.category for log in history if log.exercise is not None)
        ratings = [log.rating for log in history if log.rating is not None]
        trend = scorers.analyze_recent_performance(history)["trend"]
        underworked = scorers.analyze_muscle_group_balance(scorers.recent_logs(history, now))["underworked"]

        ready = []
        for sessions in scorers.group_exercises_by_type(history).values():
            progression = scorers.analyze_progression(sessions)
            if progression.ready_for_advancement and progression.current_exercise_name:
                ready.append(progression.current_exercise_name)

        insights, suggestions = self._build_insights(history, categories, ratings, trend, underworked, ready)

        return WorkoutAnalysis(
            total_workouts=len(history),
            unique_exercises=len({log.exercise_id for log in history}),
            total_duration_minutes=sum(log.duration_minutes or 0 for log in history),
            total_calories_burned=sum(log.calories_burned or 0 for log in history),
            average_rating=round(sum(ratings) / len(ratings), 1) if ratings else None,
            category_distribution=dict(categories),
            experience_score=scorers.calculate_experience_score(history),
            performance_trend=trend,
            underworked_muscle_groups=underworked,
            ai_insights=insights,
            improvement_suggestions=suggestions,
        )

    @staticmethod
    def _build_insights(history, categories, ratings, trend, underworked, ready):
        if not history:
            return (
                [f"No workouts logged in the last {HISTORY_DAYS} days."],
                ["Log your first workout to unlock personalised recommendations."],
            )

        insights = [f"You logged {len(history)} workouts across {len(categories)} categories in the last {HISTORY_DAYS} days."]
        suggestions = []

        if trend == "improving":
            insights.append("Your workout intensity is trending up.")
        elif trend == "declining":
            insights.append("Your workout intensity has dropped recently.")
            suggestions.append("Consider a lighter recovery week before pushing intensity again.")

        if ready:
            insights.append(f"Ready to progress: {', '.join(ready)}")

        if underworked:
            insights.append(f"Muscle groups not trained in the last 7 days: {', '.join(underworked)}")
            suggestions.append(f"Add exercises for: {', '.join(underworked)}")

        if len(categories) == 1:
            suggestions.append("Mix in other workout categories for a more balanced routine.")

        if ratings and sum(ratings) / len(ratings) < 3:
            suggestions.append("Your recent ratings are low - try some different exercises.")

        return insights, suggestions
