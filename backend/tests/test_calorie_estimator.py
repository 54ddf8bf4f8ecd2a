import unittest
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock, patch

from sqlalchemy.exc import SQLAlchemyError

from tests.base import DatabaseTestCase
from fitu.exceptions import NotFoundError, ValidationError
from fitu.models.exercise import Exercise
from fitu.models.tracking import ExerciseLog
from fitu.schemas.tracking import ExerciseLogCreate, UserExerciseStats
from fitu.services import calorie_estimator
from fitu.services.calorie_estimator import (
    build_exercise_stats,
    estimate_calories,
    generate_smart_suggestion,
)

NOW = datetime(2026, 10, 14, 18, 0)


def make_exercise(category="cardio", cpm=12.0, name="Running"):
    return Exercise(id=1, name=name, category=category, difficulty_level="beginner", calories_per_minute=cpm)


def make_log(exercise, duration, calories):
    return ExerciseLog(exercise_id=exercise.id, exercise=exercise, duration_minutes=duration,
                       calories_burned=calories, performed_at=NOW)


class TestEstimateCalories(unittest.TestCase):

    def test_manual_override_wins(self):
        result = estimate_calories(make_exercise(cpm=12), 10, manual_calories=50)
        self.assertEqual(result.calories, 50)
        self.assertEqual(result.method, "manual")

    def test_preset_rate_times_duration(self):
        result = estimate_calories(make_exercise(cpm=12), 10)
        self.assertEqual(result.calories, 120)
        self.assertEqual(result.method, "automatic")

    def test_fractional_rate_is_rounded(self):
        self.assertEqual(estimate_calories(make_exercise(cpm=7.5), 9).calories, 68)

    def test_missing_rate_or_duration_gives_zero(self):
        self.assertEqual(estimate_calories(make_exercise(cpm=None), 30).calories, 0)
        self.assertEqual(estimate_calories(make_exercise(cpm=12), None).calories, 0)

    def test_zero_manual_value_is_not_an_override(self):
        result = estimate_calories(make_exercise(cpm=12), 10, manual_calories=0)
        self.assertEqual(result.method, "automatic")
        self.assertEqual(result.calories, 120)


class TestExerciseStats(unittest.TestCase):

    def test_empty_history(self):
        stats = build_exercise_stats([])
        self.assertEqual(stats.total_workouts, 0)
        self.assertFalse(stats.is_likely_tracker_user)

    def test_manual_input_detection(self):
        running = make_exercise(cpm=10)
        logs = [
            make_log(running, 30, 300),   # matches preset
            make_log(running, 30, 310),   # within 5%
            make_log(running, 30, 450),   # 50% off
        ]
        stats = build_exercise_stats(logs)

        self.assertEqual(stats.total_workouts, 3)
        self.assertEqual(stats.manual_input_rate, 33)
        self.assertTrue(stats.is_likely_tracker_user)
        self.assertEqual(stats.avg_manual_vs_preset_diff, 50)  # 150 over 3 comparable logs

    def test_logs_without_preset_rate_are_not_comparable(self):
        stretch = make_exercise(category="flexibility", cpm=None, name="Stretch")
        stats = build_exercise_stats([make_log(stretch, 20, 90)])
        self.assertEqual(stats.total_workouts, 1)
        self.assertEqual(stats.manual_input_rate, 0)
        self.assertEqual(stats.avg_manual_vs_preset_diff, 0)


class TestSmartSuggestion(unittest.TestCase):

    def test_tracker_user_comes_first(self):
        stats = UserExerciseStats(total_workouts=10, manual_input_rate=60, is_likely_tracker_user=True)
        suggestion = generate_smart_suggestion(stats, make_exercise(cpm=12), 30, 360)
        self.assertEqual(suggestion.type, "fitness_tracker_detected")
        self.assertEqual(suggestion.confidence, "high")
        self.assertEqual(suggestion.suggested_action, "manual_input")

    def test_high_intensity_cardio(self):
        suggestion = generate_smart_suggestion(UserExerciseStats(), make_exercise(cpm=12), 30, 360)
        self.assertEqual(suggestion.type, "high_intensity_cardio")
        self.assertEqual(suggestion.suggested_action, "consider_manual")

    def test_long_strength_session(self):
        squats = make_exercise(category="strength", cpm=6, name="Squats")
        suggestion = generate_smart_suggestion(UserExerciseStats(total_workouts=20), squats, 30, 180)
        self.assertEqual(suggestion.type, "strength_training_variation")

    def test_new_user_education(self):
        walking = make_exercise(cpm=5, name="Walking")
        suggestion = generate_smart_suggestion(UserExerciseStats(total_workouts=2), walking, 10, 50)
        self.assertEqual(suggestion.type, "new_user_education")
        self.assertIn("50 calories", suggestion.message)

    def test_no_suggestion_for_experienced_user(self):
        walking = make_exercise(cpm=5, name="Walking")
        self.assertIsNone(generate_smart_suggestion(UserExerciseStats(total_workouts=12), walking, 10, 50))


class TestLogExercise(DatabaseTestCase):

    def setUp(self):
        super().setUp()
        self.create_user("user-1")

    def test_automatic_log(self):
        running = self.exercise("Running")
        request = ExerciseLogCreate(exercise_id=running.id, duration_minutes=10, rating=4)

        result = calorie_estimator.log_exercise(self.db, "user-1", request, now=NOW)

        self.assertEqual(result.calculation_method, "automatic")
        self.assertEqual(result.log.calories_burned, 120)
        self.assertEqual(result.log.performed_at, NOW)
        self.assertEqual(result.preset_calories_per_min, 12.0)
        self.assertEqual(result.smart_suggestion.type, "high_intensity_cardio")
        # Stats describe the history before this log
        self.assertEqual(result.user_stats["total_workouts"], 0)

    def test_manual_log_has_no_suggestion(self):
        running = self.exercise("Running")
        request = ExerciseLogCreate(exercise_id=running.id, duration_minutes=10, calories_burned=50)

        result = calorie_estimator.log_exercise(self.db, "user-1", request, now=NOW)

        self.assertEqual(result.calculation_method, "manual")
        self.assertEqual(result.log.calories_burned, 50)
        self.assertIsNone(result.smart_suggestion)

    def test_stats_use_previous_logs(self):
        walking = self.exercise("Walking")
        for days_ago in (1, 2, 3):
            self.add_log("user-1", walking, NOW - timedelta(days=days_ago), duration_minutes=20, calories_burned=100)
        self.add_log("user-1", walking, NOW - timedelta(days=45), duration_minutes=20, calories_burned=100)

        request = ExerciseLogCreate(exercise_id=walking.id, duration_minutes=10)
        result = calorie_estimator.log_exercise(self.db, "user-1", request, now=NOW)

        self.assertEqual(result.user_stats["total_workouts"], 3)
        self.assertEqual(result.smart_suggestion.type, "new_user_education")

    def test_unknown_user(self):
        running = self.exercise("Running")
        with self.assertRaises(NotFoundError):
            calorie_estimator.log_exercise(self.db, "ghost", ExerciseLogCreate(exercise_id=running.id, duration_minutes=5))

    def test_unknown_exercise(self):
        with self.assertRaises(NotFoundError):
            calorie_estimator.log_exercise(self.db, "user-1", ExerciseLogCreate(exercise_id=9999, duration_minutes=5))

    def test_preview(self):
        running = self.exercise("Running")
        preview = calorie_estimator.preview_calories(self.db, running.id, 30)
        self.assertEqual(preview.estimated_calories, 360)
        self.assertIn("= 360 calories", preview.calculation)

    def test_preview_requires_positive_duration(self):
        running = self.exercise("Running")
        with self.assertRaises(ValidationError) as ctx:
            calorie_estimator.preview_calories(self.db, running.id, 0)
        self.assertEqual(ctx.exception.field, "duration_minutes")

    def test_stats_failure_returns_empty_profile(self):
        db = MagicMock()
        db.query.side_effect = SQLAlchemyError("boom")
        stats = calorie_estimator.get_user_exercise_stats(db, "user-1", NOW)
        self.assertEqual(stats.total_workouts, 0)

    @patch("fitu.utils.dates.APP_TIMEZONE", "UTC")
    def test_offset_timestamp_is_stored_as_server_local_time(self):
        running = self.exercise("Running")
        ist = timezone(timedelta(hours=5, minutes=30))
        request = ExerciseLogCreate(exercise_id=running.id, duration_minutes=10,
                                    performed_at=datetime(2026, 10, 17, 2, 0, tzinfo=ist))

        result = calorie_estimator.log_exercise(self.db, "user-1", request, now=NOW)

        self.assertEqual(result.log.performed_at, datetime(2026, 10, 16, 20, 30))


class TestEstimateByExerciseId(DatabaseTestCase):

    def test_manual_value(self):
        running = self.exercise("Running")
        result = calorie_estimator.estimate(self.db, running.id, 10, 50)
        self.assertEqual(result.calories, 50)
        self.assertEqual(result.method, "manual")

    def test_preset_rate(self):
        running = self.exercise("Running")
        result = calorie_estimator.estimate(self.db, running.id, 10, None)
        self.assertEqual(result.calories, round(running.calories_per_minute * 10))
        self.assertEqual(result.method, "automatic")

    def test_unknown_exercise(self):
        with self.assertRaises(NotFoundError):
            calorie_estimator.estimate(self.db, 9999, 10, None)

    def test_unknown_exercise_preview(self):
        with self.assertRaises(NotFoundError):
            calorie_estimator.preview_calories(self.db, 9999, 10)


if __name__ == '__main__':
    unittest.main()
