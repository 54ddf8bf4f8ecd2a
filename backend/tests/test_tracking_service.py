from datetime import date, datetime, timedelta, timezone
from unittest.mock import patch

from tests.base import DatabaseTestCase
from fitu.exceptions import NotFoundError
from fitu.schemas.tracking import FoodEntryCreate, FoodEntryUpdate
from fitu.services import tracking_service

DAY = date(2026, 10, 14)
NOW = datetime(2026, 10, 14, 12, 30)


class TestTrackingService(DatabaseTestCase):

    def setUp(self):
        super().setUp()
        self.create_user("user-1")

    def test_log_food_defaults_to_now(self):
        entry = tracking_service.log_food_entry(
            self.db, "user-1", FoodEntryCreate(food_name="Rice", calories_per_serving=200, servings_consumed=1.5), now=NOW
        )
        self.assertEqual(entry.consumed_at, NOW)
        self.assertEqual(entry.total_calories, 300)

    def test_log_food_requires_user(self):
        with self.assertRaises(NotFoundError):
            tracking_service.log_food_entry(self.db, "ghost", FoodEntryCreate(food_name="Rice", calories_per_serving=200))

    def test_daily_food_log_scales_macros(self):
        self.add_food("user-1", 150, datetime(2026, 10, 14, 8, 0), servings=2, protein_g=5, carbs_g=27, fat_g=3)
        self.add_food("user-1", 100, datetime(2026, 10, 14, 15, 0), protein_g=1)
        self.add_food("user-1", 900, datetime(2026, 10, 15, 8, 0))

        log = tracking_service.get_daily_food_log(self.db, "user-1", DAY)

        self.assertEqual(log.date, "2026-10-14")
        self.assertEqual(log.daily_totals.entry_count, 2)
        self.assertEqual(log.daily_totals.total_calories, 400)
        self.assertEqual(log.daily_totals.total_protein, 11)
        self.assertEqual(log.daily_totals.total_carbs, 54)
        self.assertEqual([e.food_name for e in log.entries], ["Test food", "Test food"])

    def test_update_and_delete_are_owner_only(self):
        self.create_user("user-2")
        entry = self.add_food("user-1", 100, NOW)

        with self.assertRaises(NotFoundError):
            tracking_service.update_food_entry(self.db, "user-2", entry.id, FoodEntryUpdate(servings_consumed=3))
        with self.assertRaises(NotFoundError):
            tracking_service.delete_food_entry(self.db, "user-2", entry.id)

        updated = tracking_service.update_food_entry(self.db, "user-1", entry.id, FoodEntryUpdate(servings_consumed=3))
        self.assertEqual(updated.total_calories, 300)
        tracking_service.delete_food_entry(self.db, "user-1", entry.id)
        self.assertEqual(tracking_service.get_daily_food_log(self.db, "user-1", DAY).daily_totals.entry_count, 0)

    @patch("fitu.utils.dates.APP_TIMEZONE", "UTC")
    def test_offset_timestamps_land_on_the_server_local_day(self):
        ist = timezone(timedelta(hours=5, minutes=30))
        # 02:00 +05:30 on the 17th is 20:30 UTC on the 16th
        entry = tracking_service.log_food_entry(
            self.db, "user-1",
            FoodEntryCreate(food_name="Dosa", calories_per_serving=500, consumed_at=datetime(2026, 10, 17, 2, 0, tzinfo=ist)),
        )
        self.assertEqual(entry.consumed_at, datetime(2026, 10, 16, 20, 30))
        self.assertEqual(tracking_service.get_daily_food_log(self.db, "user-1", date(2026, 10, 16)).daily_totals.total_calories, 500)
        self.assertEqual(tracking_service.get_daily_food_log(self.db, "user-1", date(2026, 10, 17)).daily_totals.entry_count, 0)

        moved = tracking_service.update_food_entry(
            self.db, "user-1", entry.id,
            FoodEntryUpdate(consumed_at=datetime(2026, 10, 18, 1, 0, tzinfo=timezone.utc)),
        )
        self.assertEqual(moved.consumed_at, datetime(2026, 10, 18, 1, 0))

    def test_update_clears_optional_fields_but_keeps_required_ones(self):
        entry = self.add_food("user-1", 100, NOW, brand="Acme", notes="after gym")

        updated = tracking_service.update_food_entry(
            self.db, "user-1", entry.id, FoodEntryUpdate(brand=None, notes=None, food_name=None)
        )

        self.assertIsNone(updated.brand)
        self.assertIsNone(updated.notes)
        self.assertEqual(updated.food_name, "Test food")

    def test_daily_exercise_log(self):
        self.add_log("user-1", self.exercise("Squats"), datetime(2026, 10, 14, 7, 0), duration_minutes=20, calories_burned=120)
        self.add_log("user-1", self.exercise("Walking"), datetime(2026, 10, 14, 19, 0), duration_minutes=30, calories_burned=150)

        log = tracking_service.get_daily_exercise_log(self.db, "user-1", DAY)

        self.assertEqual(log.daily_totals.total_exercises, 2)
        self.assertEqual(log.daily_totals.total_calories_burned, 270)
        self.assertEqual(log.daily_totals.total_duration_minutes, 50)
        self.assertEqual(log.exercises[0].exercise.name, "Squats")

    def test_exercise_catalog(self):
        catalog = tracking_service.get_exercise_catalog(self.db)
        self.assertEqual(catalog.total_count, 20)
        self.assertIn("flexibility", catalog.grouped_by_category)

        beginner_cardio = tracking_service.get_exercise_catalog(self.db, "cardio", "beginner")
        self.assertEqual(sorted(e.name for e in beginner_cardio.exercises), ["Jumping Jacks", "Running", "Walking"])
