import unittest
from datetime import timedelta

from fastapi.testclient import TestClient

from tests.base import DatabaseTestCase
from fitu.api.auth import create_access_token
from fitu.database import get_db
from fitu.main import app
from fitu.utils.dates import local_now


class ApiTestCase(DatabaseTestCase):

    def setUp(self):
        super().setUp()

        def override_get_db():
            yield self.db

        app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(app)
        self.headers = self.auth_headers("user-1")

    def tearDown(self):
        app.dependency_overrides.clear()
        super().tearDown()

    @staticmethod
    def auth_headers(user_id):
        return {"Authorization": f"Bearer {create_access_token({'sub': user_id})}"}


class TestAuth(ApiTestCase):

    def test_health_is_public(self):
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "healthy")

    def test_missing_token(self):
        response = self.client.get("/api/calorie-balance/daily")
        self.assertEqual(response.status_code, 401)

    def test_expired_token(self):
        token = create_access_token({"sub": "user-1"}, expires_delta=timedelta(minutes=-5))
        response = self.client.get("/api/calorie-balance/daily", headers={"Authorization": f"Bearer {token}"})
        self.assertEqual(response.status_code, 401)


class TestProfileAndBalance(ApiTestCase):

    def test_profile_upsert(self):
        self.assertEqual(self.client.get("/api/profile", headers=self.headers).status_code, 404)

        response = self.client.put("/api/profile", headers=self.headers, json={"daily_calorie_goal": 2000})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["daily_calorie_goal"], 2000)
        self.assertEqual(response.json()["fitness_goal"], "maintain_weight")

        response = self.client.put("/api/profile", headers=self.headers, json={"fitness_goal": "lose_weight"})
        self.assertEqual(response.json()["daily_calorie_goal"], 2000)
        self.assertEqual(response.json()["fitness_goal"], "lose_weight")

    def test_profile_null_clears_optional_fields(self):
        self.client.put("/api/profile", headers=self.headers,
                        json={"username": "sam", "daily_calorie_goal": 1800, "fitness_goal": "build_muscle"})

        response = self.client.put("/api/profile", headers=self.headers,
                                   json={"username": None, "daily_calorie_goal": None, "fitness_goal": None})

        body = response.json()
        self.assertIsNone(body["username"])
        self.assertIsNone(body["daily_calorie_goal"])
        self.assertEqual(body["fitness_goal"], "build_muscle")

    def test_profile_rejects_unknown_goal(self):
        response = self.client.put("/api/profile", headers=self.headers, json={"fitness_goal": "fly"})
        self.assertEqual(response.status_code, 422)

    def test_daily_balance_after_logging(self):
        self.create_user("user-1", daily_calorie_goal=2000)
        running = self.exercise("Running")

        response = self.client.post("/api/calorie-entries", headers=self.headers, json={
            "food_name": "Oats", "calories_per_serving": 300, "servings_consumed": 2, "meal_type": "breakfast",
        })
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["total_calories"], 600)

        response = self.client.post("/api/exercise-logging", headers=self.headers, json={
            "exercise_id": running.id, "duration_minutes": 10,
        })
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["calculation_method"], "automatic")

        today = local_now().date().isoformat()
        balance = self.client.get(f"/api/calorie-balance/daily?date={today}", headers=self.headers).json()
        self.assertEqual(balance["food_calories"], 600)
        self.assertEqual(balance["exercise_calories"], 120)
        self.assertEqual(balance["net_calories"], 480)
        self.assertEqual(balance["status"], "UNDER_GOAL")

        summary = self.client.get("/api/calorie-balance/summary", headers=self.headers).json()
        self.assertEqual(summary["quick_stats"]["calories_remaining"], 1520)

    def test_invalid_date(self):
        response = self.client.get("/api/calorie-balance/daily?date=14-10-2026", headers=self.headers)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["field"], "date")

        response = self.client.get("/api/calorie-balance/weekly?week_start=nope", headers=self.headers)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["field"], "week_start")

    def test_weekly_balance_shape(self):
        response = self.client.get("/api/calorie-balance/weekly?week_start=2026-10-12", headers=self.headers)
        body = response.json()
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(body["daily_balances"]), 7)
        self.assertEqual(body["success_rate"], 100)

    def test_food_entry_update_and_delete(self):
        self.create_user("user-1")
        entry = self.client.post("/api/calorie-entries", headers=self.headers, json={
            "food_name": "Apple", "calories_per_serving": 95,
        }).json()

        response = self.client.put(f"/api/calorie-entries/{entry['id']}", headers=self.headers,
                                   json={"servings_consumed": 2})
        self.assertEqual(response.json()["total_calories"], 190)

        other = self.auth_headers("user-2")
        self.assertEqual(self.client.delete(f"/api/calorie-entries/{entry['id']}", headers=other).status_code, 404)
        self.assertEqual(self.client.delete(f"/api/calorie-entries/{entry['id']}", headers=self.headers).status_code, 204)


class TestExerciseAndRecommendations(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.create_user("user-1", fitness_goal="build_muscle")

    def test_unknown_exercise(self):
        response = self.client.post("/api/exercise-logging", headers=self.headers,
                                    json={"exercise_id": 9999, "duration_minutes": 10})
        self.assertEqual(response.status_code, 404)

    def test_catalog_and_preview(self):
        catalog = self.client.get("/api/exercise-logging/exercises?category=strength", headers=self.headers).json()
        self.assertTrue(all(e["category"] == "strength" for e in catalog["exercises"]))
        self.assertEqual(list(catalog["grouped_by_category"]), ["strength"])

        squats = self.exercise("Squats")
        preview = self.client.get(f"/api/exercise-logging/preview?exercise_id={squats.id}&duration_minutes=20",
                                  headers=self.headers).json()
        self.assertEqual(preview["estimated_calories"], 120)

    def test_personalized(self):
        response = self.client.get("/api/ai-recommendations/personalized?limit=3", headers=self.headers)
        body = response.json()
        self.assertEqual(response.status_code, 200)
        self.assertLessEqual(len(body["ai_recommendations"]), 3)
        self.assertEqual(body["user_profile"]["primary_goal"], "build_muscle")

    def test_personalized_ranks_at_most_ten(self):
        response = self.client.get("/api/ai-recommendations/personalized", headers=self.headers)
        self.assertLessEqual(len(response.json()["ai_recommendations"]), 10)

        response = self.client.get("/api/ai-recommendations/personalized?limit=11", headers=self.headers)
        self.assertEqual(response.status_code, 422)

    def test_personalized_unknown_user(self):
        response = self.client.get("/api/ai-recommendations/personalized", headers=self.auth_headers("ghost"))
        self.assertEqual(response.status_code, 404)

    def test_quick_workout_requires_goal(self):
        response = self.client.get("/api/ai-recommendations/quick-workout", headers=self.headers)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["field"], "goal")

    def test_workout_analysis(self):
        response = self.client.get("/api/ai-recommendations/workout-analysis", headers=self.headers)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["total_workouts"], 0)


if __name__ == '__main__':
    unittest.main()
