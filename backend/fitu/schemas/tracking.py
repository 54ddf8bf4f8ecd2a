from pydantic import BaseModel, Field
from typing import Optional, Literal, List, Dict, Any
from datetime import datetime

MealType = Literal["breakfast", "lunch", "dinner", "snack"]


# --- Food entries ---

class FoodEntryCreate(BaseModel):
    food_name: str = Field(..., min_length=1, max_length=255)
    brand: Optional[str] = None
    serving_size: str = "1 serving"
    calories_per_serving: int = Field(..., ge=0, le=10000)
    servings_consumed: float = Field(1.0, ge=0.01, le=100)
    protein_g: float = Field(0, ge=0)
    carbs_g: float = Field(0, ge=0)
    fat_g: float = Field(0, ge=0)
    fiber_g: float = Field(0, ge=0)
    sugar_g: float = Field(0, ge=0)
    sodium_mg: float = Field(0, ge=0)
    meal_type: MealType = "snack"
    consumed_at: Optional[datetime] = None
    notes: Optional[str] = None


class FoodEntryUpdate(BaseModel):
    food_name: Optional[str] = Field(None, min_length=1, max_length=255)
    brand: Optional[str] = None
    serving_size: Optional[str] = None
    calories_per_serving: Optional[int] = Field(None, ge=0, le=10000)
    servings_consumed: Optional[float] = Field(None, ge=0.01, le=100)
    protein_g: Optional[float] = Field(None, ge=0)
    carbs_g: Optional[float] = Field(None, ge=0)
    fat_g: Optional[float] = Field(None, ge=0)
    fiber_g: Optional[float] = Field(None, ge=0)
    sugar_g: Optional[float] = Field(None, ge=0)
    sodium_mg: Optional[float] = Field(None, ge=0)
    meal_type: Optional[MealType] = None
    consumed_at: Optional[datetime] = None
    notes: Optional[str] = None


class FoodEntryResponse(BaseModel):
    id: int
    user_id: str
    food_name: str
    brand: Optional[str] = None
    serving_size: str
    calories_per_serving: int
    servings_consumed: float
    total_calories: int
    protein_g: float
    carbs_g: float
    fat_g: float
    fiber_g: float
    sugar_g: float
    sodium_mg: float
    meal_type: str
    consumed_at: datetime
    notes: Optional[str] = None

    class Config:
        from_attributes = True


class DailyFoodTotals(BaseModel):
    total_calories: float = 0
    total_protein: float = 0
    total_carbs: float = 0
    total_fat: float = 0
    total_fiber: float = 0
    total_sugar: float = 0
    total_sodium: float = 0
    entry_count: int = 0


class DailyFoodLog(BaseModel):
    date: str
    entries: List[FoodEntryResponse]
    daily_totals: DailyFoodTotals


# --- Exercise logs ---

class ExerciseLogCreate(BaseModel):
    exercise_id: int
    duration_minutes: Optional[int] = Field(None, ge=1, le=1440)
    sets: Optional[int] = Field(None, ge=1, le=100)
    reps: Optional[int] = Field(None, ge=1, le=1000)
    weight_kg: Optional[float] = Field(None, ge=0, le=1000)
    distance_km: Optional[float] = Field(None, ge=0, le=1000)
    calories_burned: Optional[int] = Field(None, ge=0, le=5000)  # manual override
    performed_at: Optional[datetime] = None
    notes: Optional[str] = None
    rating: Optional[int] = Field(None, ge=1, le=5)


class ExerciseSummary(BaseModel):
    id: int
    name: str
    category: str
    difficulty_level: str
    calories_per_minute: Optional[float] = None
    muscle_groups: Optional[List[str]] = None
    equipment_needed: Optional[str] = None

    class Config:
        from_attributes = True


class ExerciseLogResponse(BaseModel):
    id: int
    user_id: str
    exercise_id: int
    duration_minutes: Optional[int] = None
    sets: Optional[int] = None
    reps: Optional[int] = None
    weight_kg: Optional[float] = None
    distance_km: Optional[float] = None
    calories_burned: Optional[int] = None
    performed_at: datetime
    notes: Optional[str] = None
    rating: Optional[int] = None
    exercise: Optional[ExerciseSummary] = None

    class Config:
        from_attributes = True


class CalorieEstimate(BaseModel):
    calories: int
    method: Literal["manual", "automatic"]


class SmartSuggestion(BaseModel):
    type: str
    message: str
    confidence: str
    suggested_action: str


class UserExerciseStats(BaseModel):
    total_workouts: int = 0
    manual_input_rate: int = 0
    is_likely_tracker_user: bool = False
    avg_manual_vs_preset_diff: int = 0


class ExerciseLogResult(BaseModel):
    log: ExerciseLogResponse
    calculation_method: Literal["manual", "automatic"]
    preset_calories_per_min: Optional[float] = None
    smart_suggestion: Optional[SmartSuggestion] = None
    user_stats: Dict[str, Any]


class CaloriePreview(BaseModel):
    exercise: ExerciseSummary
    duration_minutes: int
    estimated_calories: int
    calculation: str
    suggestion: str


class DailyExerciseTotals(BaseModel):
    total_calories_burned: int = 0
    total_duration_minutes: int = 0
    total_exercises: int = 0


class DailyExerciseLog(BaseModel):
    date: str
    exercises: List[ExerciseLogResponse]
    daily_totals: DailyExerciseTotals


class ExerciseCatalog(BaseModel):
    exercises: List[ExerciseSummary]
    grouped_by_category: Dict[str, List[ExerciseSummary]]
    total_count: int
