from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any


class RecommendationOptions(BaseModel):
    workout_type: str = "full_body"
    duration_preference: str = "medium"
    equipment_available: str = "none"
    energy_level: str = "medium"  # low, medium, high
    time_constraint: Optional[int] = None
    focus_areas: List[str] = []
    limit: int = Field(10, ge=1, le=10)
    override_goal: Optional[str] = None


class ScoredExercise(BaseModel):
    """A catalog exercise as produced by one scorer, before fusion."""

    id: int
    name: str
    category: str
    difficulty_level: str
    calories_per_minute: Optional[float] = None
    muscle_groups: List[str] = []
    equipment_needed: Optional[str] = None
    ai_score: int
    recommendation_reason: str

    # Scorer-specific details
    progression_type: Optional[str] = None
    current_performance: Optional[float] = None
    behavioral_match: Optional[List[str]] = None
    balance_benefit: Optional[List[str]] = None
    difficulty_adjustment: Optional[int] = None


class Recommendation(ScoredExercise):
    source: str
    weight: float
    final_ai_score: int
    confidence: int


class UserFitnessProfile(BaseModel):
    fitness_level: Optional[str] = None
    primary_goal: Optional[str] = None
    experience_score: int = 0


class AlgorithmBreakdown(BaseModel):
    goal_based_weight: float = 0.35
    progressive_weight: float = 0.25
    behavioral_weight: float = 0.20
    balance_weight: float = 0.15
    adaptive_weight: float = 0.05


class RecommendationResponse(BaseModel):
    user_profile: UserFitnessProfile
    ai_recommendations: List[Recommendation]
    algorithm_breakdown: AlgorithmBreakdown
    generated_at: str


class QuickWorkoutSuggestion(BaseModel):
    recommended_duration: int
    recommended_sets: Optional[int] = None
    recommended_reps: Optional[str] = None
    rest_time: str
    reason: str


class QuickWorkoutExercise(BaseModel):
    order: int
    exercise: Dict[str, Any]
    ai_suggestion: QuickWorkoutSuggestion
    confidence_score: int


class QuickWorkoutPlan(BaseModel):
    goal: str
    estimated_duration: int
    total_exercises: int
    estimated_calories: float
    exercises: List[QuickWorkoutExercise]


class QuickWorkoutResponse(BaseModel):
    user_profile: UserFitnessProfile
    workout_plan: QuickWorkoutPlan
    ai_analysis: AlgorithmBreakdown


class WorkoutAnalysis(BaseModel):
    total_workouts: int
    unique_exercises: int
    total_duration_minutes: int
    total_calories_burned: int
    average_rating: Optional[float] = None
    category_distribution: Dict[str, int]
    experience_score: int
    performance_trend: str  # improving, declining, stable, insufficient_data
    underworked_muscle_groups: List[str]
    ai_insights: List[str]
    improvement_suggestions: List[str]
