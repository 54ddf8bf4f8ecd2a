from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from fitu.database import get_db
from fitu.api.auth import get_current_user_id
from fitu.schemas.recommendation import (
    QuickWorkoutResponse,
    RecommendationOptions,
    RecommendationResponse,
    WorkoutAnalysis,
)
from fitu.services.recommendation_service import RecommendationService

router = APIRouter(prefix="/api/ai-recommendations", tags=["ai-recommendations"])


@router.get("/personalized", response_model=RecommendationResponse)
def get_personalized_recommendations(
    workout_type: str = "full_body",
    duration_preference: str = "medium",
    equipment_available: str = "none",
    energy_level: str = Query("medium", pattern="^(low|medium|high)$"),
    time_constraint: Optional[int] = None,
    focus_areas: List[str] = Query([]),
    limit: int = Query(10, ge=1, le=10),
    override_goal: Optional[str] = None,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """
    Ranked workout recommendations from goal, progression, preference,
    muscle balance and recent intensity.
    """
    options = RecommendationOptions(
        workout_type=workout_type,
        duration_preference=duration_preference,
        equipment_available=equipment_available,
        energy_level=energy_level,
        time_constraint=time_constraint,
        focus_areas=focus_areas,
        limit=limit,
        override_goal=override_goal,
    )
    return RecommendationService(db).get_personalized_recommendations(user_id, options)


@router.get("/quick-workout", response_model=QuickWorkoutResponse)
def get_quick_workout(
    goal: Optional[str] = None,
    duration: Optional[int] = None,
    equipment: Optional[str] = None,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    return RecommendationService(db).get_quick_workout(user_id, goal, duration, equipment)


@router.get("/workout-analysis", response_model=WorkoutAnalysis)
def get_workout_analysis(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    return RecommendationService(db).analyze_workout_patterns(user_id)
