from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from fitu.models.user import ACTIVITY_LEVELS, FITNESS_GOALS

ACTIVITY_LEVEL_PATTERN = f"^({'|'.join(ACTIVITY_LEVELS)})$"
FITNESS_GOAL_PATTERN = f"^({'|'.join(FITNESS_GOALS)})$"


class UserProfileUpdate(BaseModel):
    email: Optional[str] = None
    username: Optional[str] = None
    activity_level: Optional[str] = Field(
        None,
        pattern=ACTIVITY_LEVEL_PATTERN,
        description="sedentary, lightly_active, moderately_active, very_active or extremely_active"
    )
    fitness_goal: Optional[str] = Field(
        None,
        pattern=FITNESS_GOAL_PATTERN,
        description="lose_weight, maintain_weight, gain_weight, build_muscle or improve_fitness"
    )
    daily_calorie_goal: Optional[int] = Field(None, ge=0, le=10000, description="0 = no goal")

    class Config:
        json_schema_extra = {
            "example": {
                "activity_level": "moderately_active",
                "fitness_goal": "lose_weight",
                "daily_calorie_goal": 2000
            }
        }


class UserProfileResponse(BaseModel):
    id: str
    email: Optional[str] = None
    username: Optional[str] = None
    activity_level: str
    fitness_goal: str
    daily_calorie_goal: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
