from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
from fitu.database import Base

ACTIVITY_LEVELS = ("sedentary", "lightly_active", "moderately_active", "very_active", "extremely_active")
FITNESS_GOALS = ("lose_weight", "maintain_weight", "gain_weight", "build_muscle", "improve_fitness")


class User(Base):
    __tablename__ = "users"

    # Opaque identifier issued by the identity provider
    id = Column(String(128), primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=True)
    username = Column(String(100), nullable=True)

    activity_level = Column(String(50), nullable=False, default="moderately_active")
    fitness_goal = Column(String(50), nullable=False, default="maintain_weight")
    daily_calorie_goal = Column(Integer, nullable=True)  # None or 0 = unset

    created_at = Column(DateTime, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)

    food_entries = relationship("FoodEntry", back_populates="user", cascade="all, delete")
    exercise_logs = relationship("ExerciseLog", back_populates="user", cascade="all, delete")
