from sqlalchemy import Column, Integer, String, Float, ForeignKey, DateTime, Text, Index
from sqlalchemy.orm import relationship
from datetime import datetime
from fitu.database import Base


class FoodEntry(Base):
    __tablename__ = "calorie_entries"
    __table_args__ = (
        Index("ix_calorie_entries_user_consumed", "user_id", "consumed_at"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(128), ForeignKey("users.id"), nullable=False)

    # Logged Item
    food_name = Column(String(255), nullable=False)
    brand = Column(String(255), nullable=True)
    serving_size = Column(String(100), nullable=False, default="1 serving")
    calories_per_serving = Column(Integer, nullable=False)
    servings_consumed = Column(Float, nullable=False, default=1.0)

    # Macros per serving
    protein_g = Column(Float, default=0.0)
    carbs_g = Column(Float, default=0.0)
    fat_g = Column(Float, default=0.0)
    fiber_g = Column(Float, default=0.0)
    sugar_g = Column(Float, default=0.0)
    sodium_mg = Column(Float, default=0.0)

    meal_type = Column(String(20), nullable=False, default="snack")
    consumed_at = Column(DateTime, nullable=False, default=datetime.now)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.now)

    user = relationship("User", back_populates="food_entries")

    @property
    def total_calories(self) -> int:
        # Derived on read, never stored
        return round(self.calories_per_serving * self.servings_consumed)


class ExerciseLog(Base):
    __tablename__ = "user_exercises"
    __table_args__ = (
        Index("ix_user_exercises_user_performed", "user_id", "performed_at"),
        Index("ix_user_exercises_user_exercise", "user_id", "exercise_id"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(128), ForeignKey("users.id"), nullable=False)
    exercise_id = Column(Integer, ForeignKey("exercises.id"), nullable=False, index=True)

    # Detailed Metrics
    duration_minutes = Column(Integer, nullable=True)
    sets = Column(Integer, nullable=True)
    reps = Column(Integer, nullable=True)
    weight_kg = Column(Float, nullable=True)
    distance_km = Column(Float, nullable=True)

    # Fixed at creation time (manual override or preset rate x duration)
    calories_burned = Column(Integer, nullable=True)

    performed_at = Column(DateTime, nullable=False, default=datetime.now)
    notes = Column(Text, nullable=True)
    rating = Column(Integer, nullable=True)  # 1-5 stars

    created_at = Column(DateTime, default=datetime.now)

    user = relationship("User", back_populates="exercise_logs")
    exercise = relationship("Exercise", lazy="joined")
