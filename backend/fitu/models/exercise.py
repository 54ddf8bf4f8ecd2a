from sqlalchemy import Column, Integer, String, Float, Boolean, Text, JSON
from fitu.database import Base


class Exercise(Base):
    __tablename__ = "exercises"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)
    category = Column(String(20), nullable=False, index=True)          # e.g. cardio, strength
    difficulty_level = Column(String(20), nullable=False, default="beginner", index=True)
    calories_per_minute = Column(Float, nullable=True)                  # preset rate for an average person
    muscle_groups = Column(JSON, nullable=True)                         # e.g. ["chest", "triceps"]
    equipment_needed = Column(String(100), nullable=True, default="none")
    description = Column(Text, nullable=True)
    instructions = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True, index=True)
