import logging
from typing import Optional
from sqlalchemy.orm import Session
from fitu.models.exercise import Exercise

logger = logging.getLogger(__name__)

# Preset catalog: (name, category, muscle_groups, equipment, difficulty, cal/min, description)
DEFAULT_EXERCISES = [
    # Cardio
    ("Running", "cardio", ["legs", "core"], "none", "beginner", 12.0,
     "Running at moderate pace for cardiovascular fitness"),
    ("Walking", "cardio", ["legs"], "none", "beginner", 5.0,
     "Brisk walking for low-impact cardio"),
    ("Jumping Jacks", "cardio", ["full_body"], "none", "beginner", 8.0,
     "Full body cardio exercise"),
    ("Cycling", "cardio", ["quadriceps", "hamstrings", "calves"], "bicycle", "intermediate", 10.0,
     "Steady-state cycling at moderate resistance"),
    ("Sprint Intervals", "cardio", ["legs", "core"], "none", "advanced", 16.0,
     "Alternating all-out sprints with walking recovery"),

    # Strength
    ("Push-ups", "strength", ["chest", "shoulders", "triceps", "core"], "none", "beginner", 7.0,
     "Upper body strength exercise"),
    ("Squats", "strength", ["quadriceps", "glutes", "hamstrings"], "none", "beginner", 6.0,
     "Lower body strength exercise"),
    ("Planks", "strength", ["core", "shoulders"], "none", "beginner", 4.0,
     "Isometric core hold"),
    ("Pull-ups", "strength", ["back", "biceps", "shoulders"], "pull-up bar", "intermediate", 8.0,
     "Upper body pulling exercise"),
    ("Diamond Push-ups", "strength", ["chest", "triceps", "shoulders"], "none", "intermediate", 8.0,
     "Close-grip push-up variation emphasising the triceps"),
    ("Jump Squats", "strength", ["quadriceps", "glutes", "calves"], "none", "intermediate", 9.0,
     "Explosive squat variation"),
    ("Deadlifts", "strength", ["back", "hamstrings", "glutes"], "barbell", "intermediate", 7.0,
     "Hip hinge with a loaded barbell"),
    ("Pistol Squats", "strength", ["quadriceps", "glutes", "core"], "none", "advanced", 8.0,
     "Single-leg squat to full depth"),
    ("Muscle-ups", "strength", ["back", "chest", "triceps", "biceps"], "pull-up bar", "advanced", 10.0,
     "Pull-up transitioning into a dip above the bar"),

    # Flexibility
    ("Yoga Flow", "flexibility", ["full_body"], "mat", "beginner", 3.0,
     "Gentle flowing yoga sequence"),
    ("Static Stretching", "flexibility", ["full_body"], "none", "beginner", 2.0,
     "Hold stretches for the major muscle groups"),

    # Sports
    ("Basketball", "sports", ["legs", "shoulders", "core"], "ball", "intermediate", 9.0,
     "Recreational full-court basketball"),

    # Functional
    ("Burpees", "functional", ["full_body"], "none", "intermediate", 15.0,
     "Squat thrust with a jump"),
    ("Mountain Climbers", "functional", ["core", "shoulders", "legs"], "none", "beginner", 9.0,
     "Alternating knee drives from a plank"),
    ("Kettlebell Swings", "functional", ["glutes", "hamstrings", "back", "core"], "kettlebell", "advanced", 12.0,
     "Explosive hip hinge swinging a kettlebell"),
]


def get_exercise(db: Session, exercise_id: int):
    # Served from the identity map when already loaded in this session
    return db.get(Exercise, exercise_id)


def get_active_exercises(db: Session, category: Optional[str] = None, difficulty_level: Optional[str] = None):
    """Active catalog, ordered by category then name."""
    query = db.query(Exercise).filter(Exercise.is_active.is_(True))
    if category:
        query = query.filter(Exercise.category == category)
    if difficulty_level:
        query = query.filter(Exercise.difficulty_level == difficulty_level)
    return query.order_by(Exercise.category.asc(), Exercise.name.asc()).all()


def seed_exercises(db: Session) -> int:
    """Insert the preset catalog entries that are missing. Returns the number inserted."""
    existing = {name for (name,) in db.query(Exercise.name).all()}

    added = 0
    for name, category, muscles, equipment, difficulty, cpm, description in DEFAULT_EXERCISES:
        if name in existing:
            continue
        db.add(Exercise(
            name=name,
            category=category,
            muscle_groups=muscles,
            equipment_needed=equipment,
            difficulty_level=difficulty,
            calories_per_minute=cpm,
            description=description,
            is_active=True,
        ))
        added += 1

    if added:
        db.commit()
        logger.info(f"Seeded {added} exercises")
    return added
