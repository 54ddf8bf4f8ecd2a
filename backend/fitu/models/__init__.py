# Import all models here
from fitu.models.user import User
from fitu.models.exercise import Exercise
from fitu.models.tracking import FoodEntry, ExerciseLog
