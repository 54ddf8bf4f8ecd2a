"""
Exercise Recommendation Scorers
-------------------------------
Five independent heuristics, each a pure function of the same ScoringContext:

1. Goal-based          (0.35) - categories that serve the user's fitness goal
2. Progressive overload (0.25) - harder variants of exercises the user is improving on
3. Behavioral          (0.20) - untried exercises similar to highly rated ones
4. Balance & recovery  (0.15) - exercises for muscle groups not trained this week
5. Adaptive difficulty (0.05) - difficulty nudged by performance trend and energy

fuse_recommendations() combines their outputs into one ranked list.
"""
import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Callable, Dict, List, Optional, Sequence, Set, Tuple

from fitu.models.exercise import Exercise
from fitu.models.tracking import ExerciseLog
from fitu.schemas.recommendation import Recommendation, RecommendationOptions, ScoredExercise

logger = logging.getLogger(__name__)

GOAL_MAPPINGS = {
    "lose_weight": {
        "priorities": ["cardio", "functional"],
        "intensity": "high",
        "duration_preference": "medium_long",
        "calorie_focus": True,
    },
    "build_muscle": {
        "priorities": ["strength"],
        "intensity": "high",
        "duration_preference": "medium",
        "progression_focus": True,
    },
    "improve_fitness": {
        "priorities": ["cardio", "functional", "strength"],
        "intensity": "medium",
        "duration_preference": "medium",
        "balanced": True,
    },
    "maintain_weight": {
        "priorities": ["cardio", "strength", "flexibility"],
        "intensity": "medium",
        "duration_preference": "short_medium",
        "maintenance": True,
    },
    "gain_weight": {
        "priorities": ["strength"],
        "intensity": "high",
        "duration_preference": "medium_long",
        "strength_focus": True,
    },
}
DEFAULT_GOAL = "improve_fitness"

DIFFICULTY_ORDER = ["beginner", "intermediate", "advanced"]
ACTIVITY_DIFFICULTY = {
    "sedentary": "beginner",
    "lightly_active": "beginner",
    "moderately_active": "intermediate",
    "very_active": "intermediate",
    "extremely_active": "advanced",
}
DEFAULT_ACTIVITY_LEVEL = "moderately_active"

TRACKED_MUSCLE_GROUPS = ["chest", "back", "shoulders", "arms", "core", "legs"]
MUSCLE_GROUP_ALIASES = {
    "biceps": "arms",
    "triceps": "arms",
    "forearms": "arms",
    "quadriceps": "legs",
    "quads": "legs",
    "hamstrings": "legs",
    "glutes": "legs",
    "calves": "legs",
    "abs": "core",
    "obliques": "core",
    "lats": "back",
    "lower_back": "back",
    "traps": "back",
}

# Thresholds
PROGRESSIVE_MIN_LOGS = 3
PROGRESSION_WINDOW = 5
BEHAVIORAL_MIN_LOGS = 5
HIGH_RATING = 4
BALANCE_WINDOW_DAYS = 7
TREND_MIN_SESSIONS = 4
TREND_WINDOW = 10
TREND_TOLERANCE = 0.10

# Caps
PROGRESSIVE_LIMIT = 5
BALANCE_LIMIT = 4
ADAPTIVE_LIMIT = 5


@dataclass
class ScoringContext:
    """Everything a scorer may read. Fetched once per request, never mutated."""

    fitness_goal: Optional[str]
    activity_level: Optional[str]
    history: Sequence[ExerciseLog]      # newest first
    catalog: Sequence[Exercise]         # active exercises only
    options: RecommendationOptions = field(default_factory=RecommendationOptions)
    now: datetime = field(default_factory=datetime.now)


@dataclass
class ProgressionAnalysis:
    ready_for_advancement: bool = False
    confidence_score: int = 0
    type: Optional[str] = None  # weight, reps or duration
    current_level: Optional[float] = None
    current_exercise_name: Optional[str] = None


@dataclass
class Scorer:
    source: str
    weight: float
    score: Callable[[ScoringContext], List[ScoredExercise]]


# --- Helpers ---

def difficulty_rank(difficulty: Optional[str]) -> int:
    try:
        return DIFFICULTY_ORDER.index(difficulty)
    except ValueError:
        return 0


def expected_difficulty(activity_level: Optional[str]) -> Optional[str]:
    return ACTIVITY_DIFFICULTY.get(activity_level or DEFAULT_ACTIVITY_LEVEL)


def adjust_difficulty_level(activity_level: Optional[str], adjustment: int) -> str:
    base = expected_difficulty(activity_level) or ACTIVITY_DIFFICULTY[DEFAULT_ACTIVITY_LEVEL]
    index = difficulty_rank(base) + adjustment
    index = max(0, min(len(DIFFICULTY_ORDER) - 1, index))
    return DIFFICULTY_ORDER[index]


def extract_muscle_groups(exercise: Optional[Exercise]) -> Set[str]:
    """Map an exercise's muscle groups onto the tracked groups."""
    if exercise is None:
        return set()

    groups = set()
    for raw in exercise.muscle_groups or []:
        name = str(raw).strip().lower().replace(" ", "_").replace("-", "_")
        if name == "full_body":
            groups.update(TRACKED_MUSCLE_GROUPS)
            continue
        name = MUSCLE_GROUP_ALIASES.get(name, name)
        if name in TRACKED_MUSCLE_GROUPS:
            groups.add(name)
    return groups


def to_scored(exercise: Exercise, ai_score: int, reason: str, **details) -> ScoredExercise:
    return ScoredExercise(
        id=exercise.id,
        name=exercise.name,
        category=exercise.category,
        difficulty_level=exercise.difficulty_level,
        calories_per_minute=exercise.calories_per_minute,
        muscle_groups=list(exercise.muscle_groups or []),
        equipment_needed=exercise.equipment_needed,
        ai_score=ai_score,
        recommendation_reason=reason,
        **details,
    )


def group_exercises_by_type(history: Sequence[ExerciseLog]) -> Dict[int, List[ExerciseLog]]:
    """Group logs by exercise id, each group in chronological order."""
    groups: Dict[int, List[ExerciseLog]] = {}
    for log in history:
        groups.setdefault(log.exercise_id, []).append(log)
    return {
        exercise_id: sorted(sessions, key=lambda s: (s.performed_at, s.id or 0))
        for exercise_id, sessions in groups.items()
    }


def calculate_experience_score(history: Sequence[ExerciseLog]) -> int:
    unique_exercises = len({log.exercise_id for log in history})
    return min(100, len(history) * 2 + unique_exercises * 5)


def calculate_confidence(source: str, ai_score: int) -> int:
    confidence = 50
    if source == "goal_based":
        confidence += 30
    if ai_score > 80:
        confidence += 20
    return min(100, confidence)


# --- 1. Goal-based ---

def generate_goal_based_reason(exercise: Exercise, goal_config: dict) -> str:
    if goal_config.get("calorie_focus"):
        return f"Great for weight loss - burns {exercise.calories_per_minute or 0:g} cal/min"
    if goal_config.get("strength_focus"):
        return "Perfect for building muscle strength"
    return "Aligns with your fitness goal"


def score_goal_based(ctx: ScoringContext) -> List[ScoredExercise]:
    goal_config = GOAL_MAPPINGS.get(ctx.fitness_goal) or GOAL_MAPPINGS[DEFAULT_GOAL]
    priorities = goal_config["priorities"]
    target_difficulty = expected_difficulty(ctx.activity_level)

    scored = []
    for exercise in ctx.catalog:
        if exercise.category not in priorities:
            continue

        score = (len(priorities) - priorities.index(exercise.category)) * 20
        if goal_config.get("calorie_focus") and (exercise.calories_per_minute or 0) > 8:
            score += 25
        if goal_config.get("strength_focus") and exercise.category == "strength":
            score += 30
        if target_difficulty and exercise.difficulty_level == target_difficulty:
            score += 15

        scored.append(to_scored(exercise, score, generate_goal_based_reason(exercise, goal_config)))

    scored.sort(key=lambda s: s.ai_score, reverse=True)
    return scored[:ctx.options.limit]


# --- 2. Progressive overload ---

def _performance_series(sessions: Sequence[ExerciseLog]) -> Tuple[Optional[str], List[float]]:
    """Weight if any session recorded it, else reps, else duration."""
    for attr, label in (("weight_kg", "weight"), ("reps", "reps"), ("duration_minutes", "duration")):
        values = [float(getattr(s, attr)) for s in sessions if getattr(s, attr) is not None]
        if values:
            return label, values
    return None, []


def analyze_progression(sessions: Sequence[ExerciseLog]) -> ProgressionAnalysis:
    """
    Ready when the recent sessions never regress and improve at least twice.
    Confidence (0-10) is the share of improving steps.
    """
    name = sessions[-1].exercise.name if sessions and sessions[-1].exercise is not None else None
    metric, values = _performance_series(sessions)
    window = values[-PROGRESSION_WINDOW:]
    if len(window) < PROGRESSIVE_MIN_LOGS:
        return ProgressionAnalysis(type=metric, current_exercise_name=name)

    steps = [later - earlier for earlier, later in zip(window, window[1:])]
    improvements = sum(1 for step in steps if step > 0)
    declines = sum(1 for step in steps if step < 0)

    return ProgressionAnalysis(
        ready_for_advancement=declines == 0 and improvements >= 2,
        confidence_score=round(improvements / len(steps) * 10),
        type=metric,
        current_level=window[-1],
        current_exercise_name=name,
    )


def find_progression_exercise(source: Optional[Exercise], catalog: Sequence[Exercise]) -> Optional[Exercise]:
    """Harder exercise in the same category, preferring shared muscle groups and the smallest step up."""
    if source is None:
        return None

    source_rank = difficulty_rank(source.difficulty_level)
    source_groups = extract_muscle_groups(source)

    candidates = [
        e for e in catalog
        if e.id != source.id
        and e.category == source.category
        and difficulty_rank(e.difficulty_level) > source_rank
    ]
    if not candidates:
        return None

    return min(
        candidates,
        key=lambda e: (-len(extract_muscle_groups(e) & source_groups), difficulty_rank(e.difficulty_level), e.name),
    )


def score_progressive_overload(ctx: ScoringContext) -> List[ScoredExercise]:
    if len(ctx.history) < PROGRESSIVE_MIN_LOGS:
        return []

    progressions = []
    seen = set()
    for exercise_id, sessions in group_exercises_by_type(ctx.history).items():
        progression = analyze_progression(sessions)
        if not progression.ready_for_advancement:
            continue

        next_level = find_progression_exercise(sessions[-1].exercise, ctx.catalog)
        if next_level is None or next_level.id in seen:
            continue
        seen.add(next_level.id)

        progressions.append(to_scored(
            next_level,
            85 + progression.confidence_score,
            f"Ready to progress from {progression.current_exercise_name}",
            progression_type=progression.type,
            current_performance=progression.current_level,
        ))

    return progressions[:PROGRESSIVE_LIMIT]


# --- 3. Behavioral ---

def analyze_behavioral_patterns(history: Sequence[ExerciseLog]) -> dict:
    liked = [log for log in history if (log.rating or 0) >= HIGH_RATING]
    categories = Counter(log.exercise.category for log in liked if log.exercise is not None)
    return {
        "preferred_categories": [category for category, _ in categories.most_common()],
        "confidence": round(len(liked) / len(history) * 20) if history else 0,
    }


def score_behavioral(ctx: ScoringContext) -> List[ScoredExercise]:
    if len(ctx.history) < BEHAVIORAL_MIN_LOGS:
        return []

    liked = [log for log in ctx.history if (log.rating or 0) >= HIGH_RATING]
    if not liked:
        return []

    preferences = analyze_behavioral_patterns(ctx.history)
    preferred = preferences["preferred_categories"]
    tried = {log.exercise_id for log in ctx.history}

    liked_groups = set()
    for log in liked:
        liked_groups |= extract_muscle_groups(log.exercise)

    def category_rank(exercise):
        return preferred.index(exercise.category) if exercise.category in preferred else len(preferred)

    similar = [
        e for e in ctx.catalog
        if e.id not in tried
        and (e.category in preferred or extract_muscle_groups(e) & liked_groups)
    ]
    similar.sort(key=lambda e: (category_rank(e), -len(extract_muscle_groups(e) & liked_groups), e.name))

    return [
        to_scored(
            exercise,
            70 + preferences["confidence"],
            "Similar to exercises you rated highly",
            behavioral_match=preferred,
        )
        for exercise in similar
    ]


# --- 4. Balance & recovery ---

def analyze_muscle_group_balance(recent: Sequence[ExerciseLog]) -> dict:
    worked = set()
    for log in recent:
        worked |= extract_muscle_groups(log.exercise)
    return {
        "worked": [g for g in TRACKED_MUSCLE_GROUPS if g in worked],
        "underworked": [g for g in TRACKED_MUSCLE_GROUPS if g not in worked],
    }


def recent_logs(history: Sequence[ExerciseLog], now: datetime, days: int = BALANCE_WINDOW_DAYS) -> List[ExerciseLog]:
    cutoff = now - timedelta(days=days)
    return [log for log in history if log.performed_at >= cutoff]


def score_balance_and_recovery(ctx: ScoringContext) -> List[ScoredExercise]:
    underworked = analyze_muscle_group_balance(recent_logs(ctx.history, ctx.now))["underworked"]
    if not underworked:
        return []

    targets = set(underworked)
    reason = f"Targets underworked muscle groups: {', '.join(underworked)}"

    recommendations = [
        to_scored(exercise, 75, reason, balance_benefit=underworked)
        for exercise in ctx.catalog
        if extract_muscle_groups(exercise) & targets
    ]
    return recommendations[:BALANCE_LIMIT]


# --- 5. Adaptive difficulty ---

def analyze_recent_performance(history: Sequence[ExerciseLog]) -> dict:
    """
    Intensity (calories per minute) of the newer half of recent sessions
    compared with the older half.
    """
    sessions = sorted(
        (log for log in history if log.duration_minutes and log.calories_burned),
        key=lambda log: (log.performed_at, log.id or 0),
    )[-TREND_WINDOW:]

    if len(sessions) < TREND_MIN_SESSIONS:
        return {"trend": "insufficient_data", "trending_up": False, "trending_down": False}

    intensities = [log.calories_burned / log.duration_minutes for log in sessions]
    half = len(intensities) // 2
    older = sum(intensities[:half]) / half
    newer = sum(intensities[-half:]) / half

    trending_up = newer > older * (1 + TREND_TOLERANCE)
    trending_down = newer < older * (1 - TREND_TOLERANCE)
    trend = "improving" if trending_up else "declining" if trending_down else "stable"
    return {"trend": trend, "trending_up": trending_up, "trending_down": trending_down}


def score_adaptive_difficulty(ctx: ScoringContext) -> List[ScoredExercise]:
    performance = analyze_recent_performance(ctx.history)

    adjustment = 0
    if performance["trending_up"]:
        adjustment = 1
    elif performance["trending_down"]:
        adjustment = -1

    if ctx.options.energy_level == "low":
        adjustment -= 1
    elif ctx.options.energy_level == "high":
        adjustment += 1

    target = adjust_difficulty_level(ctx.activity_level, adjustment)
    matching = [e for e in ctx.catalog if e.difficulty_level == target][:ADAPTIVE_LIMIT]

    return [
        to_scored(exercise, 60, "Adapted to your current fitness state", difficulty_adjustment=adjustment)
        for exercise in matching
    ]


# --- Fusion ---

SCORERS = [
    Scorer("goal_based", 0.35, score_goal_based),
    Scorer("progressive", 0.25, score_progressive_overload),
    Scorer("behavioral", 0.20, score_behavioral),
    Scorer("balance", 0.15, score_balance_and_recovery),
    Scorer("adaptive", 0.05, score_adaptive_difficulty),
]


def run_scorers(ctx: ScoringContext, scorers: Sequence[Scorer] = SCORERS) -> List[Tuple[Scorer, List[ScoredExercise]]]:
    results = []
    for scorer in scorers:
        items = scorer.score(ctx)
        logger.debug(f"Scorer {scorer.source} produced {len(items)} candidates")
        results.append((scorer, items))
    return results


def fuse_recommendations(results: Sequence[Tuple[Scorer, List[ScoredExercise]]], limit: int = 10) -> List[Recommendation]:
    """
    Concatenate in scorer order, keep the first occurrence of each exercise,
    weight the raw score by its source and rank.
    """
    seen = set()
    fused = []
    for scorer, items in results:
        for item in items:
            if item.id in seen:
                continue
            seen.add(item.id)
            fused.append(Recommendation(
                **item.model_dump(),
                source=scorer.source,
                weight=scorer.weight,
                final_ai_score=round(item.ai_score * scorer.weight),
                confidence=calculate_confidence(scorer.source, item.ai_score),
            ))

    fused.sort(key=lambda r: r.final_ai_score, reverse=True)
    return fused[:limit]
