"""Stock exercises offered when the user replaces an exercise."""
from typing import List, Optional

from workout_scheduler_api.models import Exercise

REPLACEMENT_CATALOG: List[Exercise] = [
    Exercise(id="new-1", name="Push-ups", duration=15, sets=3, reps=15),
    Exercise(id="new-2", name="Lunges", duration=20, sets=3, reps=12),
    Exercise(id="new-3", name="Yoga", duration=30),
    Exercise(id="new-4", name="Cycling", duration=40),
    Exercise(id="new-5", name="Dumbbell Curls", duration=25, sets=3, reps=10),
]


def replacement_options() -> List[Exercise]:
    return [exercise.model_copy() for exercise in REPLACEMENT_CATALOG]


def find_replacement(exercise_id: str) -> Optional[Exercise]:
    for exercise in REPLACEMENT_CATALOG:
        if exercise.id == exercise_id:
            return exercise.model_copy()
    return None
