"""Turn a generated program's workouts into the stored weekly schedule."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

WEEKDAYS = ('monday', 'tuesday', 'wednesday', 'thursday', 'friday', 'saturday', 'sunday')
WORKOUT_TYPE = 'mixed'
DEFAULT_SESSION_DURATION = 60
WARMUP = 'Échauffement : 5-10 minutes de cardio léger'
COOLDOWN = 'Retour au calme : étirements 5-10 minutes'


def adapt_workouts(program: Dict[str, Any], session_duration: Optional[int]) -> List[Dict[str, Any]]:
    """
    Map generated workouts onto weekdays.

    Workout *i* lands on ``WEEKDAYS[i % 7]`` (monday first) regardless of the
    generated ``day`` index, and gets the client's session duration.
    """
    adapted = []
    for index, workout in enumerate(program.get('workouts') or []):
        adapted.append({
            'day': WEEKDAYS[index % len(WEEKDAYS)],
            'name': workout.get('name'),
            'type': WORKOUT_TYPE,
            'duration': session_duration or DEFAULT_SESSION_DURATION,
            'exercises': list(workout.get('exercises') or []),
            'warmup': WARMUP,
            'cooldown': COOLDOWN,
        })
    return adapted
