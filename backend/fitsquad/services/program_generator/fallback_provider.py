"""
FallbackProgramProvider — deterministic programs when the AI is unavailable.

Used when no AI_API_KEY is configured and whenever the AI call fails.
Pure computation over the client profile and fixed templates.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List

from fitsquad.schemas.client import ClientProfile
from fitsquad.services.program_generator.base import ProgramProvider
from fitsquad.services.program_generator.prompt import days_per_week

logger = logging.getLogger(__name__)

DEFAULT_LEVEL = 'intermediate'
TECHNIQUE_NOTE = "Assurez-vous d'avoir une bonne technique"

EXERCISE_TEMPLATES: Dict[str, List[Dict[str, Any]]] = {
    'beginner': [
        {'name': 'Squats au poids du corps', 'sets': 3, 'reps': '10-12', 'rest': 60},
        {'name': 'Pompes (genoux au sol si nécessaire)', 'sets': 3, 'reps': '8-10', 'rest': 60},
        {'name': 'Planche', 'sets': 3, 'reps': '20-30 secondes', 'rest': 45},
        {'name': 'Fentes alternées', 'sets': 3, 'reps': '10 par jambe', 'rest': 60},
        {'name': 'Étirements', 'sets': 1, 'reps': '5 minutes', 'rest': 0},
    ],
    'intermediate': [
        {'name': 'Squats avec poids', 'sets': 4, 'reps': '12-15', 'rest': 60},
        {'name': 'Pompes standard', 'sets': 4, 'reps': '12-15', 'rest': 60},
        {'name': 'Planche avec variations', 'sets': 3, 'reps': '45 secondes', 'rest': 45},
        {'name': 'Burpees', 'sets': 3, 'reps': '10', 'rest': 90},
        {'name': 'Mountain climbers', 'sets': 3, 'reps': '20', 'rest': 60},
        {'name': 'Étirements dynamiques', 'sets': 1, 'reps': '5 minutes', 'rest': 0},
    ],
    'advanced': [
        {'name': 'Squats jump', 'sets': 4, 'reps': '15', 'rest': 90},
        {'name': 'Pompes diamant', 'sets': 4, 'reps': '15', 'rest': 60},
        {'name': 'Planche avec levée de jambe', 'sets': 4, 'reps': '60 secondes', 'rest': 45},
        {'name': 'Burpees avec saut', 'sets': 4, 'reps': '15', 'rest': 90},
        {'name': 'Sprint sur place', 'sets': 4, 'reps': '30 secondes', 'rest': 60},
        {'name': 'Gainage latéral', 'sets': 3, 'reps': '45 secondes par côté', 'rest': 60},
    ],
}


def exercises_for_level(level: str | None) -> List[Dict[str, Any]]:
    """Template for a fitness level; unknown or missing levels get the intermediate set."""
    return EXERCISE_TEMPLATES.get(level or DEFAULT_LEVEL, EXERCISE_TEMPLATES[DEFAULT_LEVEL])


def build_fallback_program(client: ClientProfile) -> Dict[str, Any]:
    days = days_per_week(client)
    first_goal = client.goals[0] if client.goals else 'Fitness'
    template = exercises_for_level(client.fitness_level)

    workouts = []
    for i in range(days):
        workouts.append({
            'day': i + 1,
            'name': f'Séance {i + 1} - Full Body',
            'focus': 'Corps entier',
            'exercises': [{**ex, 'notes': TECHNIQUE_NOTE} for ex in template],
        })

    return {
        'name': f'Programme {first_goal} pour {client.name}',
        'description': (
            "Programme d'entraînement personnalisé basé sur votre niveau "
            f"{client.fitness_level or DEFAULT_LEVEL}"
        ),
        'duration': days * 4,
        'frequency': days,
        'generated_by_ai': False,
        'workouts': workouts,
    }


class FallbackProgramProvider(ProgramProvider):
    """Deterministic provider — no API key, no network."""

    async def generate(self, client: ClientProfile) -> Dict[str, Any]:
        logger.info(
            'FallbackProgramProvider.generate — client=%s level=%s days=%d',
            client.name,
            client.fitness_level,
            days_per_week(client),
        )
        return build_fallback_program(client)
