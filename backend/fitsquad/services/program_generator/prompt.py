"""
Prompt construction for AI program generation.

The prompt is in French, like every program the service produces, and
describes the exact JSON document the model must return.
"""
from __future__ import annotations

from typing import List, Optional

from fitsquad.schemas.client import ClientProfile

DEFAULT_DAYS_PER_WEEK = 3
DEFAULT_SESSION_DURATION = 60
DEFAULT_PREFERRED_TIME = 'morning'
DEFAULT_EQUIPMENT = 'bodyweight'
DEFAULT_GOALS = 'Fitness général'
UNSPECIFIED = 'non spécifié'

SYSTEM_PROMPT = (
    "Tu es un coach sportif expert qui crée des programmes d'entraînement "
    "personnalisés. Réponds toujours en JSON valide."
)

USER_PROMPT = """\
Crée un programme d'entraînement personnalisé pour un client avec les caractéristiques suivantes:

- Nom: {name}
- Âge: {age} ans
- Poids: {weight} kg
- Taille: {height} cm
- Niveau de fitness: {fitness_level}
- Objectifs: {goals}
- Disponibilité: {days_per_week} jours/semaine ({available_days}), {session_duration} minutes/session
- Moment préféré: {preferred_time}
- Équipement disponible: {equipment}
{medical_section}
Génère un programme d'entraînement structuré sur {weeks} semaines avec:
1. Un nom de programme accrocheur
2. Une description détaillée
3. Des séances d'entraînement pour chaque jour disponible
4. Pour chaque séance, liste 5-8 exercices avec:
   - Nom de l'exercice
   - Nombre de séries
   - Nombre de répétitions (ou durée en secondes)
   - Temps de repos entre les séries
   - Notes et conseils d'exécution

Format de réponse JSON:
{{
  "name": "Nom du programme",
  "description": "Description détaillée",
  "duration": {weeks},
  "frequency": {days_per_week},
  "workouts": [
    {{
      "day": 1,
      "name": "Nom de la séance",
      "focus": "Zone ciblée",
      "exercises": [
        {{
          "name": "Nom de l'exercice",
          "sets": 3,
          "reps": "10-12",
          "rest": 60,
          "notes": "Conseils d'exécution"
        }}
      ]
    }}
  ]
}}
"""


def days_per_week(client: ClientProfile) -> int:
    """Sessions per week: one per available day, 3 when none are listed."""
    return len(client.available_days or []) or DEFAULT_DAYS_PER_WEEK


def _joined(values: Optional[List[str]], default: str) -> str:
    return ', '.join(values) if values else default


def _value(value) -> str:
    return UNSPECIFIED if value is None else str(value)


def build_program_prompt(client: ClientProfile) -> str:
    days = days_per_week(client)
    medical_section = ''
    if client.medical_conditions:
        medical_section = f"- Conditions médicales: {', '.join(client.medical_conditions)}\n"

    return USER_PROMPT.format(
        name=client.name,
        age=_value(client.age),
        weight=_value(client.weight),
        height=_value(client.height),
        fitness_level=_value(client.fitness_level),
        goals=_joined(client.goals, DEFAULT_GOALS),
        days_per_week=days,
        available_days=_joined(client.available_days, UNSPECIFIED),
        session_duration=client.session_duration or DEFAULT_SESSION_DURATION,
        preferred_time=client.preferred_time or DEFAULT_PREFERRED_TIME,
        equipment=_joined(client.equipment, DEFAULT_EQUIPMENT),
        medical_section=medical_section,
        weeks=days * 4,
    )
