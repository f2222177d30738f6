from __future__ import annotations

import json

import pytest

from fitsquad.schemas.client import ClientProfile
from fitsquad.services.program_generator.base import ProgramGenerationError
from fitsquad.services.program_generator.prompt import build_program_prompt, days_per_week
from fitsquad.services.program_generator.remote_provider import parse_program_content, strip_code_fences

PROGRAM = {
    'name': 'Brûle-graisse',
    'description': 'Trois séances par semaine',
    'duration': 12,
    'frequency': 3,
    'workouts': [
        {
            'day': 1,
            'name': 'Haut du corps',
            'focus': 'Pectoraux',
            'exercises': [{'name': 'Pompes', 'sets': 3, 'reps': '10-12', 'rest': 60, 'notes': 'Dos droit'}],
        },
    ],
}
RAW = json.dumps(PROGRAM, ensure_ascii=False)


# ---------------------------------------------------------------------------
# Prompt
# ---------------------------------------------------------------------------

def test_prompt_embeds_profile() -> None:
    client = ClientProfile(
        name='Alex',
        age=30,
        weight=80,
        height=178,
        fitness_level='beginner',
        goals=['weight_loss', 'endurance'],
        available_days=['monday', 'thursday'],
        session_duration=45,
        preferred_time='evening',
        equipment=['dumbbells', 'bench'],
        medical_conditions=['asthme'],
    )

    prompt = build_program_prompt(client)

    assert '- Nom: Alex' in prompt
    assert '- Âge: 30 ans' in prompt
    assert '- Niveau de fitness: beginner' in prompt
    assert '- Objectifs: weight_loss, endurance' in prompt
    assert '2 jours/semaine (monday, thursday), 45 minutes/session' in prompt
    assert '- Moment préféré: evening' in prompt
    assert '- Équipement disponible: dumbbells, bench' in prompt
    assert '- Conditions médicales: asthme' in prompt
    assert 'structuré sur 8 semaines' in prompt
    assert '"duration": 8' in prompt
    assert '"frequency": 2' in prompt


def test_prompt_defaults() -> None:
    prompt = build_program_prompt(ClientProfile(name='Sam'))

    assert '3 jours/semaine (non spécifié), 60 minutes/session' in prompt
    assert '- Moment préféré: morning' in prompt
    assert '- Équipement disponible: bodyweight' in prompt
    assert '- Objectifs: Fitness général' in prompt
    assert 'Conditions médicales' not in prompt
    assert '"duration": 12' in prompt


def test_days_per_week() -> None:
    assert days_per_week(ClientProfile(name='a', available_days=['monday'])) == 1
    assert days_per_week(ClientProfile(name='a', available_days=[])) == 3
    assert days_per_week(ClientProfile(name='a')) == 3


# ---------------------------------------------------------------------------
# Code fences
# ---------------------------------------------------------------------------

@pytest.mark.parametrize('content', [
    RAW,
    f'```json\n{RAW}\n```',
    f'```JSON  \n{RAW}```',
    f'```\n{RAW}\n```',
    f'  \n```json{RAW}```  \n',
])
def test_fenced_and_unfenced_content_parse_the_same(content: str) -> None:
    assert parse_program_content(content) == PROGRAM


def test_strip_code_fences_is_idempotent() -> None:
    once = strip_code_fences(f'```json\n{RAW}\n```')

    assert once == RAW
    assert strip_code_fences(once) == once


@pytest.mark.parametrize('content', [
    'Voici votre programme !',
    '```json\n{"name": "x",}\n```',
    '[1, 2, 3]',
    json.dumps({'description': 'no name, no workouts'}),
    json.dumps({**PROGRAM, 'workouts': []}),
    json.dumps({**PROGRAM, 'workouts': [{'name': 'vide', 'exercises': []}]}),
])
def test_unusable_content_is_rejected(content: str) -> None:
    with pytest.raises((ProgramGenerationError, ValueError)):
        parse_program_content(content)
