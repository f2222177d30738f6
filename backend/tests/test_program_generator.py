from __future__ import annotations

import asyncio
import copy
import json
from typing import Callable, List

import httpx
import pytest

from fitsquad.schemas.client import ClientProfile
from fitsquad.services.program_generator.base import ProgramGeneratorConfig
from fitsquad.services.program_generator.factory import get_program_provider
from fitsquad.services.program_generator.fallback_provider import FallbackProgramProvider
from fitsquad.services.program_generator.generator import ProgramGenerator
from fitsquad.services.program_generator.remote_provider import RemoteProgramProvider

API_URL = 'https://llm.test/v1/chat/completions'
CLIENT = ClientProfile(
    name='Alex',
    fitness_level='beginner',
    available_days=['monday', 'wednesday', 'friday'],
    goals=['weight_loss'],
)
AI_PROGRAM = {
    'name': 'Objectif affûtage',
    'description': 'Programme IA',
    'duration': 12,
    'frequency': 3,
    'workouts': [
        {
            'day': i,
            'name': f'Jour {i}',
            'focus': 'Full body',
            'exercises': [
                {'name': 'Squat', 'sets': 4, 'reps': '8-10', 'rest': 90, 'notes': 'Gainage'},
                {'name': 'Gainage', 'sets': 3, 'reps': '30 secondes', 'rest': 45, 'notes': ''},
            ],
        }
        for i in (1, 2, 3)
    ],
}


def _completion(content: str) -> dict:
    return {'choices': [{'message': {'role': 'assistant', 'content': content}}]}


def _transport(responder: Callable[[httpx.Request], httpx.Response], seen: List[httpx.Request]):
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return responder(request)
    return httpx.MockTransport(handler)


def _generator(responder, seen, **config) -> ProgramGenerator:
    cfg = ProgramGeneratorConfig(api_url=API_URL, api_key='sk-test', model='test-model', **config)
    return ProgramGenerator(cfg, transport=_transport(responder, seen))


def _run(generator: ProgramGenerator, client=CLIENT) -> dict:
    return asyncio.run(generator.generate_program(client))


def _assert_fallback(program: dict) -> None:
    assert program['generated_by_ai'] is False
    assert 'ai_model' not in program
    assert program['name'] == 'Programme weight_loss pour Alex'
    assert len(program['workouts']) == 3


# ---------------------------------------------------------------------------
# Provider selection
# ---------------------------------------------------------------------------

def test_factory_selects_provider_on_key_presence() -> None:
    assert isinstance(get_program_provider(ProgramGeneratorConfig()), FallbackProgramProvider)
    assert isinstance(get_program_provider(ProgramGeneratorConfig(api_key='')), FallbackProgramProvider)
    assert isinstance(get_program_provider(ProgramGeneratorConfig(api_key='k')), RemoteProgramProvider)


def test_no_api_key_never_calls_transport() -> None:
    seen: List[httpx.Request] = []
    generator = ProgramGenerator(
        ProgramGeneratorConfig(api_url=API_URL),
        transport=_transport(lambda r: httpx.Response(200, json=_completion('{}')), seen),
    )

    program = _run(generator)

    assert seen == []
    _assert_fallback(program)


def test_missing_client_profile_raises() -> None:
    generator = ProgramGenerator(ProgramGeneratorConfig())

    with pytest.raises(ValueError):
        _run(generator, client=None)


# ---------------------------------------------------------------------------
# AI path
# ---------------------------------------------------------------------------

def test_valid_ai_program_is_returned_with_provenance() -> None:
    seen: List[httpx.Request] = []
    generator = _generator(
        lambda r: httpx.Response(200, json=_completion(f'```json\n{json.dumps(AI_PROGRAM)}\n```')),
        seen,
    )

    program = _run(generator)

    expected = copy.deepcopy(AI_PROGRAM)
    expected.update(generated_by_ai=True, ai_model='test-model')
    assert program == expected


def test_request_shape() -> None:
    seen: List[httpx.Request] = []
    generator = _generator(lambda r: httpx.Response(200, json=_completion(json.dumps(AI_PROGRAM))), seen)

    _run(generator)

    assert len(seen) == 1
    request = seen[0]
    assert request.method == 'POST'
    assert str(request.url) == API_URL
    assert request.headers['Authorization'] == 'Bearer sk-test'
    body = json.loads(request.content)
    assert body['model'] == 'test-model'
    assert body['temperature'] == 0.7
    assert body['max_tokens'] == 2000
    assert [m['role'] for m in body['messages']] == ['system', 'user']
    assert 'JSON valide' in body['messages'][0]['content']
    assert '- Nom: Alex' in body['messages'][1]['content']


def test_default_model_is_used_when_not_configured() -> None:
    seen: List[httpx.Request] = []
    generator = ProgramGenerator(
        ProgramGeneratorConfig(api_key='sk-test'),
        transport=_transport(lambda r: httpx.Response(200, json=_completion(json.dumps(AI_PROGRAM))), seen),
    )

    program = _run(generator)

    assert json.loads(seen[0].content)['model'] == 'llama-3.3-70b-versatile'
    assert str(seen[0].url) == 'https://api.openai.com/v1/chat/completions'
    assert program['ai_model'] == 'llama-3.3-70b-versatile'


# ---------------------------------------------------------------------------
# Failures fall back, exactly once, without raising
# ---------------------------------------------------------------------------

def _raise_connect_error(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError('connection refused', request=request)


def _raise_timeout(request: httpx.Request) -> httpx.Response:
    raise httpx.ReadTimeout('timed out', request=request)


@pytest.mark.parametrize('responder', [
    lambda r: httpx.Response(200, json=_completion('Désolé, je ne peux pas générer de JSON.')),
    lambda r: httpx.Response(200, json=_completion('```json\n{"name": "cassé"\n```')),
    lambda r: httpx.Response(200, json=_completion(json.dumps({'name': 'Sans séances'}))),
    lambda r: httpx.Response(200, json=_completion('')),
    lambda r: httpx.Response(200, json={'choices': []}),
    lambda r: httpx.Response(200, json={'error': 'nope'}),
    lambda r: httpx.Response(200, text='<html>gateway</html>'),
    lambda r: httpx.Response(401, json={'error': {'message': 'invalid api key'}}),
    lambda r: httpx.Response(500, text='upstream exploded'),
    _raise_connect_error,
    _raise_timeout,
], ids=[
    'not-json', 'broken-json', 'schema-violation', 'empty-content', 'no-choices',
    'no-choices-key', 'html-body', 'http-401', 'http-500', 'connect-error', 'timeout',
])
def test_ai_failure_returns_fallback(responder) -> None:
    seen: List[httpx.Request] = []
    generator = _generator(responder, seen)

    program = _run(generator)

    assert len(seen) == 1
    _assert_fallback(program)
