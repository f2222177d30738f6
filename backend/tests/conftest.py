from __future__ import annotations

from typing import Dict

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from fitsquad.api.deps import get_db, get_program_generator
from fitsquad.db.init_db import init_db
from fitsquad.services.program_generator.base import ProgramGeneratorConfig
from fitsquad.services.program_generator.generator import ProgramGenerator
from main import app

ALEX = {
    'name': 'Alex',
    'email': 'alex@example.com',
    'age': 30,
    'weight': 80,
    'height': 178,
    'fitness_level': 'beginner',
    'goals': ['weight_loss'],
    'available_days': ['monday', 'wednesday', 'friday'],
    'session_duration': 45,
}


@pytest.fixture
def engine():
    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def api(engine):
    """TestClient on an in-memory database, with the AI disabled."""
    TestingSession = sessionmaker(bind=engine, autocommit=False, autoflush=False)

    def _get_db():
        db = TestingSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_program_generator] = lambda: ProgramGenerator(ProgramGeneratorConfig())
    yield TestClient(app)
    app.dependency_overrides.clear()


def register(api: TestClient, email: str = 'coach@example.com', password: str = 'secret123') -> Dict[str, str]:
    r = api.post('/api/auth/register', json={'name': 'Coach', 'email': email, 'password': password})
    assert r.status_code == 201, r.text
    return {'Authorization': f"Bearer {r.json()['access_token']}"}


@pytest.fixture
def headers(api) -> Dict[str, str]:
    return register(api)


@pytest.fixture
def other_headers(api) -> Dict[str, str]:
    return register(api, email='other@example.com')


def create_client(api: TestClient, headers: Dict[str, str], **overrides) -> dict:
    r = api.post('/api/clients', headers=headers, json={**ALEX, **overrides})
    assert r.status_code == 201, r.text
    return r.json()


def create_program(api: TestClient, headers: Dict[str, str], client_id: int, **overrides) -> dict:
    body = {'client_id': client_id, 'name': 'Force 101', 'frequency': 2, **overrides}
    r = api.post('/api/programs', headers=headers, json=body)
    assert r.status_code == 201, r.text
    return r.json()
