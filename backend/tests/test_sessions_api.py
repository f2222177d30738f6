from __future__ import annotations

from datetime import timedelta

import pytest

from conftest import ALEX, create_client, create_program

from fitsquad.core.timeutils import utcnow


def _iso(days: int) -> str:
    return (utcnow() + timedelta(days=days)).replace(microsecond=0).isoformat()


@pytest.fixture
def setup(api, headers):
    client = create_client(api, headers)
    program = create_program(api, headers, client['id'])
    return client, program


def _schedule(api, headers, client, program, **overrides) -> dict:
    body = {
        'client_id': client['id'],
        'program_id': program['id'],
        'workout_name': 'Séance 1 - Full Body',
        'scheduled_date': _iso(1),
        **overrides,
    }
    r = api.post('/api/sessions', headers=headers, json=body)
    assert r.status_code == 201, r.text
    return r.json()


def test_duration_defaults_to_client_session_duration(api, headers, setup) -> None:
    client, program = setup

    session = _schedule(api, headers, client, program)

    assert session['duration'] == 45
    assert session['status'] == 'scheduled'
    assert session['client']['name'] == 'Alex'
    assert session['program']['name'] == 'Force 101'
    assert session['completed_at'] is None


def test_explicit_duration_and_bounds(api, headers, setup) -> None:
    client, program = setup

    assert _schedule(api, headers, client, program, duration=90)['duration'] == 90

    r = api.post('/api/sessions', headers=headers, json={
        'client_id': client['id'], 'program_id': program['id'],
        'workout_name': 'Trop court', 'scheduled_date': _iso(1), 'duration': 10,
    })
    assert r.status_code == 422


@pytest.mark.parametrize('minutes', [5, 200])
def test_client_session_duration_outside_session_bounds_is_rejected(api, headers, minutes) -> None:
    r = api.post('/api/clients', headers=headers, json={**ALEX, 'session_duration': minutes})
    assert r.status_code == 422

    client = create_client(api, headers)
    r = api.put(f"/api/clients/{client['id']}", headers=headers, json={'session_duration': minutes})
    assert r.status_code == 422


def test_defaulted_duration_stays_within_bounds(api, headers) -> None:
    client = create_client(api, headers, session_duration=180)
    program = create_program(api, headers, client['id'])

    session = _schedule(api, headers, client, program)

    assert 15 <= session['duration'] <= 180
    assert session['duration'] == 180


def test_completing_a_session_stamps_completed_at(api, headers, setup) -> None:
    client, program = setup
    session = _schedule(api, headers, client, program)

    r = api.patch(f"/api/sessions/{session['id']}", headers=headers, json={
        'status': 'completed', 'rating': 4, 'difficulty': 'hard',
    })

    assert r.status_code == 200
    data = r.json()
    assert data['status'] == 'completed'
    assert data['completed_at'] is not None
    assert data['rating'] == 4
    assert data['difficulty'] == 'hard'


def test_patch_ignores_null_for_required_fields(api, headers, setup) -> None:
    client, program = setup
    session = _schedule(api, headers, client, program)

    r = api.patch(f"/api/sessions/{session['id']}", headers=headers, json={'duration': None, 'notes': 'RAS'})

    assert r.status_code == 200
    assert r.json()['duration'] == 45
    assert r.json()['notes'] == 'RAS'


def test_upcoming_only_future_scheduled_soonest_first(api, headers, setup) -> None:
    client, program = setup
    later = _schedule(api, headers, client, program, workout_name='Plus tard', scheduled_date=_iso(5))
    sooner = _schedule(api, headers, client, program, workout_name='Bientôt', scheduled_date=_iso(2))
    _schedule(api, headers, client, program, workout_name='Passée', scheduled_date=_iso(-2))
    cancelled = _schedule(api, headers, client, program, workout_name='Annulée', scheduled_date=_iso(3))
    api.patch(f"/api/sessions/{cancelled['id']}", headers=headers, json={'status': 'cancelled'})

    ids = [s['id'] for s in api.get('/api/sessions/filter/upcoming', headers=headers).json()]

    assert ids == [sooner['id'], later['id']]


def test_list_filters(api, headers, setup) -> None:
    client, program = setup
    other_program = create_program(api, headers, client['id'], name='Cardio')
    a = _schedule(api, headers, client, program, scheduled_date=_iso(1))
    b = _schedule(api, headers, client, other_program, scheduled_date=_iso(10))

    everything = [s['id'] for s in api.get('/api/sessions', headers=headers).json()]
    by_program = api.get('/api/sessions', headers=headers, params={'program_id': other_program['id']}).json()
    window = api.get('/api/sessions', headers=headers, params={'start_date': _iso(5), 'end_date': _iso(20)}).json()
    scheduled = api.get('/api/sessions', headers=headers, params={'status': 'scheduled'}).json()

    assert everything == [b['id'], a['id']]
    assert [s['id'] for s in by_program] == [b['id']]
    assert [s['id'] for s in window] == [b['id']]
    assert len(scheduled) == 2


def test_sessions_are_scoped_to_owner(api, headers, other_headers, setup) -> None:
    client, program = setup
    session = _schedule(api, headers, client, program)
    url = f"/api/sessions/{session['id']}"

    assert api.get('/api/sessions', headers=other_headers).json() == []
    assert api.get(url, headers=other_headers).status_code == 404
    assert api.patch(url, headers=other_headers, json={'notes': 'x'}).status_code == 404
    assert api.delete(url, headers=other_headers).status_code == 404

    r = api.post('/api/sessions', headers=other_headers, json={
        'client_id': client['id'], 'program_id': program['id'],
        'workout_name': 'Intrusion', 'scheduled_date': _iso(1),
    })
    assert r.status_code == 404


def test_delete_session(api, headers, setup) -> None:
    client, program = setup
    session = _schedule(api, headers, client, program)

    assert api.delete(f"/api/sessions/{session['id']}", headers=headers).status_code == 200
    assert api.get(f"/api/sessions/{session['id']}", headers=headers).status_code == 404
