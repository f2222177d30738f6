from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from fitsquad.api.deps import get_current_user, get_db
from fitsquad.api.routes.clients import get_owned_client
from fitsquad.api.routes.programs import get_owned_program
from fitsquad.core.timeutils import utcnow
from fitsquad.models.training_session import TrainingSession
from fitsquad.models.user import User
from fitsquad.schemas.common import MessageResponse, UTCDatetime
from fitsquad.schemas.training_session import (
    SessionCreate,
    SessionOut,
    SessionStatus,
    SessionUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=['sessions'])

UPCOMING_LIMIT = 10
DEFAULT_SESSION_DURATION = 60
_NOT_NULL_FIELDS = frozenset({'scheduled_date', 'duration', 'status', 'exercises'})


def get_owned_session(db: Session, session_id: int, user: User) -> TrainingSession:
    session = (
        db.query(TrainingSession)
        .filter(TrainingSession.id == session_id, TrainingSession.created_by == user.id)
        .first()
    )
    if session is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Session not found')
    return session


@router.get('', response_model=List[SessionOut])
def list_sessions(
    client_id: Optional[int] = None,
    program_id: Optional[int] = None,
    status_filter: Optional[SessionStatus] = Query(default=None, alias='status'),
    start_date: Optional[UTCDatetime] = None,
    end_date: Optional[UTCDatetime] = None,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    query = db.query(TrainingSession).filter(TrainingSession.created_by == user.id)
    if client_id is not None:
        query = query.filter(TrainingSession.client_id == client_id)
    if program_id is not None:
        query = query.filter(TrainingSession.program_id == program_id)
    if status_filter is not None:
        query = query.filter(TrainingSession.status == status_filter)
    if start_date is not None:
        query = query.filter(TrainingSession.scheduled_date >= start_date)
    if end_date is not None:
        query = query.filter(TrainingSession.scheduled_date <= end_date)
    return query.order_by(TrainingSession.scheduled_date.desc()).all()


@router.get('/filter/upcoming', response_model=List[SessionOut])
def upcoming_sessions(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Next scheduled sessions, soonest first."""
    return (
        db.query(TrainingSession)
        .filter(
            TrainingSession.created_by == user.id,
            TrainingSession.scheduled_date >= utcnow(),
            TrainingSession.status == 'scheduled',
        )
        .order_by(TrainingSession.scheduled_date.asc())
        .limit(UPCOMING_LIMIT)
        .all()
    )


@router.get('/{session_id}', response_model=SessionOut)
def get_session(
    session_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return get_owned_session(db, session_id, user)


@router.post('', response_model=SessionOut, status_code=status.HTTP_201_CREATED)
def create_session(
    payload: SessionCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    client = get_owned_client(db, payload.client_id, user)
    program = get_owned_program(db, payload.program_id, user)

    session = TrainingSession(
        client_id=client.id,
        program_id=program.id,
        workout_ref=payload.workout_ref,
        workout_name=payload.workout_name,
        scheduled_date=payload.scheduled_date,
        start_time=payload.start_time,
        duration=payload.duration or client.session_duration or DEFAULT_SESSION_DURATION,
        exercises=[ex.model_dump(mode='json') for ex in payload.exercises],
        notes=payload.notes,
        created_by=user.id,
    )
    db.add(session)
    db.commit()
    db.refresh(session)
    logger.info('Session scheduled id=%d client=%d at %s', session.id, client.id, session.scheduled_date)
    return session


@router.patch('/{session_id}', response_model=SessionOut)
def update_session(
    session_id: int,
    payload: SessionUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    session = get_owned_session(db, session_id, user)
    changes = payload.model_dump(exclude_unset=True)
    for key, value in changes.items():
        if value is None and key in _NOT_NULL_FIELDS:
            continue
        setattr(session, key, value)

    if changes.get('status') == 'completed' and session.completed_at is None:
        session.completed_at = utcnow()

    db.commit()
    db.refresh(session)
    return session


@router.delete('/{session_id}', response_model=MessageResponse)
def delete_session(
    session_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    session = get_owned_session(db, session_id, user)
    db.delete(session)
    db.commit()
    return MessageResponse(message='Session deleted')
