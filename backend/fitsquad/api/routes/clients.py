from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from fitsquad.api.deps import get_current_user, get_db
from fitsquad.models.client import Client
from fitsquad.models.user import User
from fitsquad.schemas.client import ClientCreate, ClientOut, ClientUpdate
from fitsquad.schemas.common import MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=['clients'])

_NOT_NULL_FIELDS = frozenset({
    'name', 'email', 'age', 'fitness_level', 'goals', 'medical_conditions',
    'available_days', 'session_duration', 'preferred_time', 'equipment', 'is_active',
})


def get_owned_client(db: Session, client_id: int, user: User) -> Client:
    """Fetch a client belonging to ``user`` or raise 404."""
    client = (
        db.query(Client)
        .filter(Client.id == client_id, Client.created_by == user.id)
        .first()
    )
    if client is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Client not found')
    return client


@router.get('', response_model=List[ClientOut])
def list_clients(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return (
        db.query(Client)
        .filter(Client.created_by == user.id)
        .order_by(Client.created_at.desc(), Client.id.desc())
        .all()
    )


@router.post('', response_model=ClientOut, status_code=status.HTTP_201_CREATED)
def create_client(
    payload: ClientCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    client = Client(**payload.model_dump(), created_by=user.id)
    db.add(client)
    db.commit()
    db.refresh(client)
    logger.info('Client created id=%d by coach=%d', client.id, user.id)
    return client


@router.get('/{client_id}', response_model=ClientOut)
def get_client(
    client_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return get_owned_client(db, client_id, user)


@router.put('/{client_id}', response_model=ClientOut)
def update_client(
    client_id: int,
    payload: ClientUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    client = get_owned_client(db, client_id, user)
    for key, value in payload.model_dump(exclude_unset=True).items():
        if value is None and key in _NOT_NULL_FIELDS:
            continue
        setattr(client, key, value)
    db.commit()
    db.refresh(client)
    logger.info('Client updated id=%d', client.id)
    return client


@router.delete('/{client_id}', response_model=MessageResponse)
def delete_client(
    client_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    client = get_owned_client(db, client_id, user)
    db.delete(client)
    db.commit()
    logger.info('Client deleted id=%d', client_id)
    return MessageResponse(message='Client deleted')
