"""
Programs router — /api/programs

Manual program CRUD plus AI-assisted generation from a client profile.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from fitsquad.api.deps import get_current_user, get_db, get_program_generator
from fitsquad.api.routes.clients import get_owned_client
from fitsquad.models.program import Program
from fitsquad.models.user import User
from fitsquad.schemas.client import ClientProfile
from fitsquad.schemas.common import MessageResponse
from fitsquad.schemas.program import (
    GeneratedProgramPayload,
    GenerateProgramRequest,
    GeneratorStatus,
    ProgramCreate,
    ProgramOut,
    ProgramStatus,
    ProgramUpdate,
    ProgressEntry,
)
from fitsquad.services.program_generator.adapter import adapt_workouts
from fitsquad.services.program_generator.generator import ProgramGenerator

logger = logging.getLogger(__name__)

router = APIRouter(tags=['programs'])

_NOT_NULL_FIELDS = frozenset({'name', 'duration', 'frequency', 'workouts', 'status'})

DEFAULT_DURATION_WEEKS = 4
DEFAULT_FREQUENCY = 3


def get_owned_program(db: Session, program_id: int, user: User) -> Program:
    program = (
        db.query(Program)
        .filter(Program.id == program_id, Program.created_by == user.id)
        .first()
    )
    if program is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Program not found')
    return program


@router.get('/generator/status', response_model=GeneratorStatus)
def generator_status(
    user: User = Depends(get_current_user),
    generator: ProgramGenerator = Depends(get_program_generator),
):
    """Which provider answers /generate, and with which model."""
    return GeneratorStatus(
        provider=generator.provider_name,
        model=generator.config.model if generator.config.ai_enabled else None,
        api_key_loaded=generator.config.ai_enabled,
    )


@router.post('/generate', response_model=ProgramOut, status_code=status.HTTP_201_CREATED)
async def generate_program(
    payload: GenerateProgramRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
    generator: ProgramGenerator = Depends(get_program_generator),
):
    """
    Generate a program for one of the coach's clients and store it.

    - Uses the AI provider when configured, otherwise (or on any AI failure)
      the deterministic templates.
    - Workouts are spread over the week starting on monday.
    """
    client = get_owned_client(db, payload.client_id, user)
    logger.info('generate_program — coach=%d client=%d level=%s', user.id, client.id, client.fitness_level)

    program_data = await generator.generate_program(ClientProfile.model_validate(client))
    shape = GeneratedProgramPayload.model_validate(program_data)

    program = Program(
        name=shape.name,
        description=shape.description,
        client_id=client.id,
        created_by=user.id,
        duration={'value': shape.duration or DEFAULT_DURATION_WEEKS, 'unit': 'weeks'},
        frequency=shape.frequency or DEFAULT_FREQUENCY,
        workouts=adapt_workouts(program_data, client.session_duration),
        status='active',
        generated_by_ai=bool(program_data.get('generated_by_ai')),
        ai_model=program_data.get('ai_model'),
    )
    db.add(program)
    db.commit()
    db.refresh(program)

    logger.info(
        'generate_program OK — program=%d ai=%s model=%s workouts=%d',
        program.id,
        program.generated_by_ai,
        program.ai_model,
        len(program.workouts),
    )
    return program


@router.get('', response_model=List[ProgramOut])
def list_programs(
    client_id: Optional[int] = None,
    status_filter: Optional[ProgramStatus] = Query(default=None, alias='status'),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    query = db.query(Program).filter(Program.created_by == user.id)
    if client_id is not None:
        query = query.filter(Program.client_id == client_id)
    if status_filter is not None:
        query = query.filter(Program.status == status_filter)
    return query.order_by(Program.created_at.desc(), Program.id.desc()).all()


@router.post('', response_model=ProgramOut, status_code=status.HTTP_201_CREATED)
def create_program(
    payload: ProgramCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    client = get_owned_client(db, payload.client_id, user)
    data = payload.model_dump(mode='json', exclude_none=True)
    data.pop('client_id')
    program = Program(**data, client_id=client.id, created_by=user.id)
    db.add(program)
    db.commit()
    db.refresh(program)
    logger.info('Program created id=%d for client=%d', program.id, client.id)
    return program


@router.get('/{program_id}', response_model=ProgramOut)
def get_program(
    program_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return get_owned_program(db, program_id, user)


@router.put('/{program_id}', response_model=ProgramOut)
def update_program(
    program_id: int,
    payload: ProgramUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    program = get_owned_program(db, program_id, user)
    for key, value in payload.model_dump(mode='json', exclude_unset=True).items():
        if value is None and key in _NOT_NULL_FIELDS:
            continue
        setattr(program, key, value)
    db.commit()
    db.refresh(program)
    return program


@router.delete('/{program_id}', response_model=MessageResponse)
def delete_program(
    program_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    program = get_owned_program(db, program_id, user)
    db.delete(program)
    db.commit()
    logger.info('Program deleted id=%d', program_id)
    return MessageResponse(message='Program deleted')


@router.post('/{program_id}/progress', response_model=ProgramOut)
def add_program_progress(
    program_id: int,
    payload: ProgressEntry,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    program = get_owned_program(db, program_id, user)
    # Reassign so the JSON column is flagged dirty
    program.progress = [*(program.progress or []), payload.model_dump(mode='json')]
    db.commit()
    db.refresh(program)
    return program
