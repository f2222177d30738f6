"""Progress tracking endpoint.

Measurements, performances, photos and notes recorded per client and
program, plus a per-client summary of body-composition change.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from fitsquad.api.deps import get_current_user, get_db
from fitsquad.api.routes.clients import get_owned_client
from fitsquad.api.routes.programs import get_owned_program
from fitsquad.core.timeutils import utcnow
from fitsquad.models.progress import ProgressRecord
from fitsquad.models.user import User
from fitsquad.schemas.common import MessageResponse, UTCDatetime
from fitsquad.schemas.progress import (
    MetricProgress,
    ProgressCreate,
    ProgressOut,
    ProgressStats,
    ProgressStatsResponse,
    ProgressType,
    ProgressUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=['progress'])

_NOT_NULL_FIELDS = frozenset({'date', 'photos'})


def get_owned_record(db: Session, record_id: int, user: User) -> ProgressRecord:
    record = (
        db.query(ProgressRecord)
        .filter(ProgressRecord.id == record_id, ProgressRecord.created_by == user.id)
        .first()
    )
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Progress record not found')
    return record


def metric_progress(first: Optional[dict], latest: Optional[dict], key: str) -> Optional[MetricProgress]:
    """Change of one measurement between two records; None unless both values are set."""
    start = (first or {}).get(key)
    current = (latest or {}).get(key)
    if not start or not current:
        return None
    change = current - start
    return MetricProgress(
        start=start,
        current=current,
        change=round(change, 2),
        percentage=round(change / start * 100, 1),
    )


@router.get('', response_model=List[ProgressOut])
def list_progress(
    client_id: Optional[int] = None,
    program_id: Optional[int] = None,
    type_filter: Optional[ProgressType] = Query(default=None, alias='type'),
    start_date: Optional[UTCDatetime] = None,
    end_date: Optional[UTCDatetime] = None,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    query = db.query(ProgressRecord).filter(ProgressRecord.created_by == user.id)
    if client_id is not None:
        query = query.filter(ProgressRecord.client_id == client_id)
    if program_id is not None:
        query = query.filter(ProgressRecord.program_id == program_id)
    if type_filter is not None:
        query = query.filter(ProgressRecord.type == type_filter)
    if start_date is not None:
        query = query.filter(ProgressRecord.date >= start_date)
    if end_date is not None:
        query = query.filter(ProgressRecord.date <= end_date)
    return query.order_by(ProgressRecord.date.desc()).all()


@router.get('/client/{client_id}/stats', response_model=ProgressStatsResponse)
def client_progress_stats(
    client_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    client = get_owned_client(db, client_id, user)

    def _records(kind: str) -> List[ProgressRecord]:
        return (
            db.query(ProgressRecord)
            .filter(
                ProgressRecord.client_id == client.id,
                ProgressRecord.type == kind,
                ProgressRecord.created_by == user.id,
            )
            .order_by(ProgressRecord.date.asc())
            .all()
        )

    measurement_rows = _records('measurement')
    measurements = [ProgressOut.model_validate(r) for r in measurement_rows]
    performances = [ProgressOut.model_validate(r) for r in _records('performance')]

    stats = ProgressStats(
        total_measurements=len(measurements),
        total_performances=len(performances),
        latest_measurement=measurements[-1] if measurements else None,
        latest_performance=performances[-1] if performances else None,
    )
    if len(measurements) >= 2:
        first, latest = measurement_rows[0].measurements, measurement_rows[-1].measurements
        stats.weight_progress = metric_progress(first, latest, 'weight')
        stats.body_fat_progress = metric_progress(first, latest, 'body_fat')

    return ProgressStatsResponse(
        stats=stats,
        measurements=measurements,
        performances=performances,
    )


@router.get('/{record_id}', response_model=ProgressOut)
def get_progress(
    record_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return get_owned_record(db, record_id, user)


@router.post('', response_model=ProgressOut, status_code=status.HTTP_201_CREATED)
def create_progress(
    payload: ProgressCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    client = get_owned_client(db, payload.client_id, user)
    program = get_owned_program(db, payload.program_id, user)

    data = payload.model_dump(exclude={'client_id', 'program_id', 'date'})
    record = ProgressRecord(
        **data,
        client_id=client.id,
        program_id=program.id,
        date=payload.date or utcnow(),
        created_by=user.id,
    )
    db.add(record)
    db.commit()
    db.refresh(record)
    logger.info('Progress recorded id=%d type=%s client=%d', record.id, record.type, client.id)
    return record


@router.patch('/{record_id}', response_model=ProgressOut)
def update_progress(
    record_id: int,
    payload: ProgressUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    record = get_owned_record(db, record_id, user)
    for key, value in payload.model_dump(exclude_unset=True).items():
        if value is None and key in _NOT_NULL_FIELDS:
            continue
        setattr(record, key, value)
    db.commit()
    db.refresh(record)
    return record


@router.delete('/{record_id}', response_model=MessageResponse)
def delete_progress(
    record_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    record = get_owned_record(db, record_id, user)
    db.delete(record)
    db.commit()
    return MessageResponse(message='Progress record deleted')
