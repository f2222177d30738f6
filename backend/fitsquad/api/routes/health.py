from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from fitsquad.api.deps import get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=['health'])


@router.get('/api/health')
def health(db: Session = Depends(get_db)):
    try:
        db.execute(text('SELECT 1'))
        database = 'connected'
    except SQLAlchemyError:
        logger.exception('Health check: database unreachable')
        database = 'disconnected'
    return {
        'status': 'ok',
        'database': database,
        'timestamp': datetime.now(timezone.utc).isoformat(),
    }
