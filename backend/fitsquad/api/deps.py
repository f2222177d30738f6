from __future__ import annotations

import logging
from typing import Generator, Optional

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from fitsquad.core.config import settings
from fitsquad.core.security import decode_access_token
from fitsquad.db.session import SessionLocal
from fitsquad.models.user import User
from fitsquad.services.program_generator.base import ProgramGeneratorConfig
from fitsquad.services.program_generator.generator import ProgramGenerator

logger = logging.getLogger(__name__)

_bearer = HTTPBearer(auto_error=False)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={'WWW-Authenticate': 'Bearer'},
    )


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
    db: Session = Depends(get_db),
) -> User:
    if credentials is None or credentials.scheme.lower() != 'bearer' or not credentials.credentials:
        raise _unauthorized('Not authenticated — missing token')

    try:
        payload = decode_access_token(credentials.credentials)
        user_id = int(payload['sub'])
    except (jwt.InvalidTokenError, KeyError, ValueError):
        raise _unauthorized('Invalid token')

    user = db.get(User, user_id)
    if user is None:
        raise _unauthorized('User not found')
    return user


def get_program_generator() -> ProgramGenerator:
    """Build the generator from settings; overridden in tests with a fake transport."""
    return ProgramGenerator(ProgramGeneratorConfig.from_settings(settings))
