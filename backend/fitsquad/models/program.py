from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fitsquad.core.timeutils import utcnow
from fitsquad.db.base import Base


def _default_duration() -> dict:
    return {'value': 4, 'unit': 'weeks'}


class Program(Base):
    __tablename__ = 'programs'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    client_id: Mapped[int] = mapped_column(ForeignKey('clients.id'), nullable=False, index=True)
    created_by: Mapped[int] = mapped_column(ForeignKey('users.id'), nullable=False, index=True)
    # {"value": 12, "unit": "weeks"}
    duration: Mapped[dict] = mapped_column(JSON, default=_default_duration, nullable=False)
    frequency: Mapped[int] = mapped_column(Integer, default=3, nullable=False)
    workouts: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    status: Mapped[str] = mapped_column(String, default='active', nullable=False)
    generated_by_ai: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    ai_model: Mapped[str | None] = mapped_column(String, nullable=True)
    # Append-only log of {"date", "notes", "completed"}
    progress: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=utcnow, onupdate=utcnow, nullable=False
    )

    client = relationship('Client', back_populates='programs')
    sessions = relationship('TrainingSession', back_populates='program', cascade='all, delete-orphan')
    progress_records = relationship('ProgressRecord', back_populates='program', cascade='all, delete-orphan')
