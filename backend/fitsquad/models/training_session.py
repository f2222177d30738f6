from datetime import datetime

from sqlalchemy import JSON, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fitsquad.core.timeutils import utcnow
from fitsquad.db.base import Base


class TrainingSession(Base):
    """A scheduled workout for one client, optionally pointing at a program workout."""
    __tablename__ = 'training_sessions'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    client_id: Mapped[int] = mapped_column(ForeignKey('clients.id'), nullable=False)
    program_id: Mapped[int] = mapped_column(ForeignKey('programs.id'), nullable=False)
    workout_ref: Mapped[str | None] = mapped_column(String, nullable=True)
    workout_name: Mapped[str] = mapped_column(String, nullable=False)
    scheduled_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    start_time: Mapped[str | None] = mapped_column(String, nullable=True)
    duration: Mapped[int] = mapped_column(Integer, default=60, nullable=False)
    status: Mapped[str] = mapped_column(String, default='scheduled', nullable=False)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    exercises: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    rating: Mapped[int | None] = mapped_column(Integer, nullable=True)
    difficulty: Mapped[str | None] = mapped_column(String, nullable=True)
    created_by: Mapped[int] = mapped_column(ForeignKey('users.id'), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=utcnow, onupdate=utcnow, nullable=False
    )

    client = relationship('Client', back_populates='sessions')
    program = relationship('Program', back_populates='sessions')

    __table_args__ = (
        Index('ix_sessions_client_date', 'client_id', 'scheduled_date'),
        Index('ix_sessions_owner_date', 'created_by', 'scheduled_date'),
        Index('ix_sessions_status_date', 'status', 'scheduled_date'),
    )
