from datetime import datetime

from sqlalchemy import JSON, DateTime, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fitsquad.core.timeutils import utcnow
from fitsquad.db.base import Base


class ProgressRecord(Base):
    """Measurement, performance, photo or note entry tracked against a program."""
    __tablename__ = 'progress_records'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    client_id: Mapped[int] = mapped_column(ForeignKey('clients.id'), nullable=False)
    program_id: Mapped[int] = mapped_column(ForeignKey('programs.id'), nullable=False)
    date: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    type: Mapped[str] = mapped_column(String, nullable=False)  # measurement | photo | performance | note
    measurements: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    performance: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    photos: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    mood: Mapped[str | None] = mapped_column(String, nullable=True)
    energy: Mapped[int | None] = mapped_column(Integer, nullable=True)
    sleep: Mapped[float | None] = mapped_column(Float, nullable=True)
    nutrition: Mapped[str | None] = mapped_column(String, nullable=True)
    created_by: Mapped[int] = mapped_column(ForeignKey('users.id'), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=utcnow, onupdate=utcnow, nullable=False
    )

    client = relationship('Client', back_populates='progress_records')
    program = relationship('Program', back_populates='progress_records')

    __table_args__ = (
        Index('ix_progress_client_date', 'client_id', 'date'),
        Index('ix_progress_program_date', 'program_id', 'date'),
        Index('ix_progress_type_date', 'type', 'date'),
    )
