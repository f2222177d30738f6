from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fitsquad.core.timeutils import utcnow
from fitsquad.db.base import Base


class Client(Base):
    """A coached person. List-valued profile fields are stored as JSON arrays."""
    __tablename__ = 'clients'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str] = mapped_column(String, nullable=False)
    phone: Mapped[str | None] = mapped_column(String, nullable=True)
    age: Mapped[int] = mapped_column(Integer, nullable=False)
    weight: Mapped[float | None] = mapped_column(Float, nullable=True)
    height: Mapped[float | None] = mapped_column(Float, nullable=True)
    fitness_level: Mapped[str] = mapped_column(String, nullable=False)
    goals: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    medical_conditions: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    available_days: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    session_duration: Mapped[int] = mapped_column(Integer, default=60, nullable=False)
    preferred_time: Mapped[str] = mapped_column(String, default='morning', nullable=False)
    equipment: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by: Mapped[int] = mapped_column(ForeignKey('users.id'), nullable=False, index=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=utcnow, onupdate=utcnow, nullable=False
    )

    owner = relationship('User', back_populates='clients')
    programs = relationship('Program', back_populates='client', cascade='all, delete-orphan')
    sessions = relationship('TrainingSession', back_populates='client', cascade='all, delete-orphan')
    progress_records = relationship('ProgressRecord', back_populates='client', cascade='all, delete-orphan')
