from datetime import datetime
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field

from fitsquad.schemas.client import MAX_SESSION_DURATION, MIN_SESSION_DURATION, ClientSummary
from fitsquad.schemas.common import ORMModel, UTCDatetime
from fitsquad.schemas.program import ProgramSummary

SessionStatus = Literal['scheduled', 'completed', 'cancelled', 'missed']
Difficulty = Literal['easy', 'moderate', 'hard', 'very_hard']


class SessionExercise(BaseModel):
    name: str
    sets: Optional[int] = None
    reps: Optional[Union[str, int]] = None
    weight: Optional[float] = None
    completed: bool = False
    notes: Optional[str] = None


class SessionCreate(BaseModel):
    client_id: int
    program_id: int
    workout_ref: Optional[str] = None
    workout_name: str = Field(..., min_length=1)
    scheduled_date: UTCDatetime
    start_time: Optional[str] = None
    duration: Optional[int] = Field(default=None, ge=MIN_SESSION_DURATION, le=MAX_SESSION_DURATION)
    exercises: List[SessionExercise] = []
    notes: Optional[str] = None


class SessionUpdate(BaseModel):
    """Only these fields can be changed once a session exists."""
    scheduled_date: Optional[UTCDatetime] = None
    start_time: Optional[str] = None
    duration: Optional[int] = Field(default=None, ge=MIN_SESSION_DURATION, le=MAX_SESSION_DURATION)
    status: Optional[SessionStatus] = None
    notes: Optional[str] = None
    exercises: Optional[List[SessionExercise]] = None
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    difficulty: Optional[Difficulty] = None
    completed_at: Optional[UTCDatetime] = None


class SessionOut(ORMModel):
    id: int
    client_id: int
    client: Optional[ClientSummary] = None
    program_id: int
    program: Optional[ProgramSummary] = None
    workout_ref: Optional[str] = None
    workout_name: str
    scheduled_date: datetime
    start_time: Optional[str] = None
    duration: int
    status: SessionStatus
    completed_at: Optional[datetime] = None
    notes: Optional[str] = None
    exercises: List[SessionExercise]
    rating: Optional[int] = None
    difficulty: Optional[Difficulty] = None
    created_by: int
    created_at: datetime
    updated_at: datetime
