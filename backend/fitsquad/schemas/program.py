from datetime import datetime
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field

from fitsquad.core.timeutils import utcnow
from fitsquad.schemas.client import ClientSummary, Weekday
from fitsquad.schemas.common import ORMModel, UTCDatetime

WorkoutType = Literal['strength', 'cardio', 'flexibility', 'mixed']
ProgramStatus = Literal['draft', 'active', 'completed', 'paused']
DurationUnit = Literal['days', 'weeks', 'months']


class Exercise(BaseModel):
    name: str
    sets: Optional[int] = None
    # "10-12", "30 secondes" or a plain count
    reps: Optional[Union[str, int]] = None
    duration: Optional[int] = None
    rest: Optional[int] = None
    notes: Optional[str] = None


class Workout(BaseModel):
    day: Optional[Weekday] = None
    name: Optional[str] = None
    type: Optional[WorkoutType] = None
    duration: Optional[int] = None
    exercises: List[Exercise] = []
    warmup: Optional[str] = None
    cooldown: Optional[str] = None


class ProgramDuration(BaseModel):
    value: int = Field(default=4, ge=1)
    unit: DurationUnit = 'weeks'


class ProgressEntry(BaseModel):
    date: UTCDatetime = Field(default_factory=utcnow)
    notes: Optional[str] = None
    completed: bool = False


class ProgramCreate(BaseModel):
    client_id: int
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    duration: ProgramDuration = ProgramDuration()
    frequency: int = Field(default=3, ge=1, le=7)
    workouts: List[Workout] = []
    status: ProgramStatus = 'active'
    generated_by_ai: bool = False
    ai_model: Optional[str] = None


class ProgramUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None
    duration: Optional[ProgramDuration] = None
    frequency: Optional[int] = Field(default=None, ge=1, le=7)
    workouts: Optional[List[Workout]] = None
    status: Optional[ProgramStatus] = None


class ProgramOut(ORMModel):
    id: int
    name: str
    description: Optional[str] = None
    client_id: int
    client: Optional[ClientSummary] = None
    created_by: int
    duration: ProgramDuration
    frequency: int
    workouts: List[Workout]
    status: ProgramStatus
    generated_by_ai: bool
    ai_model: Optional[str] = None
    progress: List[ProgressEntry]
    created_at: datetime
    updated_at: datetime


class ProgramSummary(ORMModel):
    id: int
    name: str


class GenerateProgramRequest(BaseModel):
    client_id: int


class GeneratorStatus(BaseModel):
    provider: str
    model: Optional[str] = None
    api_key_loaded: bool


# ---------------------------------------------------------------------------
# Shape expected back from the AI completion
# ---------------------------------------------------------------------------

class GeneratedWorkoutPayload(BaseModel):
    day: Optional[Union[int, str]] = None
    name: Optional[str] = None
    focus: Optional[str] = None
    exercises: List[Exercise] = Field(..., min_length=1)


class GeneratedProgramPayload(BaseModel):
    """Minimum structure an AI answer must have to be persisted as a program."""
    name: str
    description: Optional[str] = None
    duration: Optional[int] = Field(default=None, ge=1)
    frequency: Optional[int] = Field(default=None, ge=1)
    workouts: List[GeneratedWorkoutPayload] = Field(..., min_length=1)
