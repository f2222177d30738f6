from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from fitsquad.schemas.client import ClientSummary
from fitsquad.schemas.common import ORMModel, UTCDatetime
from fitsquad.schemas.program import ProgramSummary

ProgressType = Literal['measurement', 'photo', 'performance', 'note']
Mood = Literal['excellent', 'good', 'neutral', 'tired', 'poor']
Nutrition = Literal['excellent', 'good', 'average', 'poor']


class Measurements(BaseModel):
    weight: Optional[float] = None
    body_fat: Optional[float] = None
    muscle_mass: Optional[float] = None
    chest: Optional[float] = None
    waist: Optional[float] = None
    hips: Optional[float] = None
    arms: Optional[float] = None
    thighs: Optional[float] = None
    calves: Optional[float] = None


class Performance(BaseModel):
    exercise_name: Optional[str] = None
    max_weight: Optional[float] = None
    max_reps: Optional[int] = None
    total_volume: Optional[float] = None
    personal_record: Optional[bool] = None


class Photo(BaseModel):
    url: str
    type: Optional[Literal['front', 'back', 'side']] = None


class ProgressCreate(BaseModel):
    client_id: int
    program_id: int
    date: Optional[UTCDatetime] = None
    type: ProgressType
    measurements: Optional[Measurements] = None
    performance: Optional[Performance] = None
    photos: List[Photo] = []
    notes: Optional[str] = None
    mood: Optional[Mood] = None
    energy: Optional[int] = Field(default=None, ge=1, le=10)
    sleep: Optional[float] = Field(default=None, ge=0, le=24)
    nutrition: Optional[Nutrition] = None


class ProgressUpdate(BaseModel):
    date: Optional[UTCDatetime] = None
    measurements: Optional[Measurements] = None
    performance: Optional[Performance] = None
    photos: Optional[List[Photo]] = None
    notes: Optional[str] = None
    mood: Optional[Mood] = None
    energy: Optional[int] = Field(default=None, ge=1, le=10)
    sleep: Optional[float] = Field(default=None, ge=0, le=24)
    nutrition: Optional[Nutrition] = None


class ProgressOut(ORMModel):
    id: int
    client_id: int
    client: Optional[ClientSummary] = None
    program_id: int
    program: Optional[ProgramSummary] = None
    date: datetime
    type: ProgressType
    measurements: Optional[Measurements] = None
    performance: Optional[Performance] = None
    photos: List[Photo]
    notes: Optional[str] = None
    mood: Optional[Mood] = None
    energy: Optional[int] = None
    sleep: Optional[float] = None
    nutrition: Optional[Nutrition] = None
    created_by: int
    created_at: datetime
    updated_at: datetime


class MetricProgress(BaseModel):
    start: float
    current: float
    change: float
    percentage: float


class ProgressStats(BaseModel):
    total_measurements: int
    total_performances: int
    latest_measurement: Optional[ProgressOut] = None
    latest_performance: Optional[ProgressOut] = None
    weight_progress: Optional[MetricProgress] = None
    body_fat_progress: Optional[MetricProgress] = None


class ProgressStatsResponse(BaseModel):
    stats: ProgressStats
    measurements: List[ProgressOut]
    performances: List[ProgressOut]
