from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from fitsquad.schemas.common import ORMModel

FitnessLevel = Literal['beginner', 'intermediate', 'advanced']
Goal = Literal['weight_loss', 'muscle_gain', 'endurance', 'strength', 'flexibility', 'general_fitness']
Weekday = Literal['monday', 'tuesday', 'wednesday', 'thursday', 'friday', 'saturday', 'sunday']
PreferredTime = Literal['morning', 'afternoon', 'evening']

# Same bounds as a scheduled session, which defaults to this value
MIN_SESSION_DURATION = 15
MAX_SESSION_DURATION = 180


class ClientBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    email: str = Field(..., min_length=3, max_length=254)
    phone: Optional[str] = None
    age: int = Field(..., ge=1)
    weight: Optional[float] = Field(default=None, gt=0)
    height: Optional[float] = Field(default=None, gt=0)
    fitness_level: FitnessLevel
    goals: List[Goal] = []
    medical_conditions: List[str] = []
    available_days: List[Weekday] = []
    session_duration: int = Field(default=60, ge=MIN_SESSION_DURATION, le=MAX_SESSION_DURATION)
    preferred_time: PreferredTime = 'morning'
    equipment: List[str] = []
    notes: Optional[str] = None


class ClientCreate(ClientBase):
    pass


class ClientUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=120)
    email: Optional[str] = Field(default=None, min_length=3, max_length=254)
    phone: Optional[str] = None
    age: Optional[int] = Field(default=None, ge=1)
    weight: Optional[float] = Field(default=None, gt=0)
    height: Optional[float] = Field(default=None, gt=0)
    fitness_level: Optional[FitnessLevel] = None
    goals: Optional[List[Goal]] = None
    medical_conditions: Optional[List[str]] = None
    available_days: Optional[List[Weekday]] = None
    session_duration: Optional[int] = Field(default=None, ge=MIN_SESSION_DURATION, le=MAX_SESSION_DURATION)
    preferred_time: Optional[PreferredTime] = None
    equipment: Optional[List[str]] = None
    notes: Optional[str] = None
    is_active: Optional[bool] = None


class ClientOut(ClientBase, ORMModel):
    id: int
    created_by: int
    is_active: bool
    created_at: datetime
    updated_at: datetime


class ClientSummary(ORMModel):
    id: int
    name: str
    email: str


class ClientProfile(BaseModel):
    """Input of the program generator.

    Deliberately looser than ``ClientBase``: an unknown or missing fitness
    level must still yield a program.
    """
    model_config = ConfigDict(from_attributes=True)

    name: str
    age: Optional[int] = None
    weight: Optional[float] = None
    height: Optional[float] = None
    fitness_level: Optional[str] = None
    goals: Optional[List[str]] = None
    available_days: Optional[List[str]] = None
    session_duration: Optional[int] = None
    preferred_time: Optional[str] = None
    equipment: Optional[List[str]] = None
    medical_conditions: Optional[List[str]] = None
