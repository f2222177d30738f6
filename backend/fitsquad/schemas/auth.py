from typing import Literal

from pydantic import BaseModel, Field, field_validator

from fitsquad.schemas.common import ORMModel


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    email: str = Field(..., min_length=3, max_length=254)
    password: str = Field(..., min_length=6, max_length=128)

    @field_validator('name')
    @classmethod
    def _strip_name(cls, v: str) -> str:
        return v.strip()

    @field_validator('email')
    @classmethod
    def _normalize_email(cls, v: str) -> str:
        v = v.strip().lower()
        if '@' not in v:
            raise ValueError('invalid email address')
        return v


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator('email')
    @classmethod
    def _normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class UserOut(ORMModel):
    id: int
    name: str
    email: str
    role: Literal['coach', 'admin']


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = 'bearer'
    user: UserOut
