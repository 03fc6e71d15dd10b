"""Pydantic models for API request/response.

Request models are the validation boundary: services receive already
well-formed input and only check uniqueness and credentials.
"""

from datetime import datetime
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, EmailStr, Field, field_validator

from domain.model.user import NewUser, PublicUser, SignupMethod, UserChanges

PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_BYTES = 72

T = TypeVar('T')


def _check_password_bytes(v: Optional[str]) -> Optional[str]:
    if v is not None and len(v.encode('utf-8')) > PASSWORD_MAX_BYTES:
        raise ValueError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes")
    return v


# ── Auth ─────────────────────────────────────────────────


class RegisterRequest(BaseModel):
    """Request model for user registration."""
    username: str = Field(..., min_length=1, max_length=64)
    email: EmailStr
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH)

    @field_validator('password')
    @classmethod
    def check_password_bytes(cls, v):
        return _check_password_bytes(v)


class LoginRequest(BaseModel):
    """Request model for user login."""
    email: EmailStr
    password: str = Field(..., min_length=1)


# ── Users ────────────────────────────────────────────────


class CreateUserRequest(BaseModel):
    """Request model for creating a user directly."""
    username: str = Field(..., min_length=1, max_length=64)
    first_name: str = Field(..., max_length=100)
    last_name: str = Field(..., max_length=100)
    email: EmailStr
    email_verified: bool = False
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH)
    signup_method: SignupMethod

    @field_validator('password')
    @classmethod
    def check_password_bytes(cls, v):
        return _check_password_bytes(v)

    def to_domain(self) -> NewUser:
        return NewUser(
            username=self.username,
            email=str(self.email),
            password=self.password,
            signup_method=self.signup_method,
            first_name=self.first_name,
            last_name=self.last_name,
            email_verified=self.email_verified,
        )


class UpdateUserRequest(BaseModel):
    """Request model for a partial user update. Omitted fields are left untouched."""
    username: Optional[str] = Field(None, min_length=1, max_length=64)
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    email: Optional[EmailStr] = None
    email_verified: Optional[bool] = None
    password: Optional[str] = Field(None, min_length=PASSWORD_MIN_LENGTH)
    signup_method: Optional[SignupMethod] = None

    @field_validator('password')
    @classmethod
    def check_password_bytes(cls, v):
        return _check_password_bytes(v)

    def to_domain(self) -> UserChanges:
        data = self.model_dump(exclude_none=True)
        if 'email' in data:
            data['email'] = str(data['email'])
        return UserChanges(**data)


class UserResponse(BaseModel):
    """Response model for user data. Has no field that could carry a password hash."""
    id: str = Field(..., description="User ID")
    username: str
    first_name: str
    last_name: str
    email: str
    email_verified: bool
    signup_method: SignupMethod
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, user: PublicUser) -> 'UserResponse':
        return cls(**user.to_dict())


# ── Envelope ─────────────────────────────────────────────


class Envelope(BaseModel, Generic[T]):
    """Uniform response wrapper: HTTP status, human message, payload."""
    status: int
    message: str = "Success"
    data: Optional[T] = None
    meta: Optional[dict[str, Any]] = None
