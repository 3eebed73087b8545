"""Pydantic schemas for auth API."""
from typing import Literal

from pydantic import BaseModel, EmailStr, Field, field_validator

UserRole = Literal["user", "admin"]


class RegisterRequest(BaseModel):
    """Payload for registering a user."""

    name: str = Field(max_length=255)
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)

    @field_validator("name")
    @classmethod
    def name_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v


class LoginRequest(BaseModel):
    """Payload for logging in. Email is not syntax-checked so a bad address reads as bad credentials."""

    email: str
    password: str


class UserResponse(BaseModel):
    """User in API responses; never includes the password hash."""

    id: str
    name: str
    email: str
    role: str


class AuthResponse(BaseModel):
    """Response from register/login."""

    user: UserResponse
    token: str
