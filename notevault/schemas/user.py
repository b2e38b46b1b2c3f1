"""Pydantic schemas for User model validation."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import EmailStr, Field

from .base import CamelModel


class UserBase(CamelModel):
    """Base schema with common user fields."""

    email: EmailStr = Field(
        ...,
        description="User's email address",
        examples=["user@example.com"],
    )
    display_name: Optional[str] = Field(
        None,
        max_length=100,
        description="User's display name",
        examples=["Ada Lovelace"],
    )


class UserCreate(UserBase):
    """Schema for creating a new user (registration)."""

    password: str = Field(
        ...,
        min_length=8,
        max_length=72,
        description="User's password (will be hashed)",
        examples=["SecureP@ssw0rd!"],
    )


class LoginRequest(CamelModel):
    """Schema for email/password login."""

    email: EmailStr
    password: str = Field(..., min_length=1, max_length=72)


class UserResponse(UserBase):
    """Schema for user response (public data only)."""

    id: UUID = Field(
        ...,
        description="Unique user identifier",
    )
    created_at: Optional[datetime] = Field(
        None,
        description="When the user was created",
    )


class AuthResponse(CamelModel):
    """Token plus the authenticated user's profile."""

    token: str
    token_type: str = "bearer"
    user: UserResponse
