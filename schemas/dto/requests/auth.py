"""
Request DTOs for authentication endpoints.

RegisterRequest — POST /api/auth/register
LoginRequest    — POST /api/auth/login
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import EmailStr, Field

from schemas.dto.base import CamelModel


class RegisterRequest(CamelModel):
    """Request body for POST /api/auth/register.

    Public registration can never create an admin account.
    """

    email: EmailStr
    password: str = Field(min_length=8)
    name: Optional[str] = None
    phone: Optional[str] = None
    role: Literal["sponsor", "claimer", "user"] = "user"


class LoginRequest(CamelModel):
    """Request body for POST /api/auth/login."""

    email: EmailStr
    password: str
