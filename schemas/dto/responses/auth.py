"""
Response DTOs for authentication endpoints.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from schemas.dto.base import CamelModel, DocResponse


class UserResponse(DocResponse):
    """Public view of a user; the password hash is never exposed."""

    id: str = Field(alias="_id")
    email: str
    role: str
    name: Optional[str] = None
    phone: Optional[str] = None
    created_at: Optional[datetime] = None


class AuthResponse(CamelModel):
    """Response body for register/login: bearer token plus the user."""

    access_token: str
    token_type: str = "Bearer"
    expires_in: int
    user: UserResponse
