"""
Request DTOs for cause endpoints.

CreateCauseRequest       — POST  /api/causes
UpdateCauseRequest       — PUT   /api/causes/{id}
UpdateCauseStatusRequest — PATCH /api/causes/{id}/status
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from schemas.dto.base import CamelModel


class CreateCauseRequest(CamelModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    target_amount: float = Field(ge=0)
    category: str = Field(min_length=1)
    location: Optional[str] = None
    image_url: str = ""
    is_online: bool = False
    start_date: Optional[datetime] = None


class UpdateCauseRequest(CamelModel):
    """All fields optional; only provided fields are updated.

    ``status`` is honoured for admins only.
    """

    title: Optional[str] = None
    description: Optional[str] = None
    target_amount: Optional[float] = Field(default=None, ge=0)
    category: Optional[str] = None
    location: Optional[str] = None
    image_url: Optional[str] = None
    is_online: Optional[bool] = None
    start_date: Optional[datetime] = None
    status: Optional[str] = None


class UpdateCauseStatusRequest(CamelModel):
    status: str
