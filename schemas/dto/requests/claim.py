"""
Request DTOs for claim endpoints.

CreateClaimRequest       — POST  /api/claims
UpdateClaimStatusRequest — PATCH /api/claims/{id}/status
VerifyClaimEmailRequest  — POST  /api/claims/{id}/verify-email
"""

from __future__ import annotations

from pydantic import EmailStr, Field

from schemas.dto.base import CamelModel


class CreateClaimRequest(CamelModel):
    cause_id: str
    cause_title: str
    full_name: str = Field(min_length=1)
    email: EmailStr
    phone: str = Field(min_length=1)
    purpose: str = Field(min_length=1)
    address: str = Field(min_length=1)
    city: str = Field(min_length=1)
    state: str = Field(min_length=1)
    zip_code: str = Field(min_length=1)


class UpdateClaimStatusRequest(CamelModel):
    """Status is validated against the claim state machine by the service."""

    status: str


class VerifyClaimEmailRequest(CamelModel):
    otp: str = Field(min_length=1, max_length=12)
