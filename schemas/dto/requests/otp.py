"""
Request DTOs for OTP endpoints.

SendOTPRequest   — POST /api/otp/send
VerifyOTPRequest — POST /api/otp/verify
"""

from __future__ import annotations

from pydantic import EmailStr, Field

from schemas.dto.base import CamelModel


class SendOTPRequest(CamelModel):
    email: EmailStr


class VerifyOTPRequest(CamelModel):
    """``otp`` is the 6-digit code sent to ``email``."""

    email: EmailStr
    otp: str = Field(min_length=1, max_length=12)
