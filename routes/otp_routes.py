"""
OTP endpoints.

POST /api/otp/send   — issue (or dedup) a code for an email
POST /api/otp/verify — check a code; 400 with a distinguishing message on failure
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from dependencies import get_otp_service
from schemas.dto.requests.otp import SendOTPRequest, VerifyOTPRequest
from schemas.dto.responses.otp import OTPResponse
from services.otp_service import OTPService

router = APIRouter(prefix="/api/otp", tags=["otp"])


@router.post("/send")
async def send_otp(
    body: SendOTPRequest, otp: OTPService = Depends(get_otp_service)
) -> OTPResponse:
    result = await otp.issue_code(body.email)
    return OTPResponse(message=result.message, email=result.email)


@router.post("/verify")
async def verify_otp(
    body: VerifyOTPRequest, otp: OTPService = Depends(get_otp_service)
) -> OTPResponse:
    result = await otp.verify_code(body.email, body.otp)
    result.raise_for_failure()
    return OTPResponse(message=result.message, email=body.email)
