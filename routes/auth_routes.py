"""
Authentication endpoints.

POST /api/auth/register — create an account, returns a bearer token
POST /api/auth/login    — exchange credentials for a bearer token
GET  /api/auth/me       — the authenticated user
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from dependencies import get_auth_service, get_current_user
from schemas.dto.requests.auth import LoginRequest, RegisterRequest
from schemas.dto.responses.auth import AuthResponse, UserResponse
from schemas.models.user import UserDoc
from services.auth_service import AuthService

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _auth_response(auth: AuthService, user: UserDoc, token: str) -> AuthResponse:
    return AuthResponse(
        access_token=token,
        expires_in=auth.token_ttl_seconds,
        user=UserResponse.from_doc(user),
    )


@router.post("/register", status_code=201)
async def register(
    body: RegisterRequest, auth: AuthService = Depends(get_auth_service)
) -> AuthResponse:
    user, token = await auth.register(body)
    return _auth_response(auth, user, token)


@router.post("/login")
async def login(
    body: LoginRequest, auth: AuthService = Depends(get_auth_service)
) -> AuthResponse:
    user, token = await auth.login(body)
    return _auth_response(auth, user, token)


@router.get("/me")
async def me(user: UserDoc = Depends(get_current_user)) -> UserResponse:
    return UserResponse.from_doc(user)
