"""
Account registration, login and bearer-token handling.

Tokens are stateless access JWTs. RS256 is used when a key pair is
configured, HS256 with JWT_SECRET otherwise.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import jwt
from pymongo.errors import DuplicateKeyError

from config import JWTSettings
from errors import AuthenticationError, ConflictError, ValidationError
from infrastructure.email.protocol import EmailProvider
from repositories.user_repository import UserRepository
from schemas.dto.requests.auth import LoginRequest, RegisterRequest
from schemas.models.user import UserDoc
from shared.crypto import hash_password, verify_password
from shared.logging import get_logger
from shared.validators import normalize_email, parse_object_id

log = get_logger(__name__)


class TokenIssuer:
    """Encodes and decodes access JWTs for one JWTSettings."""

    def __init__(self, settings: JWTSettings) -> None:
        self._settings = settings
        if settings.use_rs256:
            # Keys supplied through env vars may carry literal \n sequences
            self._private_key: Any = settings.jwt_private_key.replace("\\n", "\n")
            self._public_key: Any = settings.jwt_public_key.replace("\\n", "\n")
            self._algorithm = "RS256"
        else:
            if not settings.jwt_secret:
                raise RuntimeError(
                    "JWT_SECRET must be set when RS256 keys are not provided"
                )
            self._private_key = self._public_key = settings.jwt_secret
            self._algorithm = "HS256"

    @property
    def ttl_seconds(self) -> int:
        return self._settings.access_token_ttl_seconds

    def issue(self, user: UserDoc, now: Optional[datetime] = None) -> str:
        now = now or datetime.now(timezone.utc)
        claims = {
            "iss": self._settings.jwt_issuer,
            "aud": self._settings.jwt_audience,
            "sub": str(user.id),
            "role": user.role,
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(seconds=self.ttl_seconds)).timestamp()),
        }
        return jwt.encode(claims, self._private_key, algorithm=self._algorithm)

    def decode(self, token: str) -> dict:
        """Return the verified claims or raise AuthenticationError."""
        try:
            return jwt.decode(
                token,
                self._public_key,
                algorithms=[self._algorithm],
                audience=self._settings.jwt_audience,
                issuer=self._settings.jwt_issuer,
            )
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Token has expired")
        except jwt.InvalidTokenError:
            raise AuthenticationError("Invalid token")


class AuthService:
    def __init__(
        self,
        user_repo: UserRepository,
        tokens: TokenIssuer,
        email_provider: EmailProvider,
    ) -> None:
        self._users = user_repo
        self._tokens = tokens
        self._email = email_provider

    @property
    def token_ttl_seconds(self) -> int:
        return self._tokens.ttl_seconds

    async def register(self, req: RegisterRequest) -> tuple[UserDoc, str]:
        email = normalize_email(req.email)
        if await self._users.find_by_email(email) is not None:
            raise ConflictError("Email already registered", field="email")

        user = UserDoc(
            email=email,
            password_hash=hash_password(req.password),
            role=req.role,
            name=req.name,
            phone=req.phone,
        )
        try:
            user = await self._users.insert(user)
        except DuplicateKeyError:
            # Concurrent registration won the unique email index
            raise ConflictError("Email already registered", field="email")
        log.info("user_registered", user_id=str(user.id), role=user.role)

        try:
            sent = await self._email.send_welcome_email(email, user.name)
            if not sent:
                log.warning("welcome_email_failed", user_id=str(user.id))
        except Exception as e:
            log.error(
                "welcome_email_failed",
                user_id=str(user.id),
                error=str(e),
                error_type=type(e).__name__,
            )

        return user, self._tokens.issue(user)

    async def login(self, req: LoginRequest) -> tuple[UserDoc, str]:
        email = normalize_email(req.email)
        user = await self._users.find_by_email(email)
        if user is None or not verify_password(req.password, user.password_hash):
            log.warning("login_failed", email=email)
            raise AuthenticationError("Invalid email or password")
        log.info("user_logged_in", user_id=str(user.id))
        return user, self._tokens.issue(user)

    async def authenticate(self, token: str) -> UserDoc:
        """Resolve the user behind a bearer token."""
        claims = self._tokens.decode(token)
        try:
            user_id = parse_object_id(claims.get("sub"), "user")
        except ValidationError:
            raise AuthenticationError("Invalid token")
        user = await self._users.find_by_id(user_id)
        if user is None:
            raise AuthenticationError("User no longer exists")
        return user
