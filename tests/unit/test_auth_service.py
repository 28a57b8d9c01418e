"""Unit tests for registration, login and access tokens."""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import jwt
import pytest
from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from config import JWTSettings
from errors import AuthenticationError, ConflictError
from schemas.dto.requests.auth import LoginRequest, RegisterRequest
from schemas.models.user import UserDoc
from services.auth_service import AuthService, TokenIssuer
from shared.crypto import hash_password

SECRET = "test-secret-with-enough-length-for-hs256"


@pytest.fixture
def jwt_settings(monkeypatch):
    for var in ("JWT_PRIVATE_KEY", "JWT_PUBLIC_KEY", "JWT_ISSUER", "JWT_AUDIENCE"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("JWT_SECRET", SECRET)
    return JWTSettings()


@pytest.fixture
def tokens(jwt_settings):
    return TokenIssuer(jwt_settings)


@pytest.fixture
def user_repo():
    repo = AsyncMock()
    repo.find_by_email.return_value = None

    async def _insert(doc):
        doc.id = ObjectId()
        return doc

    repo.insert.side_effect = _insert
    return repo


@pytest.fixture
def email_provider():
    provider = AsyncMock()
    provider.send_welcome_email.return_value = True
    return provider


@pytest.fixture
def service(user_repo, tokens, email_provider):
    return AuthService(user_repo, tokens, email_provider)


def _user(**overrides) -> UserDoc:
    base = dict(
        _id=ObjectId(),
        email="jo@example.com",
        password_hash=hash_password("correct horse"),
        role="sponsor",
    )
    base.update(overrides)
    return UserDoc(**base)


class TestTokenIssuer:
    def test_round_trip_claims(self, tokens, jwt_settings):
        user = _user()
        claims = tokens.decode(tokens.issue(user))
        assert claims["sub"] == str(user.id)
        assert claims["role"] == "sponsor"
        assert claims["iss"] == jwt_settings.jwt_issuer

    def test_expired_token_rejected(self, tokens):
        past = datetime.now(timezone.utc) - timedelta(days=2)
        token = tokens.issue(_user(), now=past)
        with pytest.raises(AuthenticationError) as exc:
            tokens.decode(token)
        assert "expired" in exc.value.message

    def test_foreign_signature_rejected(self, tokens):
        forged = jwt.encode({"sub": "x"}, "some-other-secret-of-enough-length", algorithm="HS256")
        with pytest.raises(AuthenticationError):
            tokens.decode(forged)

    def test_missing_secret_is_a_startup_error(self, monkeypatch):
        for var in ("JWT_PRIVATE_KEY", "JWT_PUBLIC_KEY", "JWT_SECRET"):
            monkeypatch.delenv(var, raising=False)
        with pytest.raises(RuntimeError):
            TokenIssuer(JWTSettings())


class TestRegister:
    async def test_creates_user_and_token(self, service, user_repo, email_provider, tokens):
        user, token = await service.register(
            RegisterRequest(email="Jo@Example.com", password="correct horse", name="Jo")
        )
        assert user.email == "jo@example.com"
        assert user.password_hash != "correct horse"
        assert tokens.decode(token)["sub"] == str(user.id)
        email_provider.send_welcome_email.assert_awaited_once_with("jo@example.com", "Jo")

    async def test_duplicate_email(self, service, user_repo):
        user_repo.find_by_email.return_value = _user()
        with pytest.raises(ConflictError):
            await service.register(
                RegisterRequest(email="jo@example.com", password="correct horse")
            )
        user_repo.insert.assert_not_awaited()

    async def test_concurrent_duplicate_maps_to_conflict(self, service, user_repo):
        user_repo.insert.side_effect = DuplicateKeyError("E11000 email")
        with pytest.raises(ConflictError) as exc:
            await service.register(
                RegisterRequest(email="jo@example.com", password="correct horse")
            )
        assert exc.value.field == "email"

    async def test_welcome_email_failure_is_not_fatal(self, service, email_provider):
        email_provider.send_welcome_email.side_effect = RuntimeError("smtp down")
        user, token = await service.register(
            RegisterRequest(email="jo@example.com", password="correct horse")
        )
        assert user.id is not None
        assert token


class TestLogin:
    async def test_success(self, service, user_repo, tokens):
        user = _user()
        user_repo.find_by_email.return_value = user
        found, token = await service.login(
            LoginRequest(email="jo@example.com", password="correct horse")
        )
        assert found is user
        assert tokens.decode(token)["sub"] == str(user.id)

    @pytest.mark.parametrize("known", [True, False], ids=["wrong_password", "unknown_email"])
    async def test_failure_is_uniform(self, service, user_repo, known):
        user_repo.find_by_email.return_value = _user() if known else None
        with pytest.raises(AuthenticationError) as exc:
            await service.login(LoginRequest(email="jo@example.com", password="nope nope"))
        assert exc.value.message == "Invalid email or password"


class TestAuthenticate:
    async def test_resolves_user(self, service, user_repo, tokens):
        user = _user()
        user_repo.find_by_id.return_value = user
        assert await service.authenticate(tokens.issue(user)) is user
        user_repo.find_by_id.assert_awaited_once_with(user.id)

    async def test_deleted_user(self, service, user_repo, tokens):
        user_repo.find_by_id.return_value = None
        with pytest.raises(AuthenticationError):
            await service.authenticate(tokens.issue(_user()))
