"""
FastAPI dependency providers.

All injectable dependencies are defined here as plain functions used with
FastAPI's Depends() system. Long-lived resources (Mongo client, email
provider, token issuer) live on app.state and are created in the app
lifespan; repositories and services are cheap per-request wrappers around
them.
"""

from __future__ import annotations

from fastapi import Depends, Request

from config import AppSettings
from errors import AuthenticationError, ForbiddenError
from infrastructure.email.protocol import EmailProvider
from repositories import (
    CauseRepository,
    ClaimRepository,
    DistributionLocationRepository,
    OTPRepository,
    PhysicalDistributionRepository,
    SponsorshipRepository,
    UserRepository,
)
from schemas.models.user import UserDoc
from services.auth_service import AuthService, TokenIssuer
from services.availability_service import AvailabilityService
from services.cause_service import CauseService
from services.claim_service import ClaimService
from services.distribution_service import DistributionAllocator
from services.funding_service import FundingAggregator
from services.location_service import LocationService
from services.otp_service import OTPService
from services.sponsorship_service import SponsorshipService


def get_settings(request: Request) -> AppSettings:
    """Return the AppSettings instance stored on app.state."""
    return request.app.state.settings


async def get_db(request: Request):
    """Return the async MongoDB database from app.state."""
    return request.app.state.db


async def get_mongo_client(request: Request):
    """Return the AsyncMongoClient (needed to open transaction sessions)."""
    return request.app.state.mongo_client


def get_email_provider(request: Request) -> EmailProvider:
    return request.app.state.email_provider


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.token_issuer


# ── Repositories ─────────────────────────────────────────────────────────────


def get_user_repo(db=Depends(get_db)) -> UserRepository:
    return UserRepository(db)


def get_cause_repo(db=Depends(get_db)) -> CauseRepository:
    return CauseRepository(db)


def get_sponsorship_repo(db=Depends(get_db)) -> SponsorshipRepository:
    return SponsorshipRepository(db)


def get_claim_repo(db=Depends(get_db)) -> ClaimRepository:
    return ClaimRepository(db)


def get_otp_repo(db=Depends(get_db)) -> OTPRepository:
    return OTPRepository(db)


def get_location_repo(db=Depends(get_db)) -> DistributionLocationRepository:
    return DistributionLocationRepository(db)


def get_distribution_repo(db=Depends(get_db)) -> PhysicalDistributionRepository:
    return PhysicalDistributionRepository(db)


# ── Services ─────────────────────────────────────────────────────────────────


def get_auth_service(
    users: UserRepository = Depends(get_user_repo),
    tokens: TokenIssuer = Depends(get_token_issuer),
    email: EmailProvider = Depends(get_email_provider),
) -> AuthService:
    return AuthService(users, tokens, email)


def get_funding_aggregator(
    causes: CauseRepository = Depends(get_cause_repo),
    sponsorships: SponsorshipRepository = Depends(get_sponsorship_repo),
) -> FundingAggregator:
    return FundingAggregator(causes, sponsorships)


def get_availability_service(
    funding: FundingAggregator = Depends(get_funding_aggregator),
    claims: ClaimRepository = Depends(get_claim_repo),
) -> AvailabilityService:
    return AvailabilityService(funding, claims)


def get_otp_service(
    otps: OTPRepository = Depends(get_otp_repo),
    email: EmailProvider = Depends(get_email_provider),
    settings: AppSettings = Depends(get_settings),
) -> OTPService:
    return OTPService(
        otps,
        email,
        expiry_seconds=settings.otp.otp_ttl_seconds,
        resend_window_seconds=settings.otp.otp_resend_window_seconds,
    )


def get_claim_service(
    claims: ClaimRepository = Depends(get_claim_repo),
    causes: CauseRepository = Depends(get_cause_repo),
    availability: AvailabilityService = Depends(get_availability_service),
    otp: OTPService = Depends(get_otp_service),
    settings: AppSettings = Depends(get_settings),
) -> ClaimService:
    return ClaimService(
        claims,
        causes,
        availability,
        otp,
        enforce_capacity_on_verify=settings.claims.enforce_capacity_on_verify,
    )


def get_cause_service(
    causes: CauseRepository = Depends(get_cause_repo),
    sponsorships: SponsorshipRepository = Depends(get_sponsorship_repo),
    availability: AvailabilityService = Depends(get_availability_service),
) -> CauseService:
    return CauseService(causes, sponsorships, availability)


def get_distribution_allocator(
    distributions: PhysicalDistributionRepository = Depends(get_distribution_repo),
    locations: DistributionLocationRepository = Depends(get_location_repo),
    sponsorships: SponsorshipRepository = Depends(get_sponsorship_repo),
    client=Depends(get_mongo_client),
) -> DistributionAllocator:
    return DistributionAllocator(distributions, locations, sponsorships, client)


def get_location_service(
    locations: DistributionLocationRepository = Depends(get_location_repo),
    distributions: PhysicalDistributionRepository = Depends(get_distribution_repo),
) -> LocationService:
    return LocationService(locations, distributions)


def get_sponsorship_service(
    sponsorships: SponsorshipRepository = Depends(get_sponsorship_repo),
    causes: CauseRepository = Depends(get_cause_repo),
    distributions: PhysicalDistributionRepository = Depends(get_distribution_repo),
    funding: FundingAggregator = Depends(get_funding_aggregator),
    allocator: DistributionAllocator = Depends(get_distribution_allocator),
) -> SponsorshipService:
    return SponsorshipService(sponsorships, causes, distributions, funding, allocator)


# ── Auth ─────────────────────────────────────────────────────────────────────


def _bearer_token(request: Request) -> str:
    auth_header = request.headers.get("Authorization", "")
    if auth_header.lower().startswith("bearer "):
        token = auth_header.split(" ", 1)[1].strip()
        if token:
            return token
    raise AuthenticationError("Authentication required")


async def get_current_user(
    request: Request, auth: AuthService = Depends(get_auth_service)
) -> UserDoc:
    """Resolve the bearer token to a user. Raises 401 on any failure."""
    return await auth.authenticate(_bearer_token(request))


async def require_admin(user: UserDoc = Depends(get_current_user)) -> UserDoc:
    if not user.is_admin:
        raise ForbiddenError("Admin access required")
    return user
