"""
Async MongoDB repositories, one per collection.

Repositories own every query against their collection and hand back typed
document models. Mutating methods accept an optional ``session`` so callers
can group several writes into one multi-document transaction.
"""

from repositories.cause_repository import CauseRepository
from repositories.claim_repository import ClaimRepository
from repositories.distribution_repository import (
    DistributionLocationRepository,
    PhysicalDistributionRepository,
)
from repositories.otp_repository import OTPRepository
from repositories.sponsorship_repository import SponsorshipRepository
from repositories.user_repository import UserRepository

__all__ = [
    "CauseRepository",
    "ClaimRepository",
    "DistributionLocationRepository",
    "OTPRepository",
    "PhysicalDistributionRepository",
    "SponsorshipRepository",
    "UserRepository",
]
