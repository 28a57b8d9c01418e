"""
Index management for every collection.

Called once at startup from the app lifespan. create_index is idempotent, so
re-running on every boot is safe.
"""

from __future__ import annotations

from pymongo import ASCENDING, DESCENDING

from shared.logging import get_logger

log = get_logger(__name__)


async def ensure_indexes(db, *, otp_ttl_seconds: int = 600) -> None:
    users = db["users"]
    await users.create_index([("email", ASCENDING)], unique=True)

    causes = db["causes"]
    await causes.create_index([("status", ASCENDING)])
    await causes.create_index([("category", ASCENDING)])
    await causes.create_index([("creator", ASCENDING)])

    sponsorships = db["sponsorships"]
    await sponsorships.create_index([("cause", ASCENDING), ("status", ASCENDING)])
    await sponsorships.create_index([("status", ASCENDING)])
    await sponsorships.create_index([("created_at", ASCENDING)])

    claims = db["claims"]
    await claims.create_index([("created_at", DESCENDING)])
    await claims.create_index([("cause_id", ASCENDING), ("status", ASCENDING)])
    await claims.create_index([("email", ASCENDING)])

    otps = db["otp-verifications"]
    await otps.create_index([("email", ASCENDING), ("type", ASCENDING)])
    # Records are purged a fixed time after creation, verified or not
    await otps.create_index(
        [("created_at", ASCENDING)], expireAfterSeconds=otp_ttl_seconds
    )

    locations = db["distribution-locations"]
    await locations.create_index([("name", ASCENDING)])
    await locations.create_index([("type", ASCENDING)])
    await locations.create_index([("is_active", ASCENDING)])
    await locations.create_index([("city", ASCENDING)])

    distributions = db["physical-distributions"]
    await distributions.create_index([("sponsorship", ASCENDING)], unique=True)
    await distributions.create_index([("status", ASCENDING)])
    await distributions.create_index([("distribution_locations.location", ASCENDING)])

    log.info("mongo_indexes_ensured", otp_ttl_seconds=otp_ttl_seconds)
