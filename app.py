"""
FastAPI application factory.
create_app() is the single entry point for building the app.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pymongo.asynchronous.mongo_client import AsyncMongoClient

from config import AppSettings
from errors import register_error_handlers
from infrastructure.email.zeptomail import ZeptoMailProvider
from infrastructure.http_client import HttpClient
from repositories.indexes import ensure_indexes
from routes.auth_routes import router as auth_router
from routes.cause_routes import router as cause_router
from routes.claim_routes import router as claim_router
from routes.distribution_routes import router as distribution_router
from routes.health_routes import router as health_router
from routes.location_routes import router as location_router
from routes.otp_routes import router as otp_router
from routes.sponsorship_routes import router as sponsorship_router
from services.auth_service import TokenIssuer
from shared.logging import get_logger, setup_logging

log = get_logger(__name__)


def create_app(settings: Optional[AppSettings] = None) -> FastAPI:
    """Create and return a fully configured FastAPI application."""
    if settings is None:
        settings = AppSettings()

    setup_logging(
        log_level=settings.logging.log_level,
        log_format=settings.logging.log_format,
        env=settings.env,
    )

    # Initialise Sentry before anything else so it captures startup errors
    if settings.sentry.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry.sentry_dsn,
            environment=settings.env,
            send_default_pii=settings.sentry.sentry_send_pii,
            traces_sample_rate=settings.sentry.sentry_traces_sample_rate,
            profiles_sample_rate=settings.sentry.sentry_profile_sample_rate,
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # ── Startup ──────────────────────────────────────────────────────────
        mongo_client: AsyncMongoClient = AsyncMongoClient(
            settings.db.mongodb_uri, tz_aware=True
        )
        app.state.mongo_client = mongo_client
        app.state.db = mongo_client[settings.db.db_name]
        app.state.settings = settings

        await ensure_indexes(app.state.db, otp_ttl_seconds=settings.otp.otp_ttl_seconds)

        http_client = HttpClient()
        app.state.http_client = http_client
        app.state.email_provider = ZeptoMailProvider(
            settings.email,
            http_client,
            app_url=settings.app_url,
            app_name=settings.app_name,
            otp_ttl_minutes=settings.otp.otp_ttl_seconds // 60,
        )
        app.state.token_issuer = TokenIssuer(settings.jwt)

        log.info("app_started", env=settings.env, db_name=settings.db.db_name)

        yield

        # ── Shutdown ─────────────────────────────────────────────────────────
        await http_client.aclose()
        await mongo_client.close()
        log.info("app_stopped")

    app = FastAPI(
        title=settings.app_name,
        version="1.0.0",
        docs_url=settings.docs_url,
        redoc_url=None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)
    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(cause_router)
    app.include_router(sponsorship_router)
    app.include_router(claim_router)
    app.include_router(otp_router)
    app.include_router(distribution_router)
    app.include_router(location_router)

    return app
