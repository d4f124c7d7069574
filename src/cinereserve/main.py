"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from cinereserve import __version__
from cinereserve.api.errors import register_exception_handlers
from cinereserve.api.routes import admin, auth, health, movies, reservations, screenings
from cinereserve.config import settings
from cinereserve.database import engine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"CineReserve API {__version__} starting ({settings.env})")
    yield
    # Shutdown: close pooled connections
    await engine.dispose()
    logger.info("Database engine disposed")


def create_app() -> FastAPI:
    app = FastAPI(
        title="CineReserve API",
        description="Cinema booking: movie catalog, screenings and seat reservations",
        version=__version__,
        lifespan=lifespan,
    )

    # Configure CORS; credentials are needed for the session cookie
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session_secret_key,
        session_cookie="cinereserve_session",
        max_age=settings.session_max_age,
        same_site="lax",
        https_only=settings.session_https_only,
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(health.router)
    app.include_router(auth.router, tags=["auth"])
    app.include_router(movies.router, tags=["movies"])
    app.include_router(screenings.router, tags=["screenings"])
    app.include_router(reservations.router, tags=["reservations"])
    app.include_router(admin.router, tags=["admin"])
    return app


app = create_app()
