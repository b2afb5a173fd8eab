from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from repofeed.api.handlers.exception_handlers import (
    unprocessable_entity_exception_handler,
)
from repofeed.api.routes import app as app_endpoints
from repofeed.api.routes import events as event_endpoints
from repofeed.api.routes import webhooks as webhook_endpoints
from repofeed.config import settings
from repofeed.config.db import build_engine, create_db_and_tables
from repofeed.integrations.github.github import GitHubApiClient
from repofeed.utils.logger import logger, setup_logger

setup_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Builds the shared database engine and GitHub client once per process
    and exposes them on app.state for the request dependencies.
    """
    logger.info("Starting up...")
    engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG_MODE)
    if settings.AUTO_CREATE_TABLES:
        create_db_and_tables(engine)
    app.state.engine = engine

    if not settings.GITHUB_WEBHOOK_SECRET:
        logger.warning(
            "GITHUB_WEBHOOK_SECRET is not set; webhook signatures will not be verified."
        )
    app.state.github_client = GitHubApiClient(
        settings.GITHUB_TOKEN,
        api_url=settings.GITHUB_API_URL,
        timeout=settings.GITHUB_API_TIMEOUT,
    )

    yield

    logger.info("Shutting down...")
    engine.dispose()


app = FastAPI(
    title="repofeed",
    description="GitHub activity feed ingestion",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_exception_handler(RequestValidationError, unprocessable_entity_exception_handler)

app.include_router(app_endpoints.router, tags=["general"])
app.include_router(webhook_endpoints.router, prefix="/api/webhooks", tags=["webhooks"])
app.include_router(event_endpoints.router, prefix="/api/events", tags=["events"])
