from fastapi import Request
from sqlalchemy.exc import IntegrityError
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from repofeed.utils.logger import logger

UNIQUE_VIOLATION_SQLSTATE = "23505"


def build_engine(database_url: str, echo: bool = False):
    """Create the process-wide engine. Called once from the application lifespan."""
    connect_args = {}
    engine_kwargs = {}
    if database_url.startswith("sqlite"):
        logger.info("Using SQLite database.")
        # This prevents 'ProgrammingError: SQLite objects created in a thread can only be used in that same thread'
        connect_args["check_same_thread"] = False
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            # Every connection would otherwise get its own empty in-memory database.
            engine_kwargs["poolclass"] = StaticPool
    else:
        logger.info("Using a non-SQLite database (e.g., PostgreSQL).")

    engine = create_engine(
        database_url, echo=echo, connect_args=connect_args, **engine_kwargs
    )
    logger.info("Database engine created successfully.")
    return engine


def create_db_and_tables(engine) -> None:
    # Table classes must be imported for their metadata to be registered.
    from repofeed.models.event import Event  # noqa: F401
    from repofeed.models.repo import Repo  # noqa: F401

    SQLModel.metadata.create_all(engine)


def get_session(request: Request):
    engine = getattr(request.app.state, "engine", None)
    if engine is None:
        logger.error("Attempted to get a database session before the engine was built.")
        raise RuntimeError("Database engine is not initialized.")

    with Session(engine) as session:
        yield session


def is_unique_violation(exc: IntegrityError) -> bool:
    """Tell a uniqueness violation apart from other integrity errors (FK, NOT NULL)."""
    orig = getattr(exc, "orig", None)
    if orig is None:
        return False

    # psycopg2 exposes pgcode, psycopg 3 and asyncpg expose sqlstate.
    for attr in ("pgcode", "sqlstate"):
        if getattr(orig, attr, None) == UNIQUE_VIOLATION_SQLSTATE:
            return True

    return "UNIQUE constraint failed" in str(orig)
