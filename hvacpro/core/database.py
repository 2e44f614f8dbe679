"""
Database configuration and session management
"""

from typing import Generator

from sqlmodel import SQLModel, Session, create_engine
import structlog

from hvacpro.core.config import get_settings

logger = structlog.get_logger(__name__)
settings = get_settings()


def _connect_args(url: str) -> dict:
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


engine = create_engine(
    settings.DATABASE_URL,
    echo=False,
    pool_pre_ping=not settings.DATABASE_URL.startswith("sqlite"),
    connect_args=_connect_args(settings.DATABASE_URL),
)


def init_db(bind=None) -> None:
    """Create database tables from the SQLModel metadata"""
    # Register every table on the metadata before create_all
    import hvacpro.models  # noqa: F401

    SQLModel.metadata.create_all(bind or engine)
    logger.info("Database tables created")


def get_session() -> Generator[Session, None, None]:
    """Dependency to get database session"""
    with Session(engine) as session:
        yield session
