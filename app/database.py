from contextlib import contextmanager
from functools import lru_cache
import logging
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from app.config import get_settings
from app.errors import StorageError
from app.models import Base

logger = logging.getLogger(__name__)


@lru_cache()
def get_engine() -> Engine:
    settings = get_settings()
    url = settings.POSTGRES_CONN
    if url.startswith("postgres://"):
        url = "postgresql://" + url[len("postgres://"):]
    engine = create_engine(url, pool_pre_ping=True)
    logger.info("Database engine created for %s", engine.url.render_as_string(hide_password=True))
    return engine


def get_session():
    with Session(get_engine()) as session:
        yield session


def create_db_and_tables(engine: Optional[Engine] = None):
    engine = engine or get_engine()
    Base.metadata.create_all(engine)
    logger.info("Database schema is up to date")


@contextmanager
def storage_errors(session: Session, action: str):
    """Roll back and re-raise database failures as :class:`StorageError`."""
    try:
        yield
    except SQLAlchemyError as exc:
        logger.exception("Storage failure while trying to %s", action)
        session.rollback()
        raise StorageError(f"failed to {action}: {exc.__class__.__name__}") from exc
