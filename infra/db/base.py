# infra/db/base.py
from __future__ import annotations
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
import logging

from infra.path import default_db_path

logger = logging.getLogger(__name__)

Base = declarative_base()


def default_db_url() -> str:
    # Absolute path under the per-user data directory
    return f"sqlite:///{default_db_path().as_posix()}"


def build_engine(db_url: str | None = None) -> Engine:
    url = db_url or default_db_url()
    logger.info("Using database at: %s", url)
    return create_engine(url, echo=False, future=True)


def build_session_factory(engine: Engine, *, create_schema: bool = True) -> sessionmaker:
    if create_schema:
        import infra.db.models  # noqa: F401

        Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
