import logging
from collections.abc import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from bundle_registry.core.config import get_settings
from bundle_registry.db.base import Base

logger = logging.getLogger(__name__)


def build_engine(database_url: str) -> Engine:
    connect_args: dict = {}
    if database_url.startswith("sqlite"):
        # Request handlers run on the threadpool and share the pooled connections.
        connect_args["check_same_thread"] = False
    return create_engine(database_url, connect_args=connect_args, pool_pre_ping=True)


engine = build_engine(get_settings().database_url)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


def init_db(bind: Engine | None = None) -> None:
    """Create the bundles and files tables if they do not exist yet."""
    import bundle_registry.models  # noqa: F401  registers the tables on Base.metadata

    target = bind or engine
    Base.metadata.create_all(bind=target)
    logger.info("Schema ready on %s", target.url.render_as_string(hide_password=True))


def get_db() -> Iterator[Session]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
