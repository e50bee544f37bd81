"""Engine and session factory configuration."""

from collections.abc import Generator
from contextlib import contextmanager
import logging
from typing import Any

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool

from product_api.core.exceptions import StorageError
from product_api.db.base import Base
import product_api.db.models  # noqa: F401  registers tables on Base.metadata

logger = logging.getLogger(__name__)


def _engine_options(database_url: str) -> dict[str, Any]:
    """Pick pool and driver options for the configured backend."""
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite":
        options: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        if url.database in (None, "", ":memory:"):
            # One shared connection so every session sees the same in-memory db
            options["poolclass"] = StaticPool
        return options
    # pool_pre_ping: Test connections before using (handles stale connections)
    # pool_recycle: Recycle connections after 30 minutes (prevents timeout)
    options = {
        "poolclass": QueuePool,
        "pool_pre_ping": True,
        "pool_recycle": 1800,
        "pool_size": 5,
        "max_overflow": 10,
    }
    if url.get_backend_name() == "postgresql":
        options["connect_args"] = {
            "connect_timeout": 10,
            "keepalives": 1,
            "keepalives_idle": 30,
            "keepalives_interval": 10,
            "keepalives_count": 5,
        }
    return options


class Database:
    """Process-wide database handle owning the engine and session factory.

    Created once at startup and shared read-only by all requests. When no
    connection URL is configured, or the URL names no usable dialect or
    driver, the handle stays unbound: `connect()` reports why and every
    session request fails with :class:`StorageError`.
    """

    def __init__(self, database_url: str | None) -> None:
        self.database_url = database_url
        self.engine: Engine | None = None
        self.setup_error: str | None = None
        self._session_factory: sessionmaker[Session] | None = None
        if not database_url:
            return
        try:
            self.engine = create_engine(
                database_url, echo=False, **_engine_options(database_url)
            )
        except (SQLAlchemyError, ImportError, ValueError) as e:
            self.setup_error = f"{type(e).__name__}: {e}"
            logger.warning(f"Database engine could not be created: {self.setup_error}")
            return
        self._session_factory = sessionmaker(
            bind=self.engine,
            autoflush=False,
            autocommit=False,
            expire_on_commit=False,
        )

    @property
    def is_configured(self) -> bool:
        return self.engine is not None

    def connect(self) -> None:
        """Verify connectivity and create the schema if it is missing."""
        if self.setup_error is not None:
            raise StorageError(f"Invalid database URL ({self.setup_error})")
        if self.engine is None:
            raise StorageError("Database connection URL is not configured")
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        Base.metadata.create_all(self.engine)

    def ping(self) -> None:
        """Run a trivial query, raising StorageError when the database is down."""
        if self.engine is None:
            raise StorageError("Database is not connected")
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1")).fetchone()
        except SQLAlchemyError as exc:
            raise StorageError(str(exc)) from exc

    def dispose(self) -> None:
        if self.engine is not None:
            self.engine.dispose()

    def new_session(self) -> Session:
        """Get a fresh session bound to the shared engine."""
        if self._session_factory is None:
            raise StorageError("Database is not connected")
        return self._session_factory()

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """Yield a transactional session, committing on success."""
        db = self.new_session()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()
