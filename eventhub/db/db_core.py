"""Core database functionality and configuration.

This module provides the connection provider for the event store: a lazily
established, process-wide engine with pooled connections and transactional
session handling.
"""

from contextlib import contextmanager
import logging
import os
import threading
from concurrent.futures import Future
from typing import Optional, Dict, Any, Generator

from sqlalchemy import create_engine, Engine, inspect, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from ..models import Base

logger = logging.getLogger(__name__)


class DatabaseConfig:
    """Database configuration settings."""

    def __init__(
        self,
        database_url: Optional[str] = None,
        echo: Optional[bool] = None,
        pool_size: int = 3,
        max_overflow: int = 4,
        pool_timeout: int = 30,
        pool_recycle: int = 3600,
        pool_pre_ping: bool = True
    ):
        """
        Initialize database configuration.

        The connection URL is not required at construction time; it is
        resolved when the first connection is made so that importing the
        package never needs a configured environment.

        Args:
            database_url: SQLAlchemy connection URL.
                        If not provided, will use DATABASE_URL env variable
            echo: Whether to echo SQL statements (defaults to DATABASE_ECHO env variable)
            pool_size: Size of the connection pool (permanent connections)
            max_overflow: Maximum number of extra connections to allow temporarily
                        (total connections = pool_size + max_overflow)
            pool_timeout: Seconds to wait for an available connection
            pool_recycle: Seconds before connections are recycled (prevent stale)
            pool_pre_ping: Whether to ping connections before using them
        """
        self._database_url = database_url
        if echo is None:
            echo = os.environ.get('DATABASE_ECHO', '').lower() in ('1', 'true', 'yes')
        self.echo = echo
        self.pool_size = pool_size
        self.max_overflow = max_overflow
        self.pool_timeout = pool_timeout
        self.pool_recycle = pool_recycle
        self.pool_pre_ping = pool_pre_ping

    @property
    def connection_url(self) -> str:
        """
        Get the database connection URL.

        Raises:
            ValueError: If no URL was given and DATABASE_URL is not set
        """
        url = self._database_url or os.environ.get('DATABASE_URL', '').strip()
        if not url:
            raise ValueError(
                "Database URL must be provided either via database_url parameter "
                "or DATABASE_URL environment variable"
            )
        return url

    @property
    def is_sqlite(self) -> bool:
        return self.connection_url.startswith('sqlite')

    def get_engine_args(self) -> Dict[str, Any]:
        """Get SQLAlchemy engine arguments based on configuration."""
        args: Dict[str, Any] = {"echo": self.echo}

        # SQLite-specific configuration
        if self.is_sqlite:
            args["connect_args"] = {"check_same_thread": False}
            args["poolclass"] = StaticPool

        # PostgreSQL-specific configuration
        else:
            args.update({
                "pool_size": self.pool_size,
                "max_overflow": self.max_overflow,
                "pool_timeout": self.pool_timeout,
                "pool_recycle": self.pool_recycle,
                "pool_pre_ping": self.pool_pre_ping
            })

        return args


class DatabaseError(Exception):
    """Base exception for database-related errors."""
    pass


class ConnectionError(DatabaseError):
    """Raised when there are issues connecting to the database."""
    pass


class SessionError(DatabaseError):
    """Raised when there are issues with database sessions."""
    pass


class Database:
    """
    Connection provider for the event store.

    The engine is created on the first call to ``connect()``. Concurrent
    first callers share one in-flight attempt and see its outcome; a failed
    attempt leaves nothing behind so the next call tries again.
    """

    def __init__(self, config: Optional[DatabaseConfig] = None):
        self.config = config or DatabaseConfig()
        self.engine: Optional[Engine] = None
        self._session_factory = sessionmaker(expire_on_commit=False)
        self._connect_lock = threading.Lock()
        self._attempt: Optional[Future] = None
        self._tables_checked = False

    def connect(self) -> Engine:
        """
        Return the live engine, establishing it on first use.

        Callers that arrive while an attempt is in flight wait for that
        attempt and receive its engine or its error. The attempt is cleared
        once it settles, so only a later call starts a new one.

        Raises:
            ValueError: If no connection URL is configured
            ConnectionError: If the store cannot be reached
        """
        engine = self.engine
        if engine is not None:
            return engine

        with self._connect_lock:
            if self.engine is not None:
                return self.engine
            attempt = self._attempt
            owner = attempt is None
            if owner:
                attempt = self._attempt = Future()

        if not owner:
            return attempt.result()

        try:
            engine = self._establish()
        except BaseException as e:
            with self._connect_lock:
                self._attempt = None
            attempt.set_exception(e)
            raise

        with self._connect_lock:
            self.engine = engine
            self._attempt = None
        attempt.set_result(engine)
        return engine

    def _establish(self) -> Engine:
        url = self.config.connection_url
        engine = None
        try:
            engine = create_engine(url, **self.config.get_engine_args())
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            if engine is not None:
                engine.dispose()
            logger.error(f"Failed to connect to database: {e}")
            raise ConnectionError(f"Failed to connect to database: {e}") from e

        self._session_factory.configure(bind=engine)
        logger.info(f"Connected to {engine.url.get_backend_name()} database")
        return engine

    def init_db(self) -> None:
        """Create all tables."""
        engine = self.connect()
        try:
            Base.metadata.create_all(engine)
            self._tables_checked = True
            logger.info("Database schema initialized successfully")
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to initialize database schema: {e}") from e

    def ensure_tables_exist(self) -> None:
        """Ensure all required database tables exist."""
        if self._tables_checked:
            return

        engine = self.connect()
        try:
            existing_tables = set(inspect(engine).get_table_names())
            required_tables = set(Base.metadata.tables)

            if not required_tables.issubset(existing_tables):
                logger.info("Some tables missing, initializing database schema")
                Base.metadata.create_all(engine)
                logger.info("Database schema initialized successfully")

            self._tables_checked = True
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to verify/create database schema: {e}") from e

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """
        Provide a transactional scope around a series of operations.

        Commits when the block finishes and rolls back on any exception.
        Domain errors raised inside the block propagate unchanged; driver
        errors are wrapped in ``SessionError``.

        Example:
            with db.session() as session:
                event = session.query(Event).filter(Event.slug == slug).one_or_none()

        Raises:
            ConnectionError: If the store cannot be reached
            SessionError: If the store rejects the work
        """
        self.ensure_tables_exist()

        session = self._session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise SessionError(f"Database session error: {e}") from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def dispose(self) -> None:
        """Release pooled connections; the next ``connect()`` starts over."""
        with self._connect_lock:
            if self.engine is not None:
                self.engine.dispose()
                self.engine = None
                self._tables_checked = False


# Create the global database instance with default configuration
db = Database()
