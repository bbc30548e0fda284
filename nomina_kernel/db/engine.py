"""
Module: nomina_kernel.db.engine
Responsibility: SQLAlchemy engine initialization and session creation.
    Single point of database connection configuration; transactions are
    owned by ``PayrollStore.transaction``.
Architecture position: Kernel > DB.  May import from db/base.py only.
    Module ORM models are registered by ``nomina_modules._orm_registry``
    before ``create_tables()`` runs; the kernel never imports them.

Invariants enforced:
    - The default URL is an in-memory SQLite database shared by every
      session of the process (StaticPool), so tests and the CLI need no
      server.
    - Other URLs (PostgreSQL, file-backed SQLite) use SQLAlchemy's default
      pool with pre-ping.

Failure modes:
    - RuntimeError if get_engine/get_session called before
      init_engine_from_url().
"""

import atexit

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from nomina_kernel.logging_config import get_logger

logger = get_logger("db.engine")

DEFAULT_DATABASE_URL = "sqlite+pysqlite:///:memory:"

_engine: Engine | None = None
_SessionFactory: sessionmaker[Session] | None = None


def _is_memory_sqlite(database_url: str) -> bool:
    return database_url.startswith("sqlite") and (
        ":memory:" in database_url or database_url.rstrip("/").endswith("sqlite:")
    )


def init_engine_from_url(
    database_url: str = DEFAULT_DATABASE_URL,
    echo: bool = False,
) -> Engine:
    """
    Initialize the SQLAlchemy engine.

    Postconditions: Module-level _engine and _SessionFactory are initialized.
        A second call replaces the first engine (the old one is disposed).

    Args:
        database_url: SQLAlchemy URL; defaults to in-memory SQLite.
        echo: If True, log all SQL statements.
    """
    global _engine, _SessionFactory

    if _engine is not None:
        _engine.dispose()

    if _is_memory_sqlite(database_url):
        _engine = create_engine(
            database_url,
            echo=echo,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    else:
        _engine = create_engine(database_url, echo=echo, pool_pre_ping=True)

    _SessionFactory = sessionmaker(bind=_engine, expire_on_commit=False)

    logger.info(
        "engine_initialized",
        extra={"dialect": _engine.dialect.name, "echo": echo},
    )
    return _engine


def get_engine() -> Engine:
    """
    Raises:
        RuntimeError: If engine has not been initialized.
    """
    if _engine is None:
        raise RuntimeError("Engine not initialized. Call init_engine_from_url() first.")
    return _engine


def get_session() -> Session:
    """
    Get a new session instance.

    Raises:
        RuntimeError: If engine has not been initialized.
    """
    if _SessionFactory is None:
        raise RuntimeError("Engine not initialized. Call init_engine_from_url() first.")
    return _SessionFactory()


def create_tables() -> None:
    """
    Create every table registered on ``Base.metadata``.

    Preconditions: ORM models are imported (see
        ``nomina_modules._orm_registry.create_all_tables``).
    """
    from nomina_kernel.db.base import Base

    engine = get_engine()
    Base.metadata.create_all(engine)
    logger.info("tables_created", extra={"tables": sorted(Base.metadata.tables)})


def reset_engine() -> None:
    """Dispose the engine and forget the session factory (test cleanup)."""
    global _engine, _SessionFactory

    if _engine is not None:
        _engine.dispose()
        _engine = None

    _SessionFactory = None


def _atexit_dispose():
    if _engine is not None:
        _engine.dispose()


atexit.register(_atexit_dispose)
