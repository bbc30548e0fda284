"""Database layer: declarative base and engine/session management."""

from nomina_kernel.db.base import AwareDateTime, Base, DecimalString, TrackedBase
from nomina_kernel.db.engine import (
    create_tables,
    get_engine,
    get_session,
    init_engine_from_url,
    reset_engine,
)

__all__ = [
    "AwareDateTime",
    "Base",
    "DecimalString",
    "TrackedBase",
    "create_tables",
    "get_engine",
    "get_session",
    "init_engine_from_url",
    "reset_engine",
]
