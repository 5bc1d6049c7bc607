"""Database engine management for the read-only transaction store."""

from typing import Optional

from sqlalchemy import create_engine, Engine

from networth.config.settings import get_settings

# Module-level engine (can be reconfigured at runtime)
_engine: Optional[Engine] = None


def build_engine(database_url: str) -> Engine:
    """Create an engine for the given URL."""
    connect_args = {}
    if database_url.startswith("sqlite"):
        # Aggregators read from worker threads
        connect_args["check_same_thread"] = False
    return create_engine(database_url, connect_args=connect_args, echo=False)


def get_engine() -> Engine:
    """Get or create the database engine."""
    global _engine
    if _engine is None:
        _engine = build_engine(get_settings().database_url)
    return _engine


def reset_database() -> None:
    """Reset database state (for reconfiguration)."""
    global _engine

    if _engine is not None:
        _engine.dispose()

    _engine = None
