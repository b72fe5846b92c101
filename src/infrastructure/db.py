"""Database infrastructure for the business console.

This module exposes helpers to create and reuse the SQLAlchemy engine
connected to the business database holding partners and transactions.
"""

import os
from typing import Optional

import dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import QueuePool

from src.application.ports.database import DatabaseEnginePort


def _get_env_var(name: str) -> str:
    """Read an environment variable (after loading .env) or raise an error.

    Args:
        name: Name of the environment variable to read.

    Returns:
        str: The raw value of the environment variable.

    Raises:
        RuntimeError: If the environment variable is missing or empty.
    """
    dotenv.load_dotenv()
    value = os.getenv(name)
    if not value:
        raise RuntimeError(f"Missing environment variable: {name}")
    return value


def _create_engine(db_url: str) -> Engine:
    """Create a configured SQLAlchemy engine.

    Args:
        db_url: Fully qualified database URL (including driver and credentials)

    Returns:
        Engine: A SQLAlchemy engine instance with a small connection pool and
        health checks enabled.
    """
    return create_engine(
        db_url,
        poolclass=QueuePool,
        pool_size=5,
        max_overflow=5,
        pool_pre_ping=True,
        future=True,
    )


_business_engine: Optional[Engine] = None


def get_business_engine() -> Engine:
    """Get a singleton SQLAlchemy engine for the business database.

    Returns:
        Engine: Lazily initialized engine connected to the business backend.
    """
    global _business_engine
    if _business_engine is None:
        db_url = _get_env_var("BUSINESS_DB_URL")
        _business_engine = _create_engine(db_url)
    return _business_engine


class SqlAlchemyDatabaseEngineAdapter(DatabaseEnginePort):
    """DatabaseEnginePort implementation backed by a SQLAlchemy engine."""

    def get_business_engine(self) -> Engine:
        """Get the engine for the business database.

        Returns:
            Engine: SQLAlchemy engine connected to the business database.
        """
        return get_business_engine()


__all__ = ["get_business_engine", "SqlAlchemyDatabaseEngineAdapter"]
