"""Database ports for the business console.

This module defines the application-layer protocol for accessing the
database engine. Infrastructure implementations are expected to provide
concrete adapters that satisfy this port.
"""

from typing import Protocol

from sqlalchemy.engine import Engine


class DatabaseEnginePort(Protocol):
    """Port exposing the business database engine."""

    def get_business_engine(self) -> Engine:
        """Get the engine for the business database.

        Returns:
            Engine: SQLAlchemy engine connected to the business backend.
        """


__all__ = ["DatabaseEnginePort"]
