"""Persistence adapters (SQLAlchemy async)."""

from authsession.infrastructure.persistence.database import Database
from authsession.infrastructure.persistence.unit_of_work import SqlAlchemyUnitOfWork

__all__ = ["Database", "SqlAlchemyUnitOfWork"]
