"""Declarative Base - shared metadata for every Campaign Hub table.

Invariants:
    - Every ORM model inherits from Base, so Base.metadata is the full schema
    - Constraint and index names are deterministic (NAMING_CONVENTION), which keeps
      alembic autogenerate diffs stable across PostgreSQL and SQLite
"""

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase


NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=NAMING_CONVENTION)
