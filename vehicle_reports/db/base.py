"""
SQLAlchemy declarative base, visibility predicate and record stamping helpers.
Challenge: Single place for table definitions and migrations; identity and timestamps
assigned the same way for every entity.
Design: Explicit helpers called by repositories at create/update time (no ORM event hooks),
and an explicit soft-delete predicate added to every read query.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

from sqlalchemy import ColumnElement
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all ORM models. Enables Alembic migrations."""

    pass


def new_id() -> str:
    """Opaque, globally unique record id."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes for DateTime(timezone=True) columns
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def active(model: Any) -> ColumnElement[bool]:
    """Visibility predicate: the row has not been soft-deleted."""
    return model.deleted_at.is_(None)


def stamp_created(entity: Any) -> Any:
    """Assign id (when absent) and creation timestamps to a new entity."""
    if not entity.id:
        entity.id = new_id()
    now = utcnow()
    entity.created_at = now
    entity.updated_at = now
    return entity


def stamp_updated(entity: Any) -> Any:
    """Refresh updated_at; the new value is always later than the previous one."""
    now = utcnow()
    previous = entity.updated_at
    if previous is not None and now <= _as_utc(previous):
        now = _as_utc(previous) + timedelta(microseconds=1)
    entity.updated_at = now
    return entity
