"""
Base repository - generic CRUD over soft-deletable entities (SOLID: Interface Segregation, Dependency Inversion).
Challenge: Consistent data access, testability via mocks, one visibility rule for every read.
Design: Every query adds the active() predicate explicitly; relations are loaded only through
the loader options a subclass returns from _relation_options().
"""

from collections.abc import Mapping
from typing import Any, Generic, TypeVar

from sqlalchemy import Select, inspect, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.interfaces import LoaderOption

from vehicle_reports.db.base import Base, active, stamp_created, stamp_updated, utcnow

ModelType = TypeVar("ModelType", bound=Base)

# Assigned by the persistence layer; never accepted from a patch
SERVER_FIELDS = frozenset({"id", "created_at", "updated_at", "deleted_at"})


class BaseRepository(Generic[ModelType]):
    """Generic async repository. Subclasses define model-specific methods."""

    def __init__(self, session: AsyncSession, model: type[ModelType]):
        self.session = session
        self.model = model

    def _relation_options(self) -> list[LoaderOption]:
        """Loader options for the entity's relation. Overridden per entity."""
        return []

    def _select_active(self, *, with_relation: bool = False) -> Select:
        stmt = select(self.model).where(active(self.model))
        if with_relation:
            # populate_existing so rows already in the identity map get a fresh relation
            stmt = stmt.options(*self._relation_options()).execution_options(populate_existing=True)
        return stmt

    async def _all(self, stmt: Select) -> list[ModelType]:
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def add(self, entity: ModelType) -> ModelType:
        """Stamp id/timestamps and persist new entity. Caller commits session."""
        stamp_created(entity)
        self.session.add(entity)
        await self.session.flush()  # Surface constraint errors now, not at commit
        await self.session.refresh(entity)
        return entity

    async def create(self, fields: Mapping[str, Any]) -> ModelType:
        """Build and persist a new entity. No uniqueness checks here."""
        return await self.add(self.model(**fields))

    async def find_all(self) -> list[ModelType]:
        """Active rows with their relation, newest first."""
        return await self._all(
            self._select_active(with_relation=True).order_by(self.model.created_at.desc())
        )

    async def find_one(self, id: str) -> ModelType | None:
        """Active row by id with its relation, or None."""
        result = await self.session.execute(
            self._select_active(with_relation=True).where(self.model.id == id)
        )
        return result.scalar_one_or_none()

    async def update(self, id: str, patch: Mapping[str, Any]) -> ModelType | None:
        """Merge patch into the active row; keys absent from the patch are left untouched."""
        forbidden = SERVER_FIELDS.intersection(patch)
        if forbidden:
            raise ValueError(f"Cannot patch server-assigned fields: {sorted(forbidden)}")
        unknown = set(patch) - set(inspect(self.model).column_attrs.keys())
        if unknown:
            raise ValueError(f"Unknown {self.model.__name__} fields: {sorted(unknown)}")

        entity = await self.find_one(id)
        if entity is None:
            return None
        for field, value in patch.items():
            setattr(entity, field, value)
        stamp_updated(entity)
        await self.session.flush()
        # Reload so column values come back in the store's own representation
        return await self.find_one(id)

    async def soft_delete(self, id: str) -> bool:
        """Mark the active row deleted. False when there is no active row with this id."""
        now = utcnow()
        result = await self.session.execute(
            update(self.model)
            .where(self.model.id == id, active(self.model))
            .values(deleted_at=now, updated_at=now)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount > 0
