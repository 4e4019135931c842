"""
Ownership-scoped repository.

Every statement issued through an OwnedRepository is filtered by the owning
user of the property at the end of the model's ownership path. Rows owned by
someone else are indistinguishable from rows that do not exist.
"""

from sqlalchemy import select, update, delete, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select
from typing import Any, Dict, List, Optional, Tuple, Type
import logging

from landlord_api.models.property import Property
from landlord_api.repositories.base import BaseRepository, ModelType
from landlord_api.utils.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def is_foreign_key_violation(error: IntegrityError) -> bool:
    orig = error.orig
    # asyncpg reports SQLSTATE 23503, SQLite only a message
    if getattr(orig, "sqlstate", None) == "23503" or getattr(orig, "pgcode", None) == "23503":
        return True
    return "FOREIGN KEY constraint failed" in str(orig)


class OwnedRepository(BaseRepository[ModelType]):
    """
    CRUD bound to a single owner.

    Subclasses declare:
        ownership_path: relationship attributes joined from the model to Property
        resource_name: name used in not-found errors
        mutable_fields: columns an update may write
    """

    ownership_path: Tuple[Any, ...] = ()
    resource_name: str = "Resource"
    mutable_fields: Tuple[str, ...] = ()

    def __init__(self, model: Type[ModelType], db: AsyncSession, owner_id: int):
        super().__init__(model, db)
        self.owner_id = owner_id

    def scoped(self, *columns) -> Select:
        """SELECT restricted to rows reachable from the owner's properties."""
        query = select(*columns) if columns else select(self.model)
        for relationship in self.ownership_path:
            query = query.join(relationship)
        return query.where(Property.user_id == self.owner_id)

    def owned_ids(self) -> Select:
        # Never correlate: the subquery must read the table independently of
        # the UPDATE/DELETE that embeds it.
        return self.scoped(self.model.id).correlate(None)

    async def get_by_id(self, id: int, refresh: bool = False) -> ModelType:
        """
        Get an owned record by ID.

        Raises:
            NotFoundError: If the record does not exist or belongs to another owner
        """
        query = self.scoped().where(self.model.id == id)
        if refresh:
            query = query.execution_options(populate_existing=True)

        result = await self.db.execute(query)
        obj = result.scalar_one_or_none()
        if obj is None:
            logger.debug(f"{self.model.__name__} {id} not visible to user {self.owner_id}")
            raise NotFoundError(self.resource_name, id)
        return obj

    async def exists(self, id: int) -> bool:
        result = await self.db.execute(
            self.scoped(func.count(self.model.id)).where(self.model.id == id)
        )
        return (result.scalar() or 0) > 0

    async def list_for_owner(
        self,
        filters: Optional[Dict[str, Any]] = None,
        limit: Optional[int] = None
    ) -> List[ModelType]:
        """
        List owned records, newest first.

        Args:
            filters: Equality filters on model columns; None values are ignored
            limit: Optional maximum number of rows
        """
        query = self.scoped()
        for field, value in (filters or {}).items():
            if value is not None and hasattr(self.model, field):
                query = query.where(getattr(self.model, field) == value)

        query = query.order_by(*self.default_order())
        if limit:
            query = query.limit(limit)

        result = await self.db.execute(query)
        return list(result.scalars().all())

    def default_order(self):
        return (self.model.created_at.desc(), self.model.id.desc())

    async def update(self, id: int, obj_in: Dict[str, Any], commit: bool = True) -> ModelType:
        """
        Update an owned record in a single conditional statement.

        Only ``mutable_fields`` are written. Explicit None values clear
        nullable columns.

        Raises:
            ValidationError: If no mutable field is present
            NotFoundError: If the record does not exist or belongs to another owner
        """
        values = {key: value for key, value in obj_in.items() if key in self.mutable_fields}
        if not values:
            raise ValidationError("No updatable fields provided")

        stmt = (
            update(self.model)
            .where(self.model.id == id, self.model.id.in_(self.owned_ids()))
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        try:
            result = await self.db.execute(stmt)
            if result.rowcount and commit:
                await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        # zero rows: absent, or owned by someone else
        if result.rowcount == 0:
            raise NotFoundError(self.resource_name, id)

        logger.info(f"Updated {self.model.__name__} {id} for user {self.owner_id}")
        return await self.get_by_id(id, refresh=True)

    async def delete(self, id: int, commit: bool = True) -> None:
        """
        Delete an owned record in a single conditional statement.

        Raises:
            NotFoundError: If the record does not exist or belongs to another owner
        """
        stmt = (
            delete(self.model)
            .where(self.model.id == id, self.model.id.in_(self.owned_ids()))
            .execution_options(synchronize_session=False)
        )
        try:
            result = await self.db.execute(stmt)
            if result.rowcount and commit:
                await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        # zero rows: absent, or owned by someone else
        if result.rowcount == 0:
            raise NotFoundError(self.resource_name, id)

        logger.info(f"Deleted {self.model.__name__} {id} for user {self.owner_id}")

    async def _require_visible(self, repository_cls, id: int) -> None:
        """Raise NotFoundError unless the parent record is owned by this user."""
        parent_repo = repository_cls(self.db, self.owner_id)
        if not await parent_repo.exists(id):
            raise NotFoundError(parent_repo.resource_name, id)

    async def create_under(
        self,
        parent_cls,
        parent_id: int,
        obj_in: Dict[str, Any],
        commit: bool = True
    ) -> ModelType:
        """
        Insert a child row beneath an owned parent.

        Raises:
            NotFoundError: If the parent is not owned, or is deleted before the insert lands
        """
        await self._require_visible(parent_cls, parent_id)
        try:
            return await super().create(obj_in, commit=commit)
        except IntegrityError as e:
            if not is_foreign_key_violation(e):
                raise
            logger.warning(f"{parent_cls.resource_name} {parent_id} vanished during insert for user {self.owner_id}")
            raise NotFoundError(parent_cls.resource_name, parent_id) from e
