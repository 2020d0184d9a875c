"""
Base CRUD with generic CRUD operations.

Provides reusable database operations that can be inherited by the
per-entity CRUD classes. Writes flush by default and leave the commit to the
service layer's transaction decorator.
"""
from typing import Any, Dict, Generic, List, Optional, Sequence, Type, TypeVar, Union

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlmodel import SQLModel

# Type variable for the model class
ModelType = TypeVar("ModelType", bound=SQLModel)

OrderBy = Union[Any, Sequence[Any], None]


class BaseCRUD(Generic[ModelType]):
    """
    Generic repository providing common CRUD operations.

    Usage:
        class ClientCRUD(BaseCRUD[Client]):
            model = Client
            default_order = (Client.created_at.desc(),)
    """

    model: Type[ModelType] = None
    default_order: Sequence[Any] = ()

    @classmethod
    def _apply_filters(cls, stmt, filters: Optional[Dict[str, Any]]):
        if filters:
            for field, value in filters.items():
                if value is not None:
                    stmt = stmt.where(getattr(cls.model, field) == value)
        return stmt

    @classmethod
    def _apply_order(cls, stmt, order_by: OrderBy):
        if order_by is None:
            order_by = cls.default_order
        if isinstance(order_by, (list, tuple)):
            return stmt.order_by(*order_by) if order_by else stmt
        return stmt.order_by(order_by)

    @classmethod
    async def find_by_id(
        cls,
        db: AsyncSession,
        id_value: Any,
        *,
        eager_load: Optional[List] = None
    ) -> Optional[ModelType]:
        """
        Find a single record by ID.

        Args:
            db: Database session
            id_value: The ID value to search for
            eager_load: List of relationships to eager load (selectinload)

        Returns:
            Model instance or None if not found
        """
        stmt = select(cls.model).where(cls.model.id == id_value)

        if eager_load:
            for relationship in eager_load:
                stmt = stmt.options(selectinload(relationship))

        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    @classmethod
    async def find_one(
        cls,
        db: AsyncSession,
        *,
        filters: Optional[Dict[str, Any]] = None,
    ) -> Optional[ModelType]:
        """
        Find the first record matching filters.

        Args:
            db: Database session
            filters: Dictionary of field:value filters

        Returns:
            Model instance or None if not found
        """
        stmt = cls._apply_filters(select(cls.model), filters)
        stmt = cls._apply_order(stmt, None).limit(1)

        result = await db.execute(stmt)
        return result.scalars().first()

    @classmethod
    async def find_all(
        cls,
        db: AsyncSession,
        *,
        filters: Optional[Dict[str, Any]] = None,
        order_by: OrderBy = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None
    ) -> List[ModelType]:
        """
        Find all records matching filters.

        Args:
            db: Database session
            filters: Dictionary of field:value filters (None values are ignored)
            order_by: Column or columns to order by (defaults to ``default_order``)
            limit: Maximum number of records
            offset: Number of records to skip

        Returns:
            List of model instances
        """
        stmt = cls._apply_filters(select(cls.model), filters)
        stmt = cls._apply_order(stmt, order_by)

        if offset:
            stmt = stmt.offset(offset)

        if limit:
            stmt = stmt.limit(limit)

        result = await db.execute(stmt)
        return list(result.scalars().all())

    @classmethod
    async def count(
        cls,
        db: AsyncSession,
        *,
        filters: Optional[Dict[str, Any]] = None
    ) -> int:
        """Count records matching filters."""
        stmt = cls._apply_filters(select(func.count(cls.model.id)), filters)
        result = await db.execute(stmt)
        return result.scalar() or 0

    @classmethod
    async def create(
        cls,
        db: AsyncSession,
        *,
        obj_in: Dict[str, Any],
        commit: bool = False
    ) -> ModelType:
        """
        Create a new record.

        Args:
            db: Database session
            obj_in: Dictionary of field values
            commit: Commit immediately instead of only flushing

        Returns:
            Created model instance with generated columns loaded
        """
        db_obj = cls.model(**obj_in)
        db.add(db_obj)

        if commit:
            await db.commit()
        else:
            await db.flush()
        await db.refresh(db_obj)

        return db_obj

    @classmethod
    async def update(
        cls,
        db: AsyncSession,
        *,
        id_value: Any,
        obj_in: Dict[str, Any],
        commit: bool = False
    ) -> Optional[ModelType]:
        """
        Update an existing record.

        Args:
            db: Database session
            id_value: ID of record to update
            obj_in: Dictionary of field values to update
            commit: Commit immediately instead of only flushing

        Returns:
            Updated model instance or None if not found
        """
        db_obj = await cls.find_by_id(db, id_value)
        if not db_obj:
            return None

        for field, value in obj_in.items():
            setattr(db_obj, field, value)

        db.add(db_obj)
        if commit:
            await db.commit()
        else:
            await db.flush()
        await db.refresh(db_obj)

        return db_obj

    @classmethod
    async def delete(
        cls,
        db: AsyncSession,
        *,
        id_value: Any,
        commit: bool = False
    ) -> bool:
        """
        Delete a record.

        Returns:
            True if deleted, False if not found
        """
        db_obj = await cls.find_by_id(db, id_value)
        if not db_obj:
            return False

        await db.delete(db_obj)

        if commit:
            await db.commit()
        else:
            await db.flush()

        return True

    @classmethod
    async def exists(
        cls,
        db: AsyncSession,
        *,
        filters: Dict[str, Any]
    ) -> bool:
        """Check if a record exists matching filters."""
        return await cls.count(db, filters=filters) > 0
