from typing import Any, Generic, Iterable, List, Optional, Type, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from regmatch.db.base import BaseModel

ModelType = TypeVar("ModelType", bound=BaseModel)


class BaseRepository(Generic[ModelType]):
    """
    Generic async repository over one mapped model.

    Subclasses add the domain queries; this class covers inserts and
    equality-filtered lookups.

    Type Parameters:
        ModelType: The SQLAlchemy model class this repository manages
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        self.model = model
        self.db = db

    def _where_equal(self, stmt: Select, filters: dict[str, Any]) -> Select:
        """Add one equality clause per filter; unknown columns are an error."""
        for field, value in filters.items():
            column = getattr(self.model, field, None)
            if column is None:
                raise ValueError(f"{self.model.__name__} has no column '{field}'")
            stmt = stmt.where(column == value)
        return stmt

    async def create(self, **kwargs: Any) -> ModelType:
        """
        Insert one entity and load its server-generated columns.

        Args:
            **kwargs: Column values for the new entity

        Returns:
            The persisted entity
        """
        instance = self.model(**kwargs)
        self.db.add(instance)
        await self.db.flush()
        await self.db.refresh(instance)
        return instance

    async def create_many(self, rows: Iterable[dict[str, Any]]) -> List[ModelType]:
        """
        Insert several entities in one flush.

        Args:
            rows: Column values, one mapping per entity

        Returns:
            The persisted entities in input order
        """
        instances = [self.model(**row) for row in rows]
        self.db.add_all(instances)
        await self.db.flush()
        return instances

    async def count(self, **filters: Any) -> int:
        """Count entities whose columns equal the given values."""
        stmt = self._where_equal(select(func.count()).select_from(self.model), filters)
        result = await self.db.execute(stmt)
        return result.scalar_one()

    async def find_one_by(self, **filters: Any) -> Optional[ModelType]:
        """Return the first entity whose columns equal the given values, or None."""
        stmt = self._where_equal(select(self.model), filters).limit(1)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()
