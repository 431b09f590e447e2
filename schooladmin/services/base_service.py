# schooladmin/services/base_service.py
"""Base service with common persistence operations.

Services are thin stores: they flush but never commit. The caller owning the
request (a router for single-store writes, the consistency coordinator for
multi-store ones) decides when the transaction ends.
"""
from datetime import date, datetime
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from typing import Type, Any, Dict, Iterable, List, Optional, TypeVar, Generic, Union

# Define generic type
T = TypeVar('T')


def calendar_day(value: Union[datetime, date, str]) -> date:
    """Truncate a timestamp to its calendar date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.fromisoformat(value.replace('Z', '+00:00')).date()


class BaseService(Generic[T]):
    def __init__(self, model: Type[T], db: AsyncSession):
        self.model = model
        self.db = db

    async def get(self, id: Any) -> Optional[T]:
        stmt = select(self.model).where(self.model.id == id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_multi(self, skip: int = 0, limit: int = 100, **filters) -> List[T]:
        stmt = select(self.model).offset(skip).limit(limit)

        for key, value in filters.items():
            if hasattr(self.model, key) and value is not None:
                stmt = stmt.where(getattr(self.model, key) == value)

        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def ids_where(self, **filters) -> List[Any]:
        """Collect primary keys matching equality filters."""
        stmt = select(self.model.id)
        for key, value in filters.items():
            stmt = stmt.where(getattr(self.model, key) == value)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def create(self, obj_in: Dict) -> T:
        obj = self.model(**obj_in)
        self.db.add(obj)
        await self.db.flush()
        return obj

    async def delete_by_ids(self, ids: Iterable[Any]) -> int:
        """Hard delete every row whose id is in ``ids``."""
        ids = list(ids)
        if not ids:
            return 0
        result = await self.db.execute(delete(self.model).where(self.model.id.in_(ids)))
        return result.rowcount

