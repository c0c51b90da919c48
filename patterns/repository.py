"""Async repository pattern for database access.

Provides a generic base repository with CRUD operations bound to one
AsyncSession. Verticals subclass this to add domain-specific queries.

Example: BookRepository extending BaseRepository.
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.models.base import Base

# ---------------------------------------------------------------------------
# Type variable for model classes
# ---------------------------------------------------------------------------

ModelT = TypeVar("ModelT", bound=Base)


# ---------------------------------------------------------------------------
# Base repository
# ---------------------------------------------------------------------------

class BaseRepository(Generic[ModelT]):
    """Generic async repository with CRUD.

    Subclass and set `model` to your SQLAlchemy model::

        class BookRepository(BaseRepository[Book]):
            model = Book

            async def list_by_genre(self, genre: str):
                stmt = select(self.model).where(
                    func.lower(self.model.genre) == genre.lower(),
                )
                result = await self.session.execute(stmt)
                return [r.to_dict() for r in result.scalars().all()]

    Rows are returned as dicts via ``to_dict()`` so callers never hold
    session-bound objects.
    """

    model: type[ModelT]

    def __init__(self, session: AsyncSession):
        self.session = session

    # -- List --

    async def list(self, filters: dict[str, Any] | None = None) -> list[dict]:
        """List items ordered by id, with optional equality filters."""
        stmt = select(self.model)

        if filters:
            for col_name, value in filters.items():
                if hasattr(self.model, col_name) and value is not None:
                    stmt = stmt.where(getattr(self.model, col_name) == value)

        stmt = stmt.order_by(self.model.id)
        result = await self.session.execute(stmt)
        return [row.to_dict() for row in result.scalars().all()]

    # -- Get by ID --

    async def get_row(self, item_id: int) -> ModelT | None:
        return await self.session.get(self.model, item_id)

    async def get(self, item_id: int) -> dict | None:
        """Get a single item by ID."""
        row = await self.get_row(item_id)
        return row.to_dict() if row else None

    # -- Create --

    async def create(self, item: ModelT) -> dict:
        """Insert a new item and return it with database-assigned values."""
        self.session.add(item)
        await self.session.flush()
        await self.session.refresh(item)
        return item.to_dict()

    # -- Update --

    async def save(self, item: ModelT) -> dict:
        """Flush pending changes on a loaded item."""
        await self.session.flush()
        await self.session.refresh(item)
        return item.to_dict()

    # -- Delete --

    async def delete(self, item_id: int) -> bool:
        """Delete an item. Returns True if deleted, False if not found."""
        item = await self.get_row(item_id)
        if not item:
            return False

        await self.session.delete(item)
        await self.session.flush()
        return True
