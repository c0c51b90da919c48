"""Book repository — async database access for the catalog.

Extends BaseRepository with catalog-specific queries: genre filtering
and ISBN lookup.
"""

from sqlalchemy import delete, func, select

from patterns.repository import BaseRepository
from verticals.catalog.models.db_models import Book


class BookRepository(BaseRepository[Book]):
    """Repository for book CRUD and lookups."""

    model = Book

    async def list_by_genre(self, genre: str) -> list[dict]:
        """Books whose genre equals ``genre`` ignoring case."""
        stmt = (
            select(Book)
            .where(func.lower(Book.genre) == genre.lower())
            .order_by(Book.id)
        )
        result = await self.session.execute(stmt)
        return [row.to_dict() for row in result.scalars().all()]

    async def get_by_isbn(self, isbn: str) -> dict | None:
        stmt = select(Book).where(Book.isbn == isbn)
        result = await self.session.execute(stmt)
        row = result.scalar_one_or_none()
        return row.to_dict() if row else None

    async def update_fields(self, item_id: int, data: dict) -> dict | None:
        """Shallow-merge public fields into a book. Returns None if not found."""
        book = await self.get_row(item_id)
        if not book:
            return None
        book.apply_fields(data)
        return await self.save(book)

    async def delete_all(self) -> None:
        await self.session.execute(delete(Book))
