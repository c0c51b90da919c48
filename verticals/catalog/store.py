"""Catalog stores — the owners of the book collection.

Two interchangeable backends implement ``BookStore``:

- ``InMemoryBookStore`` keeps an ordered list for a single process. Ids
  are ``max(existing) + 1``, so deleting the highest id lets it be handed
  out again, and concurrent creates can race on the same id.
- ``SqlBookStore`` persists to the ``books`` table. Ids come from the
  autoincrement key and ISBNs are unique at the database level.

Both return plain dict copies; mutating a returned record never changes
the store.
"""

import copy
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.database import session_scope
from verticals.catalog.models.db_models import Book
from verticals.catalog.repository import BookRepository


class BookStore(Protocol):
    """Storage contract used by CatalogService."""

    # True when the backend guarantees one record per ISBN.
    unique_isbn: bool

    async def create(self, data: dict) -> dict: ...

    async def get_by_id(self, book_id: int) -> dict | None: ...

    async def get_by_isbn(self, isbn: str) -> dict | None: ...

    async def update(self, book_id: int, fields: dict) -> dict | None: ...

    async def delete(self, book_id: int) -> bool: ...

    async def list_all(self) -> list[dict]: ...

    async def list_by_genre(self, genre: str) -> list[dict]: ...

    async def clear(self) -> None: ...


# ---------------------------------------------------------------------------
# In-memory store
# ---------------------------------------------------------------------------

class InMemoryBookStore:
    """Non-persistent store backed by a list in insertion order."""

    unique_isbn = False

    def __init__(self, books: list[dict] | None = None):
        self._books: list[dict] = [copy.deepcopy(b) for b in books or []]

    def _next_id(self) -> int:
        return max((b["id"] for b in self._books), default=0) + 1

    def _find(self, book_id: int) -> dict | None:
        return next((b for b in self._books if b["id"] == book_id), None)

    async def create(self, data: dict) -> dict:
        book = {"id": self._next_id(), **copy.deepcopy(data)}
        self._books.append(book)
        return copy.deepcopy(book)

    async def get_by_id(self, book_id: int) -> dict | None:
        book = self._find(book_id)
        return copy.deepcopy(book) if book else None

    async def get_by_isbn(self, isbn: str) -> dict | None:
        book = next((b for b in self._books if b.get("ISBN") == isbn), None)
        return copy.deepcopy(book) if book else None

    async def update(self, book_id: int, fields: dict) -> dict | None:
        book = self._find(book_id)
        if book is None:
            return None
        book.update({k: copy.deepcopy(v) for k, v in fields.items() if k != "id"})
        return copy.deepcopy(book)

    async def delete(self, book_id: int) -> bool:
        book = self._find(book_id)
        if book is None:
            return False
        self._books.remove(book)
        return True

    async def list_all(self) -> list[dict]:
        return copy.deepcopy(self._books)

    async def list_by_genre(self, genre: str) -> list[dict]:
        wanted = genre.lower()
        return [copy.deepcopy(b) for b in self._books if str(b.get("genre", "")).lower() == wanted]

    async def clear(self) -> None:
        self._books.clear()

    def __len__(self) -> int:
        return len(self._books)


# ---------------------------------------------------------------------------
# SQL store
# ---------------------------------------------------------------------------

class SqlBookStore:
    """Persistent store; one committed session per operation.

    Database errors (constraint violations, lost connections) propagate as
    ``sqlalchemy.exc.SQLAlchemyError``.
    """

    unique_isbn = True

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def create(self, data: dict) -> dict:
        async with session_scope(self.session_factory) as session:
            return await BookRepository(session).create(Book.from_fields(data))

    async def get_by_id(self, book_id: int) -> dict | None:
        async with session_scope(self.session_factory) as session:
            return await BookRepository(session).get(book_id)

    async def get_by_isbn(self, isbn: str) -> dict | None:
        async with session_scope(self.session_factory) as session:
            return await BookRepository(session).get_by_isbn(isbn)

    async def update(self, book_id: int, fields: dict) -> dict | None:
        async with session_scope(self.session_factory) as session:
            return await BookRepository(session).update_fields(book_id, fields)

    async def delete(self, book_id: int) -> bool:
        async with session_scope(self.session_factory) as session:
            return await BookRepository(session).delete(book_id)

    async def list_all(self) -> list[dict]:
        async with session_scope(self.session_factory) as session:
            return await BookRepository(session).list()

    async def list_by_genre(self, genre: str) -> list[dict]:
        async with session_scope(self.session_factory) as session:
            return await BookRepository(session).list_by_genre(genre)

    async def clear(self) -> None:
        async with session_scope(self.session_factory) as session:
            await BookRepository(session).delete_all()
