"""Catalog service — orchestrates validation, rules, and the store.

Each public method is one request/response operation and returns a
``ServiceResult``. Nothing here raises for expected outcomes; database
errors are turned into ``STORE_FAILURE`` (or ``DUPLICATE_CONFLICT`` for a
unique-constraint violation) by ``_guard_store``.
"""

import functools
import re
from typing import Any

from loguru import logger
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from verticals.catalog.models.schemas import validate_book
from verticals.catalog.results import ErrorKind, ServiceResult
from verticals.catalog.rules import (
    check_discount_percentage,
    check_duplicate_book,
    check_isbn_available,
    evaluate_rules,
    genre_discount_summary,
)
from verticals.catalog.store import BookStore

BOOK_NOT_FOUND = "Book not found"
INVALID_ID = "Book ID must be a number"
MISSING_DISCOUNT_PARAMS = "Both genre and discount parameters are required"
ISBN_CONFLICT = "A book with this ISBN already exists."
INTERNAL_ERROR = "Internal server error"

# Largest value of the INTEGER primary key; larger ids cannot exist.
MAX_BOOK_ID = 2**31 - 1

_ID_PATTERN = re.compile(r"-?[0-9]+")


def parse_book_id(raw: Any) -> int | None:
    """Parse a path id; None unless it is a plain run of ASCII digits."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str) and _ID_PATTERN.fullmatch(raw):
        return int(raw)
    return None


def _in_id_range(book_id: int) -> bool:
    return 1 <= book_id <= MAX_BOOK_ID


def _guard_store(func):
    """Translate SQLAlchemy errors raised by the store into results."""

    @functools.wraps(func)
    async def wrapper(self, *args, **kwargs) -> ServiceResult:
        try:
            return await func(self, *args, **kwargs)
        except IntegrityError:
            logger.bind(operation=func.__name__).warning("store.integrity_error")
            return ServiceResult.failure(ErrorKind.DUPLICATE_CONFLICT, ISBN_CONFLICT)
        except SQLAlchemyError:
            logger.bind(operation=func.__name__).exception("store.failure")
            return ServiceResult.failure(ErrorKind.STORE_FAILURE, INTERNAL_ERROR)

    return wrapper


class CatalogService:
    """Book catalog operations over an injected store."""

    def __init__(self, store: BookStore):
        self.store = store

    async def _check_conflicts(
        self, candidate: dict, exclude_id: int | None = None, check_isbn: bool = True
    ) -> ServiceResult | None:
        rules = [check_duplicate_book(candidate, await self.store.list_all(), exclude_id)]

        if check_isbn and self.store.unique_isbn:
            holder = await self.store.get_by_isbn(candidate["ISBN"])
            rules.append(
                check_isbn_available(candidate["ISBN"], [holder] if holder else [], exclude_id)
            )

        outcome = evaluate_rules(*rules)
        if not outcome.all_passed:
            return ServiceResult.failure(ErrorKind.DUPLICATE_CONFLICT, outcome.messages[0])
        return None

    # -- Create --

    @_guard_store
    async def create(self, payload: Any) -> ServiceResult:
        validated = validate_book(payload)
        if not validated.ok:
            return ServiceResult.failure(ErrorKind.VALIDATION_FAILED, *validated.errors)

        conflict = await self._check_conflicts(validated.data)
        if conflict:
            return conflict

        book = await self.store.create(validated.data)
        logger.bind(book_id=book["id"]).info("book.created")
        return ServiceResult.success(book)

    # -- Read --

    @_guard_store
    async def get(self, raw_id: Any) -> ServiceResult:
        book_id = parse_book_id(raw_id)
        if book_id is None:
            return ServiceResult.failure(ErrorKind.INVALID_ID, INVALID_ID)

        if not _in_id_range(book_id):
            return ServiceResult.failure(ErrorKind.NOT_FOUND, BOOK_NOT_FOUND)

        book = await self.store.get_by_id(book_id)
        if book is None:
            return ServiceResult.failure(ErrorKind.NOT_FOUND, BOOK_NOT_FOUND)
        return ServiceResult.success(book)

    # -- Update --

    @_guard_store
    async def update(self, raw_id: Any, payload: Any) -> ServiceResult:
        """Partially update a book.

        Conflicts are checked against the merged record before anything is
        written, so a rejected update leaves the stored book unchanged.
        """
        book_id = parse_book_id(raw_id)
        if book_id is None:
            return ServiceResult.failure(ErrorKind.INVALID_ID, INVALID_ID)

        validated = validate_book(payload, partial=True)
        if not validated.ok:
            return ServiceResult.failure(ErrorKind.VALIDATION_FAILED, *validated.errors)

        if not _in_id_range(book_id):
            return ServiceResult.failure(ErrorKind.NOT_FOUND, BOOK_NOT_FOUND)

        existing = await self.store.get_by_id(book_id)
        if existing is None:
            return ServiceResult.failure(ErrorKind.NOT_FOUND, BOOK_NOT_FOUND)

        merged = {**existing, **validated.data}
        conflict = await self._check_conflicts(
            merged, exclude_id=book_id, check_isbn="ISBN" in validated.data
        )
        if conflict:
            return conflict

        book = await self.store.update(book_id, validated.data)
        if book is None:
            return ServiceResult.failure(ErrorKind.NOT_FOUND, BOOK_NOT_FOUND)
        logger.bind(book_id=book_id, fields=sorted(validated.data)).info("book.updated")
        return ServiceResult.success(book)

    # -- Delete --

    @_guard_store
    async def delete(self, raw_id: Any) -> ServiceResult:
        book_id = parse_book_id(raw_id)
        if book_id is None:
            return ServiceResult.failure(ErrorKind.INVALID_ID, INVALID_ID)

        if not _in_id_range(book_id):
            return ServiceResult.failure(ErrorKind.NOT_FOUND, BOOK_NOT_FOUND)

        if not await self.store.delete(book_id):
            return ServiceResult.failure(ErrorKind.NOT_FOUND, BOOK_NOT_FOUND)
        logger.bind(book_id=book_id).info("book.deleted")
        return ServiceResult.success()

    # -- List --

    @_guard_store
    async def list_all(self) -> ServiceResult:
        return ServiceResult.success(await self.store.list_all())

    @_guard_store
    async def discounted_price(self, genre: str | None, discount: str | None) -> ServiceResult:
        """Total price of a genre after a percentage discount."""
        if not genre or not discount:
            return ServiceResult.failure(ErrorKind.INVALID_QUERY, MISSING_DISCOUNT_PARAMS)

        pct_rule = check_discount_percentage(discount)
        if not pct_rule.passed:
            return ServiceResult.failure(ErrorKind.INVALID_QUERY, pct_rule.message)

        books = await self.store.list_by_genre(genre)
        if not books:
            return ServiceResult.failure(
                ErrorKind.NOT_FOUND, f"No books found in genre '{genre}'"
            )
        return ServiceResult.success(
            genre_discount_summary(genre, books, pct_rule.details["percentage"])
        )
