"""Explicit outcome type for catalog operations.

Every CatalogService call returns a ``ServiceResult``: either a value, or an
``ErrorKind`` tag plus messages. The HTTP layer picks the status code from
the tag.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    VALIDATION_FAILED = "validation_failed"
    DUPLICATE_CONFLICT = "duplicate_conflict"
    INVALID_ID = "invalid_id"
    INVALID_QUERY = "invalid_query"
    NOT_FOUND = "not_found"
    STORE_FAILURE = "store_failure"

    @property
    def status_code(self) -> int:
        return STATUS_CODES[self]


STATUS_CODES = {
    ErrorKind.VALIDATION_FAILED: 400,
    ErrorKind.DUPLICATE_CONFLICT: 400,
    ErrorKind.INVALID_ID: 400,
    ErrorKind.INVALID_QUERY: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.STORE_FAILURE: 500,
}


@dataclass
class ServiceResult:
    """Outcome of a single catalog operation."""

    value: Any = None
    error: ErrorKind | None = None
    messages: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Any = None) -> "ServiceResult":
        return cls(value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, *messages: str) -> "ServiceResult":
        return cls(error=kind, messages=list(messages))

    def to_body(self) -> dict:
        """JSON error body: a list for validation, a single string otherwise."""
        if self.error is ErrorKind.VALIDATION_FAILED:
            return {"errors": self.messages}
        return {"error": self.messages[0] if self.messages else self.error.value}
