"""Pydantic schemas for book payload validation.

``BookCreate`` validates a full record, ``BookUpdate`` the partial body of an
update. Both run in strict mode so that ``"2008"`` is not a year and ``true``
is not a price. ``validate_book`` translates pydantic's error list into the
client-facing messages of ``MESSAGES``, reporting every violation at once.
"""

from dataclasses import dataclass, field
from typing import Annotated, Any, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, ValidationError
from pydantic_core import PydanticCustomError


MIN_TEXT_LENGTH = 3
MIN_ISBN_LENGTH = 5


# ---------------------------------------------------------------------------
# Field validators
# ---------------------------------------------------------------------------

def _whole_number(value: float) -> int:
    if not float(value).is_integer():
        raise PydanticCustomError("not_integer", "value must be an integer")
    return int(value)


def _price_rules(value: float) -> float:
    """Check sign and precision together so both problems are reported."""
    violations = []
    if value < 0:
        violations.append("negative")
    if round(value, 2) != value:
        violations.append("decimal_places")
    if violations:
        raise PydanticCustomError(
            "price_rules", "price violates {violations}", {"violations": tuple(violations)}
        )
    return value


# ---------------------------------------------------------------------------
# Field types shared by the full and partial schemas
# ---------------------------------------------------------------------------

Title = Annotated[str, Field(alias="title", min_length=MIN_TEXT_LENGTH)]
Author = Annotated[str, Field(alias="author", min_length=MIN_TEXT_LENGTH)]
Genre = Annotated[str, Field(alias="genre", min_length=MIN_TEXT_LENGTH)]
PublicationYear = Annotated[
    float,
    Field(alias="publicationYear", allow_inf_nan=False),
    AfterValidator(_whole_number),
]
Isbn = Annotated[str, Field(alias="ISBN", min_length=MIN_ISBN_LENGTH)]
Price = Annotated[
    float,
    Field(alias="price", allow_inf_nan=False),
    AfterValidator(_price_rules),
]
Description = Annotated[str, Field(alias="description")]


class BookCreate(BaseModel):
    model_config = ConfigDict(strict=True, extra="ignore")

    title: Title
    author: Author
    genre: Genre
    publication_year: PublicationYear
    isbn: Isbn
    price: Price
    description: Description = None


class BookUpdate(BookCreate):
    """Every field optional; a present field must still be valid.

    Defaults are not validated, so an omitted field stays unset while an
    explicit ``null`` fails the type check.
    """

    title: Title = None
    author: Author = None
    genre: Genre = None
    publication_year: PublicationYear = None
    isbn: Isbn = None
    price: Price = None
    description: Description = None


# ---------------------------------------------------------------------------
# Message table
# ---------------------------------------------------------------------------

LABELS = {
    "title": "Title",
    "author": "Author",
    "genre": "Genre",
    "publicationYear": "Publication year",
    "ISBN": "ISBN",
    "price": "Price",
    "description": "Description",
}

# (error type, field or None for any field) -> message template
MESSAGES: dict[tuple[str, Optional[str]], str] = {
    ("missing", None): "{label} is required",
    ("string_type", None): "{label} must be a string",
    ("string_too_short", None): "{label} must be at least {min} characters long",
    ("string_too_short", "ISBN"): "ISBN length must be at least {min} characters",
    ("float_type", None): "{label} must be a number",
    ("finite_number", None): "{label} must be a number",
    ("not_integer", None): "{label} must be an integer",
    ("negative", None): "{label} must be a positive number",
    ("decimal_places", None): "{label} must have no more than 2 decimal places",
    ("model_type", None): "Book data must be an object",
    ("model_attributes_type", None): "Book data must be an object",
}


def _message_for(error: dict[str, Any]) -> str:
    loc = error.get("loc") or ()
    field_name = str(loc[0]) if loc else None
    error_type = error["type"]
    template = MESSAGES.get((error_type, field_name)) or MESSAGES.get((error_type, None))
    if template is None:
        return error["msg"]
    ctx = error.get("ctx") or {}
    return template.format(
        label=LABELS.get(field_name or "", field_name),
        min=ctx.get("min_length", MIN_TEXT_LENGTH),
    )


def _messages_for(error: dict[str, Any]) -> list[str]:
    """Expand a combined price error into one message per violation."""
    if error["type"] != "price_rules":
        return [_message_for(error)]
    violations = (error.get("ctx") or {}).get("violations", ())
    return [_message_for({**error, "type": kind}) for kind in violations]


# ---------------------------------------------------------------------------
# Validation entry point
# ---------------------------------------------------------------------------

@dataclass
class ValidationOutcome:
    """Either the validated fields (keyed by public name) or the violations."""

    data: dict[str, Any] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def validate_book(payload: Any, partial: bool = False) -> ValidationOutcome:
    """Validate an untrusted book payload.

    Full mode requires every field; partial mode checks only the fields
    present. All violations are collected in field order.
    """
    schema = BookUpdate if partial else BookCreate
    try:
        model = schema.model_validate(payload)
    except ValidationError as exc:
        errors = [msg for err in exc.errors() for msg in _messages_for(err)]
        return ValidationOutcome(errors=errors)

    data = {
        info.alias: getattr(model, name)
        for name, info in schema.model_fields.items()
        if not partial or name in model.model_fields_set
    }
    return ValidationOutcome(data=data)
