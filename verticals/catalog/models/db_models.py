"""SQLAlchemy models for the catalog vertical.

The to_dict() method provides the standard serialisation interface used by
stores and routers. Keys follow the public JSON contract (publicationYear,
ISBN, createdAt, ...).
"""

from sqlalchemy import Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from core.models.base import Base, TimestampMixin


class Book(TimestampMixin, Base):
    """A book in the catalog."""

    __tablename__ = "books"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    author: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    genre: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    price: Mapped[float] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=False)
    publication_year: Mapped[int] = mapped_column(Integer, nullable=False)
    isbn: Mapped[str] = mapped_column(String(32), unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Public field name -> column attribute
    FIELD_MAP = {
        "title": "title",
        "author": "author",
        "genre": "genre",
        "price": "price",
        "publicationYear": "publication_year",
        "ISBN": "isbn",
        "description": "description",
    }

    @classmethod
    def from_fields(cls, data: dict) -> "Book":
        return cls(**{cls.FIELD_MAP[k]: v for k, v in data.items() if k in cls.FIELD_MAP})

    def apply_fields(self, data: dict) -> None:
        for key, value in data.items():
            attr = self.FIELD_MAP.get(key)
            if attr is not None:
                setattr(self, attr, value)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "genre": self.genre,
            "price": float(self.price),
            "publicationYear": self.publication_year,
            "ISBN": self.isbn,
            "description": self.description,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
