"""
Book Response DTOs
"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional

from domain.entities import Book


class BookResponse(BaseModel):
    """Response DTO for a catalog entry."""

    id: str = Field(description="Book ID")
    title: str = Field(description="Title")
    author: str = Field(description="Author")
    isbn: str = Field(description="Normalized ISBN")
    isbn_format: str = Field(description="ISBN-13 or ISBN-10")
    publication_year: int = Field(description="Year of publication")
    category: str = Field(description="Category")
    total_copies: int = Field(description="Copies owned")
    available_copies: int = Field(description="Copies on the shelf")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last modification timestamp")

    @classmethod
    def from_entity(cls, book: Book) -> "BookResponse":
        return cls(
            id=book.id,
            title=book.title,
            author=book.author,
            isbn=book.isbn.value,
            isbn_format="ISBN-13" if book.isbn.is_isbn13 else "ISBN-10",
            publication_year=book.publication_year,
            category=book.category,
            total_copies=book.total_copies,
            available_copies=book.available_copies,
            created_at=book.created_at,
            updated_at=book.updated_at,
        )
