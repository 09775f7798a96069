"""
Book repository for catalog data access operations.
"""

from typing import Any, Dict, List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from domain.entities import Book
from domain.value_objects import ISBN
from domain.value_objects.isbn import normalize_isbn
from exceptions import ApplicationError, DuplicateError
from models import BookRecord
from .base_repository import BaseRepository
from .book_specifications import (
    AvailableBooksSpec,
    BooksByAuthorSpec,
    BooksByCategorySpec,
    BooksByIsbnSpec,
    BooksByTitleSpec,
)


class BookRepository(BaseRepository[Book, BookRecord]):
    """Repository for Book aggregate operations."""

    entity_name = "Book"

    def __init__(self, db: Session):
        super().__init__(db, BookRecord)

    def _to_entity(self, record: BookRecord) -> Book:
        return Book(
            id=record.id,
            title=record.title,
            author=record.author,
            isbn=ISBN(record.isbn),
            publication_year=record.publication_year,
            category=record.category,
            total_copies=record.total_copies,
            available_copies=record.available_copies,
            created_at=record.created_at,
            updated_at=record.updated_at,
            version=record.version,
        )

    def _to_columns(self, book: Book) -> Dict[str, Any]:
        return {
            "title": book.title,
            "author": book.author,
            "isbn": book.isbn.value,
            "publication_year": book.publication_year,
            "category": book.category,
            "total_copies": book.total_copies,
            "available_copies": book.available_copies,
            "created_at": book.created_at,
            "updated_at": book.updated_at,
        }

    def _integrity_error(self, book: Book, exc: IntegrityError) -> ApplicationError:
        return DuplicateError("book", "isbn", book.isbn.value)

    def get_by_isbn(self, isbn: str) -> Optional[Book]:
        """
        Find the book with a given ISBN.

        Args:
            isbn: ISBN in any accepted spelling (hyphens/spaces are ignored)

        Returns:
            Book or None
        """
        return self.find_one(BooksByIsbnSpec(normalize_isbn(isbn)))

    def search_by_title(self, title: str) -> List[Book]:
        return self.find(BooksByTitleSpec(title))

    def search_by_author(self, author: str) -> List[Book]:
        return self.find(BooksByAuthorSpec(author))

    def get_by_category(self, category: str) -> List[Book]:
        return self.find(BooksByCategorySpec(category))

    def get_available(self) -> List[Book]:
        """Books with at least one copy on the shelf."""
        return self.find(AvailableBooksSpec())
