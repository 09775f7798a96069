"""
Book-specific Specifications

Concrete specifications for querying the catalog.
"""

from sqlalchemy import func

from domain.entities import Book
from models import BookRecord
from .specifications import Specification


class BooksByIsbnSpec(Specification[Book]):
    """Specification for the book with a given normalized ISBN."""

    def __init__(self, isbn: str):
        """
        Initialize specification.

        Args:
            isbn: Normalized ISBN value
        """
        self.isbn = isbn

    def is_satisfied_by(self, book: Book) -> bool:
        return book.isbn.value == self.isbn

    def to_sql_filter(self):
        return BookRecord.isbn == self.isbn


class BooksByTitleSpec(Specification[Book]):
    """Specification for books whose title contains a term (case-insensitive)."""

    def __init__(self, term: str):
        self.term = term.lower()

    def is_satisfied_by(self, book: Book) -> bool:
        return self.term in book.title.lower()

    def to_sql_filter(self):
        return func.lower(BookRecord.title).contains(self.term, autoescape=True)


class BooksByAuthorSpec(Specification[Book]):
    """Specification for books whose author contains a term (case-insensitive)."""

    def __init__(self, term: str):
        self.term = term.lower()

    def is_satisfied_by(self, book: Book) -> bool:
        return self.term in book.author.lower()

    def to_sql_filter(self):
        return func.lower(BookRecord.author).contains(self.term, autoescape=True)


class BooksByCategorySpec(Specification[Book]):
    """Specification for books in an exact category."""

    def __init__(self, category: str):
        self.category = category

    def is_satisfied_by(self, book: Book) -> bool:
        return book.category == self.category

    def to_sql_filter(self):
        return BookRecord.category == self.category


class AvailableBooksSpec(Specification[Book]):
    """Specification for books with at least one copy on the shelf."""

    def is_satisfied_by(self, book: Book) -> bool:
        return book.can_be_borrowed()

    def to_sql_filter(self):
        return BookRecord.available_copies > 0
