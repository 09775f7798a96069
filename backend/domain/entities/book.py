"""
Book entity.

A catalog entry and the number of physical copies the library owns.
available_copies always stays within [0, total_copies].
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union

from constants import LendingRules
from domain.entities.base import Entity, is_blank
from domain.value_objects import ISBN
from exceptions import InvariantViolation, ValidationError
from utils.clock import utcnow


def max_publication_year(now: Optional[datetime] = None) -> int:
    """Latest accepted publication year (next calendar year)."""
    return (now if now is not None else utcnow()).year + 1


def is_valid_publication_year(year: Optional[int], now: Optional[datetime] = None) -> bool:
    if year is None or isinstance(year, bool):
        return False
    return LendingRules.MIN_PUBLICATION_YEAR <= year <= max_publication_year(now)


@dataclass(eq=False)
class Book(Entity):
    """Book aggregate root."""

    title: str
    author: str
    isbn: ISBN
    publication_year: int
    category: str
    total_copies: int
    available_copies: int

    @classmethod
    def create(
        cls,
        title: str,
        author: str,
        isbn: Union[ISBN, str],
        publication_year: int,
        category: str,
        total_copies: int,
        now: Optional[datetime] = None,
    ) -> "Book":
        """
        Create a new catalog entry with every copy available.

        Args:
            title: Non-empty title
            author: Non-empty author
            isbn: ISBN value object or raw ISBN string
            publication_year: Between 1000 and next year inclusive
            category: Free text
            total_copies: At least 1

        Raises:
            ValidationError: If any argument is missing or out of range
        """
        if is_blank(title):
            raise ValidationError("Title cannot be empty", {"title": title})
        if is_blank(author):
            raise ValidationError("Author cannot be empty", {"author": author})
        if not is_valid_publication_year(publication_year, now):
            raise ValidationError("Invalid publication year", {"publication_year": publication_year})
        if total_copies is None or total_copies < 1:
            raise ValidationError("Total copies must be at least 1", {"total_copies": total_copies})

        if not isinstance(isbn, ISBN):
            isbn = ISBN(isbn)

        extra = {"created_at": now} if now is not None else {}
        return cls(
            title=title,
            author=author,
            isbn=isbn,
            publication_year=publication_year,
            category=category or "",
            total_copies=total_copies,
            available_copies=total_copies,
            **extra,
        )

    def add_copies(self, quantity: int) -> None:
        """Add newly acquired copies; all of them are immediately available."""
        if quantity is None or quantity < 1:
            raise ValidationError("Quantity must be positive", {"quantity": quantity})

        self.total_copies += quantity
        self.available_copies += quantity
        self.mark_as_updated()

    def can_be_borrowed(self) -> bool:
        return self.available_copies > 0

    def borrow_copy(self) -> None:
        """Take one copy off the shelf."""
        if not self.can_be_borrowed():
            raise InvariantViolation(
                "no_copies_available",
                "No copies available for borrowing",
                {"book_id": self.id},
            )

        self.available_copies -= 1
        self.mark_as_updated()

    def return_copy(self) -> None:
        """Put one copy back on the shelf."""
        if self.available_copies >= self.total_copies:
            raise InvariantViolation(
                "all_copies_returned",
                "All copies are already returned",
                {"book_id": self.id},
            )

        self.available_copies += 1
        self.mark_as_updated()

    def update_details(
        self,
        title: Optional[str] = None,
        author: Optional[str] = None,
        publication_year: Optional[int] = None,
        category: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> None:
        """
        Best-effort patch of descriptive fields.

        Each field is applied only when the supplied value is non-empty (or,
        for the year, in range). Omitted or invalid values are skipped
        rather than rejected.
        """
        if not is_blank(title):
            self.title = title
        if not is_blank(author):
            self.author = author
        if is_valid_publication_year(publication_year, now):
            self.publication_year = publication_year
        if not is_blank(category):
            self.category = category

        self.mark_as_updated(now)
