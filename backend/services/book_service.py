"""
Book Service

Catalog use cases: searching, adding titles and copies, patching details
and removing titles.
"""

from typing import List, Optional
import logging

from sqlalchemy.orm import Session

from domain.entities import Book
from domain.value_objects import ISBN
from dtos.request import AddCopiesRequest, CreateBookRequest, UpdateBookRequest
from dtos.response import BookResponse
from exceptions import DuplicateError, InvariantViolation, NotFoundError
from repositories.book_repository import BookRepository
from repositories.book_specifications import (
    AvailableBooksSpec,
    BooksByAuthorSpec,
    BooksByCategorySpec,
    BooksByTitleSpec,
)
from repositories.loan_repository import LoanRepository
from repositories.specifications import AllSpecification
from services.interfaces import IBookService
from services.transaction import TransactionalService
from utils.logging_utils import log_operation

logger = logging.getLogger(__name__)


class BookService(TransactionalService, IBookService):
    """Service for catalog business logic."""

    def __init__(self, db: Session, max_retries: Optional[int] = None):
        super().__init__(db, max_retries)
        self.book_repo = BookRepository(db)
        self.loan_repo = LoanRepository(db)

    def _load(self, book_id: str) -> Book:
        book = self.book_repo.get_by_id(book_id)
        if book is None:
            raise NotFoundError("Book", book_id)
        return book

    def get_book(self, book_id: str) -> BookResponse:
        return BookResponse.from_entity(self._load(book_id))

    def list_books(
        self,
        title: Optional[str] = None,
        author: Optional[str] = None,
        category: Optional[str] = None,
        available: Optional[bool] = None,
    ) -> List[BookResponse]:
        """
        List the catalog.

        Args:
            title: Case-insensitive title substring
            author: Case-insensitive author substring
            category: Exact category
            available: True for books with a free copy, False for fully lent books

        Returns:
            Matching books, oldest first
        """
        spec = AllSpecification()
        if title:
            spec = spec & BooksByTitleSpec(title)
        if author:
            spec = spec & BooksByAuthorSpec(author)
        if category:
            spec = spec & BooksByCategorySpec(category)
        if available is not None:
            spec = spec & (AvailableBooksSpec() if available else ~AvailableBooksSpec())

        return [BookResponse.from_entity(b) for b in self.book_repo.find(spec)]

    def search_by_title(self, title: str) -> List[BookResponse]:
        return [BookResponse.from_entity(b) for b in self.book_repo.search_by_title(title)]

    def search_by_author(self, author: str) -> List[BookResponse]:
        return [BookResponse.from_entity(b) for b in self.book_repo.search_by_author(author)]

    def list_by_category(self, category: str) -> List[BookResponse]:
        return [BookResponse.from_entity(b) for b in self.book_repo.get_by_category(category)]

    def list_available(self) -> List[BookResponse]:
        return [BookResponse.from_entity(b) for b in self.book_repo.get_available()]

    @log_operation("create_book")
    def create_book(self, request: CreateBookRequest) -> BookResponse:
        # Validate the ISBN first so the uniqueness lookup uses the canonical value
        isbn = ISBN(request.isbn)

        def work() -> Book:
            if self.book_repo.get_by_isbn(isbn.value) is not None:
                raise DuplicateError("book", "isbn", isbn.value)

            book = Book.create(
                title=request.title,
                author=request.author,
                isbn=isbn,
                publication_year=request.publication_year,
                category=request.category,
                total_copies=request.total_copies,
            )
            return self.book_repo.add(book)

        book = self.run_in_transaction("create_book", work)
        logger.info(f"Catalogued book {book.id} ({book.isbn}) with {book.total_copies} copies")
        return BookResponse.from_entity(book)

    @log_operation("update_book")
    def update_book(self, book_id: str, request: UpdateBookRequest) -> BookResponse:
        def work() -> Book:
            book = self._load(book_id)
            book.update_details(
                title=request.title,
                author=request.author,
                publication_year=request.publication_year,
                category=request.category,
            )
            return self.book_repo.update(book)

        return BookResponse.from_entity(self.run_in_transaction("update_book", work))

    @log_operation("add_copies")
    def add_copies(self, book_id: str, request: AddCopiesRequest) -> BookResponse:
        def work() -> Book:
            book = self._load(book_id)
            book.add_copies(request.quantity)
            return self.book_repo.update(book)

        return BookResponse.from_entity(self.run_in_transaction("add_copies", work))

    @log_operation("delete_book")
    def delete_book(self, book_id: str) -> None:
        def work() -> None:
            self._load(book_id)
            active = self.loan_repo.count_active_for_book(book_id)
            if active:
                raise InvariantViolation(
                    "book_has_active_loans",
                    "Book cannot be deleted while copies are on loan",
                    {"book_id": book_id, "active_loans": active},
                )
            self.book_repo.delete(book_id)

        self.run_in_transaction("delete_book", work)
