"""
Service Interfaces

Abstract base classes for service layer following Dependency Inversion Principle.
This allows for dependency injection and easier testing/mocking.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from dtos.request import (
    AddCopiesRequest,
    CreateBookRequest,
    CreateMemberRequest,
    UpdateBookRequest,
    UpdateMemberRequest,
)
from dtos.response import BookResponse, LoanResponse, MemberResponse


class IBookService(ABC):
    """Interface for catalog operations."""

    @abstractmethod
    def get_book(self, book_id: str) -> BookResponse:
        """
        Load one book.

        Raises:
            NotFoundError: If no book has this id
        """

    @abstractmethod
    def list_books(
        self,
        title: Optional[str] = None,
        author: Optional[str] = None,
        category: Optional[str] = None,
        available: Optional[bool] = None,
    ) -> List[BookResponse]:
        """List the catalog, optionally filtered."""

    @abstractmethod
    def create_book(self, request: CreateBookRequest) -> BookResponse:
        """
        Add a title to the catalog.

        Raises:
            ValidationError: If any field is invalid
            DuplicateError: If the ISBN is already catalogued
        """

    @abstractmethod
    def update_book(self, book_id: str, request: UpdateBookRequest) -> BookResponse:
        """Best-effort patch of descriptive fields."""

    @abstractmethod
    def add_copies(self, book_id: str, request: AddCopiesRequest) -> BookResponse:
        """Increase the number of owned (and available) copies."""

    @abstractmethod
    def delete_book(self, book_id: str) -> None:
        """
        Remove a title from the catalog.

        Raises:
            NotFoundError: If no book has this id
            InvariantViolation: If copies are still on loan
        """


class IMemberService(ABC):
    """Interface for member administration."""

    @abstractmethod
    def get_member(self, member_id: str) -> MemberResponse:
        """Load one member, raising NotFoundError if absent."""

    @abstractmethod
    def list_members(self, name: Optional[str] = None, active: Optional[bool] = None) -> List[MemberResponse]:
        """List members, optionally filtered."""

    @abstractmethod
    def create_member(self, request: CreateMemberRequest) -> MemberResponse:
        """
        Register a member.

        Raises:
            ValidationError: If any field is invalid
            DuplicateError: If the email is already registered
        """

    @abstractmethod
    def update_member(self, member_id: str, request: UpdateMemberRequest) -> MemberResponse:
        """Update contact details."""

    @abstractmethod
    def suspend_member(self, member_id: str) -> MemberResponse:
        """Suspend borrowing privileges."""

    @abstractmethod
    def reactivate_member(self, member_id: str) -> MemberResponse:
        """Restore borrowing privileges."""

    @abstractmethod
    def delete_member(self, member_id: str) -> None:
        """
        Remove a member.

        Raises:
            NotFoundError: If no member has this id
            InvariantViolation: If the member still has active loans
        """


class ILendingService(ABC):
    """Interface for the loan use cases that coordinate books, members and loans."""

    @abstractmethod
    def start_loan(self, book_id: str, member_id: str) -> LoanResponse:
        """
        Lend one copy of a book to a member.

        Raises:
            NotFoundError: If the book or member does not exist
            InvariantViolation: If no copy is available or the member cannot borrow
            ConcurrencyConflictError: If retries are exhausted
        """

    @abstractmethod
    def return_loan(self, loan_id: str) -> LoanResponse:
        """
        Close a loan and put the copy back on the shelf.

        Raises:
            NotFoundError: If the loan, its book or its member does not exist
            InvariantViolation: If the loan is not active
        """

    @abstractmethod
    def renew_loan(self, loan_id: str, additional_days: int = 14) -> LoanResponse:
        """
        Extend the due date of an active, non-overdue loan.

        Raises:
            NotFoundError: If the loan does not exist
            InvariantViolation: If the loan is not active or is overdue
        """

    @abstractmethod
    def get_loan(self, loan_id: str) -> LoanResponse:
        """Load one loan, raising NotFoundError if absent."""

    @abstractmethod
    def list_loans(self) -> List[LoanResponse]:
        """All loans."""

    @abstractmethod
    def list_active_loans(self) -> List[LoanResponse]:
        """Loans still out."""

    @abstractmethod
    def list_overdue_loans(self) -> List[LoanResponse]:
        """Active loans past their due date."""

    @abstractmethod
    def list_loans_by_member(self, member_id: str) -> List[LoanResponse]:
        """Loan history of a member."""

    @abstractmethod
    def list_loans_by_book(self, book_id: str) -> List[LoanResponse]:
        """Loan history of a book."""
