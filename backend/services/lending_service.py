"""
Lending Service

Orchestrates the loan use cases that span several aggregates:

- start_loan:  Book.borrow_copy + Member.borrow_book + new Loan
- return_loan: Loan.return_book + Book.return_copy + Member.return_book
- renew_loan:  Loan.renew only

Concurrency contract: each use case is one database transaction, so its
writes are applied together or not at all. Every aggregate write is
version-checked; if another request changed the same book, member or loan
in between, the use case is rolled back and re-run from a fresh read (see
TransactionalService). Two concurrent start_loan calls for the last copy
therefore cannot both succeed. Domain failures are never retried.
"""

from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from constants import LendingRules
from domain.entities import Book, Loan, Member
from dtos.response import LoanResponse
from exceptions import InvariantViolation, NotFoundError
from repositories.book_repository import BookRepository
from repositories.loan_repository import LoanRepository
from repositories.member_repository import MemberRepository
from services.interfaces import ILendingService
from services.transaction import TransactionalService
from utils.clock import utcnow
from utils.logging_utils import StructuredLogger, log_operation

logger = StructuredLogger(__name__)


class LendingService(TransactionalService, ILendingService):
    """Service for loan business logic."""

    def __init__(self, db: Session, max_retries: Optional[int] = None):
        """
        Initialize LendingService.

        Args:
            db: Database session
            max_retries: Extra attempts after a concurrency conflict
        """
        super().__init__(db, max_retries)
        self.book_repo = BookRepository(db)
        self.member_repo = MemberRepository(db)
        self.loan_repo = LoanRepository(db)

    # Loading helpers

    def _load_book(self, book_id: str) -> Book:
        book = self.book_repo.get_by_id(book_id)
        if book is None:
            raise NotFoundError("Book", book_id)
        return book

    def _load_member(self, member_id: str) -> Member:
        member = self.member_repo.get_by_id(member_id)
        if member is None:
            raise NotFoundError("Member", member_id)
        return member

    def _load_loan(self, loan_id: str) -> Loan:
        loan = self.loan_repo.get_by_id(loan_id)
        if loan is None:
            raise NotFoundError("Loan", loan_id)
        return loan

    # Use cases

    @log_operation("start_loan")
    def start_loan(self, book_id: str, member_id: str) -> LoanResponse:
        def work() -> Loan:
            book = self._load_book(book_id)
            member = self._load_member(member_id)

            if not book.can_be_borrowed():
                raise InvariantViolation(
                    "no_copies_available",
                    "No copies available for borrowing",
                    {"book_id": book.id},
                )
            if not member.can_borrow_books():
                member.ensure_can_borrow()

            loan = Loan.create(book_id, member_id)
            book.borrow_copy()
            member.borrow_book(book_id)

            self.loan_repo.add(loan)
            self.book_repo.update(book)
            self.member_repo.update(member)
            return loan

        loan = self.run_in_transaction("start_loan", work)
        logger.info("Loan started", extra={
            "loan_id": loan.id,
            "book_id": loan.book_id,
            "member_id": loan.member_id,
            "due_date": loan.due_date.isoformat(),
        })
        return LoanResponse.from_entity(loan)

    @log_operation("return_loan")
    def return_loan(self, loan_id: str) -> LoanResponse:
        def work() -> Tuple[Loan, Book, Member]:
            loan = self._load_loan(loan_id)
            book = self._load_book(loan.book_id)
            member = self._load_member(loan.member_id)

            loan.return_book()
            book.return_copy()
            member.return_book(loan.book_id)

            self.loan_repo.update(loan)
            self.book_repo.update(book)
            self.member_repo.update(member)
            return loan, book, member

        loan, book, _ = self.run_in_transaction("return_loan", work)
        logger.info("Loan returned", extra={
            "loan_id": loan.id,
            "book_id": loan.book_id,
            "member_id": loan.member_id,
            "late_fee": str(loan.late_fee) if loan.late_fee is not None else None,
            "available_copies": book.available_copies,
        })
        return LoanResponse.from_entity(loan)

    @log_operation("renew_loan")
    def renew_loan(self, loan_id: str, additional_days: int = LendingRules.LOAN_DURATION_DAYS) -> LoanResponse:
        def work() -> Loan:
            loan = self._load_loan(loan_id)
            loan.renew(additional_days)
            return self.loan_repo.update(loan)

        loan = self.run_in_transaction("renew_loan", work)
        logger.info("Loan renewed", extra={
            "loan_id": loan.id,
            "additional_days": additional_days,
            "due_date": loan.due_date.isoformat(),
        })
        return LoanResponse.from_entity(loan)

    # Queries

    def get_loan(self, loan_id: str) -> LoanResponse:
        return LoanResponse.from_entity(self._load_loan(loan_id))

    def _respond(self, loans: List[Loan]) -> List[LoanResponse]:
        now = utcnow()
        return [LoanResponse.from_entity(loan, now) for loan in loans]

    def list_loans(self) -> List[LoanResponse]:
        return self._respond(self.loan_repo.get_all())

    def list_active_loans(self) -> List[LoanResponse]:
        return self._respond(self.loan_repo.get_active())

    def list_overdue_loans(self) -> List[LoanResponse]:
        return self._respond(self.loan_repo.get_overdue())

    def list_loans_by_member(self, member_id: str) -> List[LoanResponse]:
        return self._respond(self.loan_repo.get_by_member(member_id))

    def list_loans_by_book(self, book_id: str) -> List[LoanResponse]:
        return self._respond(self.loan_repo.get_by_book(book_id))
