"""
Loan entity.

State machine for a single lending of one copy of a book to one member:

    Active --return_book()--> Returned
    Active --mark_lost()----> Lost

Returned and Lost are terminal. return_date is set exactly when the loan
is Returned; late_fee is frozen at return time and only when the copy came
back after its due date.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Optional

from constants import LendingRules
from domain.entities.base import Entity, is_blank
from domain.value_objects import LoanStatus
from exceptions import InvariantViolation, ValidationError
from utils.clock import utcnow


def _resolve(now: Optional[datetime]) -> datetime:
    return now if now is not None else utcnow()


@dataclass(eq=False)
class Loan(Entity):
    """Loan aggregate root."""

    book_id: str
    member_id: str
    loan_date: datetime
    due_date: datetime
    return_date: Optional[datetime] = None
    status: LoanStatus = LoanStatus.ACTIVE
    late_fee: Optional[Decimal] = None

    @classmethod
    def create(cls, book_id: str, member_id: str, now: Optional[datetime] = None) -> "Loan":
        """
        Open a new loan due LOAN_DURATION_DAYS from now.

        Raises:
            ValidationError: If either id is empty
        """
        if is_blank(book_id):
            raise ValidationError("Book ID cannot be empty", {"book_id": book_id})
        if is_blank(member_id):
            raise ValidationError("Member ID cannot be empty", {"member_id": member_id})

        now = _resolve(now)
        return cls(
            book_id=book_id,
            member_id=member_id,
            loan_date=now,
            due_date=now + timedelta(days=LendingRules.LOAN_DURATION_DAYS),
            created_at=now,
        )

    def is_overdue(self, now: Optional[datetime] = None) -> bool:
        return self.status == LoanStatus.ACTIVE and _resolve(now) > self.due_date

    def days_overdue(self, now: Optional[datetime] = None) -> int:
        """Whole days past the due date, or 0 when not overdue."""
        now = _resolve(now)
        if not self.is_overdue(now):
            return 0
        return (now - self.due_date).days

    def current_late_fee(self, now: Optional[datetime] = None) -> Decimal:
        """Live fee estimate for an active overdue loan (distinct from the frozen late_fee)."""
        now = _resolve(now)
        if not self.is_overdue(now):
            return Decimal("0.00")
        return self.days_overdue(now) * LendingRules.LATE_FEE_PER_DAY

    def return_book(self, now: Optional[datetime] = None) -> None:
        """
        Close the loan.

        The fee is computed from the instant of return, not from any later
        recomputation, so a loan returned late keeps the same fee forever.

        Raises:
            InvariantViolation: If the loan is not Active
        """
        if not self.status.can_transition_to(LoanStatus.RETURNED):
            raise InvariantViolation(
                "loan_not_active",
                "Loan is not active",
                {"loan_id": self.id, "status": self.status.value},
            )

        returned_at = _resolve(now)
        if returned_at > self.due_date:
            days = (returned_at - self.due_date).days
            self.late_fee = days * LendingRules.LATE_FEE_PER_DAY

        self.return_date = returned_at
        self.status = LoanStatus.RETURNED
        self.mark_as_updated(returned_at)

    def renew(
        self,
        additional_days: int = LendingRules.LOAN_DURATION_DAYS,
        now: Optional[datetime] = None,
    ) -> None:
        """
        Push the due date back by additional_days.

        Raises:
            ValidationError: If additional_days is less than 1
            InvariantViolation: If the loan is not Active or is already overdue
        """
        if additional_days is None or additional_days < 1:
            raise ValidationError(
                "Additional days must be at least 1", {"additional_days": additional_days}
            )
        if self.status.is_terminal():
            raise InvariantViolation(
                "loan_not_active",
                "Only active loans can be renewed",
                {"loan_id": self.id, "status": self.status.value},
            )

        now = _resolve(now)
        if self.is_overdue(now):
            raise InvariantViolation(
                "loan_overdue",
                "Overdue loans cannot be renewed",
                {"loan_id": self.id, "days_overdue": self.days_overdue(now)},
            )

        self.due_date = self.due_date + timedelta(days=additional_days)
        self.mark_as_updated(now)

    def mark_lost(self) -> None:
        """
        Flag the copy as lost.

        Marking an already-lost loan again is a no-op.

        Raises:
            InvariantViolation: If the loan was already returned
        """
        if not self.status.can_transition_to(LoanStatus.LOST):
            raise InvariantViolation(
                "loan_returned",
                "Returned books cannot be marked as lost",
                {"loan_id": self.id},
            )
        if self.status == LoanStatus.LOST:
            return

        self.status = LoanStatus.LOST
        self.mark_as_updated()
