"""
Loan-specific Specifications

Example:
    # Active loans of one member that are past due
    spec = LoansByMemberSpec(member_id) & OverdueLoansSpec(now)
    loans = loan_repo.find(spec)
"""

from datetime import datetime

from sqlalchemy import and_

from domain.entities import Loan
from domain.value_objects import LoanStatus
from models import LoanRecord
from .specifications import Specification


class LoansByStatusSpec(Specification[Loan]):
    """Specification for loans in a specific status."""

    def __init__(self, status: LoanStatus):
        self.status = status

    def is_satisfied_by(self, loan: Loan) -> bool:
        return loan.status == self.status

    def to_sql_filter(self):
        return LoanRecord.status == self.status.value


class ActiveLoansSpec(LoansByStatusSpec):
    """Specification for loans still out."""

    def __init__(self):
        super().__init__(LoanStatus.ACTIVE)


class OverdueLoansSpec(Specification[Loan]):
    """Specification for active loans whose due date has passed at a given instant."""

    def __init__(self, now: datetime):
        """
        Initialize specification.

        Args:
            now: Reference instant (naive UTC)
        """
        self.now = now

    def is_satisfied_by(self, loan: Loan) -> bool:
        return loan.is_overdue(self.now)

    def to_sql_filter(self):
        return and_(
            LoanRecord.status == LoanStatus.ACTIVE.value,
            LoanRecord.due_date < self.now,
        )


class LoansByMemberSpec(Specification[Loan]):
    """Specification for loans made to a specific member."""

    def __init__(self, member_id: str):
        self.member_id = member_id

    def is_satisfied_by(self, loan: Loan) -> bool:
        return loan.member_id == self.member_id

    def to_sql_filter(self):
        return LoanRecord.member_id == self.member_id


class LoansByBookSpec(Specification[Loan]):
    """Specification for loans of a specific book."""

    def __init__(self, book_id: str):
        self.book_id = book_id

    def is_satisfied_by(self, loan: Loan) -> bool:
        return loan.book_id == self.book_id

    def to_sql_filter(self):
        return LoanRecord.book_id == self.book_id
