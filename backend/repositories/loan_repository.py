"""
Loan repository for lending data access operations.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session

from domain.entities import Loan
from domain.value_objects import LoanStatus
from models import LoanRecord
from utils.clock import utcnow
from .base_repository import BaseRepository
from .loan_specifications import (
    ActiveLoansSpec,
    LoansByBookSpec,
    LoansByMemberSpec,
    OverdueLoansSpec,
)


class LoanRepository(BaseRepository[Loan, LoanRecord]):
    """Repository for Loan aggregate operations."""

    entity_name = "Loan"

    def __init__(self, db: Session):
        super().__init__(db, LoanRecord)

    def _to_entity(self, record: LoanRecord) -> Loan:
        return Loan(
            id=record.id,
            book_id=record.book_id,
            member_id=record.member_id,
            loan_date=record.loan_date,
            due_date=record.due_date,
            return_date=record.return_date,
            status=LoanStatus.from_string(record.status),
            late_fee=Decimal(record.late_fee) if record.late_fee is not None else None,
            created_at=record.created_at,
            updated_at=record.updated_at,
            version=record.version,
        )

    def _to_columns(self, loan: Loan) -> Dict[str, Any]:
        return {
            "book_id": loan.book_id,
            "member_id": loan.member_id,
            "loan_date": loan.loan_date,
            "due_date": loan.due_date,
            "return_date": loan.return_date,
            "status": loan.status.value,
            "late_fee": loan.late_fee,
            "created_at": loan.created_at,
            "updated_at": loan.updated_at,
        }

    def get_active(self) -> List[Loan]:
        return self.find(ActiveLoansSpec())

    def get_overdue(self, now: Optional[datetime] = None) -> List[Loan]:
        """
        Active loans past their due date.

        Args:
            now: Reference instant, defaults to the current UTC time

        Returns:
            List of overdue loans
        """
        return self.find(OverdueLoansSpec(now if now is not None else utcnow()))

    def get_by_member(self, member_id: str) -> List[Loan]:
        return self.find(LoansByMemberSpec(member_id))

    def get_by_book(self, book_id: str) -> List[Loan]:
        return self.find(LoansByBookSpec(book_id))

    def count_active_for_book(self, book_id: str) -> int:
        return self.count(ActiveLoansSpec() & LoansByBookSpec(book_id))

    def count_active_for_member(self, member_id: str) -> int:
        return self.count(ActiveLoansSpec() & LoansByMemberSpec(member_id))
