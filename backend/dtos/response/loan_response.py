"""
Loan Response DTOs
"""

from pydantic import BaseModel, Field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from domain.entities import Loan


class LoanResponse(BaseModel):
    """
    Response DTO for a loan.

    days_overdue and current_late_fee are computed at the time the response
    is built; late_fee is the fee frozen when the book was returned.
    """

    id: str = Field(description="Loan ID")
    book_id: str = Field(description="Borrowed book ID")
    member_id: str = Field(description="Borrowing member ID")
    loan_date: datetime = Field(description="When the loan started")
    due_date: datetime = Field(description="When the book is due back")
    return_date: Optional[datetime] = Field(None, description="When the book came back")
    status: str = Field(description="Active, Returned or Lost")
    late_fee: Optional[Decimal] = Field(None, description="Fee assessed at return time")
    days_overdue: int = Field(description="Whole days past due (0 unless active and overdue)")
    current_late_fee: Decimal = Field(description="Live fee estimate for an active overdue loan")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last modification timestamp")

    @classmethod
    def from_entity(cls, loan: Loan, now: Optional[datetime] = None) -> "LoanResponse":
        return cls(
            id=loan.id,
            book_id=loan.book_id,
            member_id=loan.member_id,
            loan_date=loan.loan_date,
            due_date=loan.due_date,
            return_date=loan.return_date,
            status=loan.status.value,
            late_fee=loan.late_fee,
            days_overdue=loan.days_overdue(now),
            current_late_fee=loan.current_late_fee(now),
            created_at=loan.created_at,
            updated_at=loan.updated_at,
        )
