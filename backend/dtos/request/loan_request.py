"""
Loan Request DTOs
"""

from pydantic import BaseModel, Field


class CreateLoanRequest(BaseModel):
    """Request DTO for lending a copy of a book to a member."""

    book_id: str = Field(description="ID of the book to lend")
    member_id: str = Field(description="ID of the borrowing member")
