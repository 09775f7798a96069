"""
Member Response DTOs
"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional

from domain.entities import Member


class MemberResponse(BaseModel):
    """
    Response DTO for a member.

    Exposes how many books the member holds, not which ones.
    """

    id: str = Field(description="Member ID")
    name: str = Field(description="Full name")
    email: str = Field(description="Lower-cased email address")
    phone_number: str = Field(description="Phone number")
    membership_date: datetime = Field(description="Registration timestamp")
    status: str = Field(description="Active, Suspended or Expired")
    borrowed_books_count: int = Field(description="Number of books currently held")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last modification timestamp")

    @classmethod
    def from_entity(cls, member: Member) -> "MemberResponse":
        return cls(
            id=member.id,
            name=member.name,
            email=member.email.value,
            phone_number=member.phone_number,
            membership_date=member.membership_date,
            status=member.status.value,
            borrowed_books_count=member.borrowed_books_count,
            created_at=member.created_at,
            updated_at=member.updated_at,
        )
