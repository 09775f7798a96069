"""
Member Request DTOs
"""

from pydantic import BaseModel, Field
from typing import Optional


class CreateMemberRequest(BaseModel):
    """Request DTO for registering a member."""

    name: str = Field(description="Full name")
    email: str = Field(description="Email address (unique, case-insensitive)")
    phone_number: str = Field(description="Contact phone number")

    class Config:
        """Pydantic configuration."""
        json_schema_extra = {
            "example": {
                "name": "Ada Lovelace",
                "email": "ada@example.com",
                "phone_number": "+44 20 7946 0000"
            }
        }


class UpdateMemberRequest(BaseModel):
    """Request DTO for updating contact details. A blank phone number is ignored."""

    phone_number: Optional[str] = Field(None, description="New phone number")
