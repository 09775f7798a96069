"""
Book Request DTOs
"""

from pydantic import BaseModel, Field
from typing import Optional


class CreateBookRequest(BaseModel):
    """Request DTO for adding a title to the catalog."""

    title: str = Field(description="Book title")
    author: str = Field(description="Author name")
    isbn: str = Field(description="ISBN-10 or ISBN-13, hyphens and spaces allowed")
    publication_year: int = Field(description="Year of publication")
    category: str = Field("", description="Free-text category")
    total_copies: int = Field(1, description="Number of copies owned")

    class Config:
        """Pydantic configuration."""
        json_schema_extra = {
            "example": {
                "title": "Clean Code",
                "author": "Robert C. Martin",
                "isbn": "978-0-13-235088-4",
                "publication_year": 2008,
                "category": "Software",
                "total_copies": 3
            }
        }


class UpdateBookRequest(BaseModel):
    """
    Request DTO for patching book details.

    Omitted, empty or out-of-range fields are left unchanged rather than rejected.
    """

    title: Optional[str] = Field(None, description="New title")
    author: Optional[str] = Field(None, description="New author")
    publication_year: Optional[int] = Field(None, description="New publication year")
    category: Optional[str] = Field(None, description="New category")


class AddCopiesRequest(BaseModel):
    """Request DTO for adding copies of an existing book."""

    quantity: int = Field(description="Number of copies to add (at least 1)")
