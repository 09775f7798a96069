"""
Repository layer for data access abstraction.

This package contains one repository per aggregate. Each encapsulates the
database queries for its aggregate and maps records to domain entities.
"""

from .base_repository import BaseRepository
from .book_repository import BookRepository
from .member_repository import MemberRepository
from .loan_repository import LoanRepository

__all__ = [
    "BaseRepository",
    "BookRepository",
    "MemberRepository",
    "LoanRepository",
]
