"""
Domain Entities

Entities are business objects with identity and lifecycle.
They are mutable and have a unique identifier that persists through their lifetime.

- Book: catalog entry with copy counts
- Member: borrower with a borrow limit
- Loan: lending of one copy to one member
"""

from .base import Entity, generate_id
from .book import Book
from .loan import Loan
from .member import Member

__all__ = ["Entity", "generate_id", "Book", "Loan", "Member"]
