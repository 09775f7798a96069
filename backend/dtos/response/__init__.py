"""
Response DTOs

DTOs for outgoing API responses. These hide the entity internals (for
example a member's raw borrowed id list) and add computed fields such as
a loan's days_overdue.
"""

from .book_response import BookResponse
from .loan_response import LoanResponse
from .member_response import MemberResponse

__all__ = ["BookResponse", "LoanResponse", "MemberResponse"]
