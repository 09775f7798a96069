"""
Request DTOs

DTOs for incoming API requests. They only check JSON types; range and
format rules are enforced by the domain so that the same ValidationError
is raised whichever caller reaches it.
"""

from .book_request import AddCopiesRequest, CreateBookRequest, UpdateBookRequest
from .loan_request import CreateLoanRequest
from .member_request import CreateMemberRequest, UpdateMemberRequest

__all__ = [
    "AddCopiesRequest",
    "CreateBookRequest",
    "UpdateBookRequest",
    "CreateLoanRequest",
    "CreateMemberRequest",
    "UpdateMemberRequest",
]
