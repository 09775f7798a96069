"""
Domain Value Objects

Value objects are immutable types that represent descriptive aspects of the domain.
They have no conceptual identity and are compared by their values, not by ID.

Examples:
- ISBN: Normalized, checksum-validated book identifier
- Email: Lower-cased, shape-validated member address
- LoanStatus / MembershipStatus: Immutable enum-like lifecycle states
"""

from .email import Email
from .isbn import ISBN
from .loan_status import LoanStatus
from .membership_status import MembershipStatus

__all__ = ["Email", "ISBN", "LoanStatus", "MembershipStatus"]
