"""
MembershipStatus Value Object
"""

from enum import Enum


class MembershipStatus(str, Enum):
    """Membership standing. Only Active members may borrow."""

    ACTIVE = "Active"
    SUSPENDED = "Suspended"
    EXPIRED = "Expired"

    @classmethod
    def from_string(cls, value: str) -> "MembershipStatus":
        """Create MembershipStatus from string value (case-insensitive)."""
        for member in cls:
            if member.value.lower() == str(value).lower():
                return member
        raise ValueError(f"Invalid membership status: {value}")
