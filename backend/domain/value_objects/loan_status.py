"""
LoanStatus Value Object

Immutable representation of a loan's position in the lending lifecycle.
"""

from enum import Enum


class LoanStatus(str, Enum):
    """
    Immutable loan state enum.

    Active is the only initial state; Returned and Lost are terminal.
    """

    ACTIVE = "Active"
    RETURNED = "Returned"
    LOST = "Lost"

    def is_terminal(self) -> bool:
        """Check if this state is terminal (no further transitions)."""
        return self in {LoanStatus.RETURNED, LoanStatus.LOST}

    def can_transition_to(self, new_state: "LoanStatus") -> bool:
        """
        Check if transition to new state is valid.

        Args:
            new_state: Target state

        Returns:
            True if transition is allowed
        """
        valid_transitions = {
            LoanStatus.ACTIVE: {LoanStatus.RETURNED, LoanStatus.LOST},
            LoanStatus.LOST: {LoanStatus.LOST},  # re-marking a lost loan is a no-op
            LoanStatus.RETURNED: set(),
        }

        return new_state in valid_transitions.get(self, set())

    @classmethod
    def from_string(cls, value: str) -> "LoanStatus":
        """
        Create LoanStatus from string value.

        Args:
            value: String representation (case-insensitive)

        Returns:
            LoanStatus instance

        Raises:
            ValueError: If value is not a valid status
        """
        for member in cls:
            if member.value.lower() == str(value).lower():
                return member
        raise ValueError(f"Invalid loan status: {value}")
