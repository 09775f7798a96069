"""
Member entity.

A library patron. borrowed_book_ids mirrors the member's active loans and
never holds the same book twice or more than MAX_BORROWED_BOOKS entries.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple, Union

from constants import LendingRules
from domain.entities.base import Entity, is_blank
from domain.value_objects import Email, MembershipStatus
from exceptions import InvariantViolation, ValidationError
from utils.clock import utcnow


@dataclass(eq=False)
class Member(Entity):
    """Member aggregate root."""

    name: str
    email: Email
    phone_number: str
    membership_date: datetime
    status: MembershipStatus = MembershipStatus.ACTIVE
    borrowed_book_ids: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def create(
        cls,
        name: str,
        email: Union[Email, str],
        phone_number: str,
        now: Optional[datetime] = None,
    ) -> "Member":
        """
        Register a new active member with nothing borrowed.

        Raises:
            ValidationError: If name or phone number is empty, or the email is malformed
        """
        if is_blank(name):
            raise ValidationError("Name cannot be empty", {"name": name})
        if is_blank(phone_number):
            raise ValidationError("Phone number cannot be empty", {"phone_number": phone_number})

        if not isinstance(email, Email):
            email = Email(email)

        now = now if now is not None else utcnow()
        return cls(
            name=name,
            email=email,
            phone_number=phone_number,
            membership_date=now,
            created_at=now,
        )

    @property
    def borrowed_books_count(self) -> int:
        return len(self.borrowed_book_ids)

    def can_borrow_books(self) -> bool:
        return (
            self.status == MembershipStatus.ACTIVE
            and len(self.borrowed_book_ids) < LendingRules.MAX_BORROWED_BOOKS
        )

    def ensure_can_borrow(self) -> None:
        """
        Raise the specific reason can_borrow_books() is False, if any.

        Raises:
            InvariantViolation: member_not_active or borrow_limit_reached
        """
        if self.status != MembershipStatus.ACTIVE:
            raise InvariantViolation(
                "member_not_active",
                f"Member cannot borrow books while {self.status.value}",
                {"member_id": self.id, "status": self.status.value},
            )
        if len(self.borrowed_book_ids) >= LendingRules.MAX_BORROWED_BOOKS:
            raise InvariantViolation(
                "borrow_limit_reached",
                "Member cannot borrow more books",
                {"member_id": self.id, "limit": LendingRules.MAX_BORROWED_BOOKS},
            )

    def borrow_book(self, book_id: str) -> None:
        """Record that the member now holds a copy of book_id."""
        self.ensure_can_borrow()
        if book_id in self.borrowed_book_ids:
            raise InvariantViolation(
                "book_already_borrowed",
                "Book already borrowed by this member",
                {"member_id": self.id, "book_id": book_id},
            )

        self.borrowed_book_ids = self.borrowed_book_ids + (book_id,)
        self.mark_as_updated()

    def return_book(self, book_id: str) -> None:
        """Remove book_id from the member's held set."""
        if book_id not in self.borrowed_book_ids:
            raise InvariantViolation(
                "book_not_borrowed",
                "Book was not borrowed by this member",
                {"member_id": self.id, "book_id": book_id},
            )

        self.borrowed_book_ids = tuple(b for b in self.borrowed_book_ids if b != book_id)
        self.mark_as_updated()

    def suspend(self) -> None:
        self.status = MembershipStatus.SUSPENDED
        self.mark_as_updated()

    def reactivate(self) -> None:
        self.status = MembershipStatus.ACTIVE
        self.mark_as_updated()

    def update_contact_info(self, phone_number: Optional[str]) -> None:
        """Replace the phone number; blank input is ignored."""
        if not is_blank(phone_number):
            self.phone_number = phone_number
            self.mark_as_updated()
