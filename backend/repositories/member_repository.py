"""
Member repository for patron data access operations.
"""

from typing import Any, Dict, List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from domain.entities import Member
from domain.value_objects import Email, MembershipStatus
from exceptions import ApplicationError, DuplicateError
from models import MemberRecord
from .base_repository import BaseRepository
from .member_specifications import MembersByEmailSpec, MembersByNameSpec, MembersByStatusSpec


class MemberRepository(BaseRepository[Member, MemberRecord]):
    """Repository for Member aggregate operations."""

    entity_name = "Member"

    def __init__(self, db: Session):
        super().__init__(db, MemberRecord)

    def _to_entity(self, record: MemberRecord) -> Member:
        return Member(
            id=record.id,
            name=record.name,
            email=Email(record.email),
            phone_number=record.phone_number,
            membership_date=record.membership_date,
            status=MembershipStatus.from_string(record.status),
            borrowed_book_ids=tuple(record.borrowed_book_ids or ()),
            created_at=record.created_at,
            updated_at=record.updated_at,
            version=record.version,
        )

    def _to_columns(self, member: Member) -> Dict[str, Any]:
        return {
            "name": member.name,
            "email": member.email.value,
            "phone_number": member.phone_number,
            "membership_date": member.membership_date,
            "status": member.status.value,
            "borrowed_book_ids": list(member.borrowed_book_ids),
            "created_at": member.created_at,
            "updated_at": member.updated_at,
        }

    def _integrity_error(self, member: Member, exc: IntegrityError) -> ApplicationError:
        return DuplicateError("member", "email", member.email.value)

    def get_by_email(self, email: str) -> Optional[Member]:
        """
        Find the member registered with an email address.

        Args:
            email: Address in any letter case

        Returns:
            Member or None
        """
        return self.find_one(MembersByEmailSpec(email))

    def get_active(self) -> List[Member]:
        return self.find(MembersByStatusSpec(MembershipStatus.ACTIVE))

    def search_by_name(self, name: str) -> List[Member]:
        return self.find(MembersByNameSpec(name))
