"""
Member-specific Specifications
"""

from sqlalchemy import func

from domain.entities import Member
from domain.value_objects import MembershipStatus
from models import MemberRecord
from .specifications import Specification


class MembersByEmailSpec(Specification[Member]):
    """Specification for the member with a given (lower-cased) email."""

    def __init__(self, email: str):
        self.email = email.lower()

    def is_satisfied_by(self, member: Member) -> bool:
        return member.email.value == self.email

    def to_sql_filter(self):
        return MemberRecord.email == self.email


class MembersByStatusSpec(Specification[Member]):
    """Specification for members in a given standing."""

    def __init__(self, status: MembershipStatus):
        self.status = status

    def is_satisfied_by(self, member: Member) -> bool:
        return member.status == self.status

    def to_sql_filter(self):
        return MemberRecord.status == self.status.value


class MembersByNameSpec(Specification[Member]):
    """Specification for members whose name contains a term (case-insensitive)."""

    def __init__(self, term: str):
        self.term = term.lower()

    def is_satisfied_by(self, member: Member) -> bool:
        return self.term in member.name.lower()

    def to_sql_filter(self):
        return func.lower(MemberRecord.name).contains(self.term, autoescape=True)
