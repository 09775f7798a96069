"""
Member Service

Member administration: registration, contact updates, suspension and removal.
"""

from typing import List, Optional
import logging

from sqlalchemy.orm import Session

from domain.entities import Member
from domain.value_objects import Email, MembershipStatus
from dtos.request import CreateMemberRequest, UpdateMemberRequest
from dtos.response import MemberResponse
from exceptions import DuplicateError, InvariantViolation, NotFoundError
from repositories.loan_repository import LoanRepository
from repositories.member_repository import MemberRepository
from repositories.member_specifications import MembersByNameSpec, MembersByStatusSpec
from repositories.specifications import AllSpecification
from services.interfaces import IMemberService
from services.transaction import TransactionalService
from utils.logging_utils import log_operation

logger = logging.getLogger(__name__)


class MemberService(TransactionalService, IMemberService):
    """Service for member business logic."""

    def __init__(self, db: Session, max_retries: Optional[int] = None):
        super().__init__(db, max_retries)
        self.member_repo = MemberRepository(db)
        self.loan_repo = LoanRepository(db)

    def _load(self, member_id: str) -> Member:
        member = self.member_repo.get_by_id(member_id)
        if member is None:
            raise NotFoundError("Member", member_id)
        return member

    def get_member(self, member_id: str) -> MemberResponse:
        return MemberResponse.from_entity(self._load(member_id))

    def list_members(self, name: Optional[str] = None, active: Optional[bool] = None) -> List[MemberResponse]:
        """
        List members.

        Args:
            name: Case-insensitive name substring
            active: True for Active members only, False for everyone else

        Returns:
            Matching members, oldest first
        """
        spec = AllSpecification()
        if name:
            spec = spec & MembersByNameSpec(name)
        if active is not None:
            is_active = MembersByStatusSpec(MembershipStatus.ACTIVE)
            spec = spec & (is_active if active else ~is_active)

        return [MemberResponse.from_entity(m) for m in self.member_repo.find(spec)]

    def list_active_members(self) -> List[MemberResponse]:
        return [MemberResponse.from_entity(m) for m in self.member_repo.get_active()]

    def search_by_name(self, name: str) -> List[MemberResponse]:
        return [MemberResponse.from_entity(m) for m in self.member_repo.search_by_name(name)]

    @log_operation("create_member")
    def create_member(self, request: CreateMemberRequest) -> MemberResponse:
        email = Email(request.email)

        def work() -> Member:
            if self.member_repo.get_by_email(email.value) is not None:
                raise DuplicateError("member", "email", email.value)

            member = Member.create(request.name, email, request.phone_number)
            return self.member_repo.add(member)

        member = self.run_in_transaction("create_member", work)
        logger.info(f"Registered member {member.id} <{member.email}>")
        return MemberResponse.from_entity(member)

    @log_operation("update_member")
    def update_member(self, member_id: str, request: UpdateMemberRequest) -> MemberResponse:
        def work() -> Member:
            member = self._load(member_id)
            member.update_contact_info(request.phone_number)
            return self.member_repo.update(member)

        return MemberResponse.from_entity(self.run_in_transaction("update_member", work))

    @log_operation("suspend_member")
    def suspend_member(self, member_id: str) -> MemberResponse:
        def work() -> Member:
            member = self._load(member_id)
            member.suspend()
            return self.member_repo.update(member)

        return MemberResponse.from_entity(self.run_in_transaction("suspend_member", work))

    @log_operation("reactivate_member")
    def reactivate_member(self, member_id: str) -> MemberResponse:
        def work() -> Member:
            member = self._load(member_id)
            member.reactivate()
            return self.member_repo.update(member)

        return MemberResponse.from_entity(self.run_in_transaction("reactivate_member", work))

    @log_operation("delete_member")
    def delete_member(self, member_id: str) -> None:
        def work() -> None:
            self._load(member_id)
            active = self.loan_repo.count_active_for_member(member_id)
            if active:
                raise InvariantViolation(
                    "member_has_active_loans",
                    "Member cannot be deleted while holding borrowed books",
                    {"member_id": member_id, "active_loans": active},
                )
            self.member_repo.delete(member_id)

        self.run_in_transaction("delete_member", work)
