"""
Members API endpoints
"""
from fastapi import APIRouter, Depends, Query, Response
from typing import List, Optional

from constants import HTTPStatus
from dependencies import get_member_service
from dtos.request import CreateMemberRequest, UpdateMemberRequest
from dtos.response import MemberResponse
from services.interfaces import IMemberService
from utils.error_handlers import handle_api_errors

router = APIRouter()


@router.get("/members", response_model=List[MemberResponse])
@handle_api_errors("List members")
def list_members(
    name: Optional[str] = Query(None, description="Name contains (case-insensitive)"),
    active: Optional[bool] = Query(None, description="Only Active (true) or non-Active (false) members"),
    service: IMemberService = Depends(get_member_service),
):
    """List members with optional filters."""
    return service.list_members(name=name, active=active)


@router.get("/members/{member_id}", response_model=MemberResponse)
@handle_api_errors("Get member")
def get_member(member_id: str, service: IMemberService = Depends(get_member_service)):
    """Get details for a specific member"""
    return service.get_member(member_id)


@router.post("/members", response_model=MemberResponse, status_code=HTTPStatus.CREATED)
@handle_api_errors("Create member")
def create_member(request: CreateMemberRequest, service: IMemberService = Depends(get_member_service)):
    """
    Register a member.

    Returns 400 for invalid fields and 409 if the email is already registered.
    """
    return service.create_member(request)


@router.put("/members/{member_id}", response_model=MemberResponse)
@handle_api_errors("Update member")
def update_member(member_id: str, request: UpdateMemberRequest, service: IMemberService = Depends(get_member_service)):
    """Update contact details."""
    return service.update_member(member_id, request)


@router.post("/members/{member_id}/suspend", response_model=MemberResponse)
@handle_api_errors("Suspend member")
def suspend_member(member_id: str, service: IMemberService = Depends(get_member_service)):
    return service.suspend_member(member_id)


@router.post("/members/{member_id}/reactivate", response_model=MemberResponse)
@handle_api_errors("Reactivate member")
def reactivate_member(member_id: str, service: IMemberService = Depends(get_member_service)):
    return service.reactivate_member(member_id)


@router.delete("/members/{member_id}", status_code=HTTPStatus.NO_CONTENT)
@handle_api_errors("Delete member")
def delete_member(member_id: str, service: IMemberService = Depends(get_member_service)):
    """Remove a member. Refused with 409 while they hold borrowed books."""
    service.delete_member(member_id)
    return Response(status_code=HTTPStatus.NO_CONTENT)
