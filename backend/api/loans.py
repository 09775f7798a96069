"""
Loans API endpoints
"""
from fastapi import APIRouter, Depends, Query
from typing import List

from constants import HTTPStatus, LendingRules
from dependencies import get_lending_service
from dtos.request import CreateLoanRequest
from dtos.response import LoanResponse
from services.interfaces import ILendingService
from utils.error_handlers import handle_api_errors

router = APIRouter()


@router.get("/loans", response_model=List[LoanResponse])
@handle_api_errors("List loans")
def list_loans(service: ILendingService = Depends(get_lending_service)):
    return service.list_loans()


@router.get("/loans/active", response_model=List[LoanResponse])
@handle_api_errors("List active loans")
def list_active_loans(service: ILendingService = Depends(get_lending_service)):
    return service.list_active_loans()


@router.get("/loans/overdue", response_model=List[LoanResponse])
@handle_api_errors("List overdue loans")
def list_overdue_loans(service: ILendingService = Depends(get_lending_service)):
    """Active loans past their due date, with live days_overdue and fee estimate."""
    return service.list_overdue_loans()


@router.get("/loans/member/{member_id}", response_model=List[LoanResponse])
@handle_api_errors("List member loans")
def list_loans_by_member(member_id: str, service: ILendingService = Depends(get_lending_service)):
    return service.list_loans_by_member(member_id)


@router.get("/loans/book/{book_id}", response_model=List[LoanResponse])
@handle_api_errors("List book loans")
def list_loans_by_book(book_id: str, service: ILendingService = Depends(get_lending_service)):
    return service.list_loans_by_book(book_id)


@router.get("/loans/{loan_id}", response_model=LoanResponse)
@handle_api_errors("Get loan")
def get_loan(loan_id: str, service: ILendingService = Depends(get_lending_service)):
    return service.get_loan(loan_id)


@router.post("/loans", response_model=LoanResponse, status_code=HTTPStatus.CREATED)
@handle_api_errors("Start loan")
def start_loan(request: CreateLoanRequest, service: ILendingService = Depends(get_lending_service)):
    """
    Lend one copy of a book to a member.

    Returns 404 if the book or member is unknown and 409 when no copy is
    available or the member may not borrow.
    """
    return service.start_loan(request.book_id, request.member_id)


@router.post("/loans/{loan_id}/return", response_model=LoanResponse)
@handle_api_errors("Return loan")
def return_loan(loan_id: str, service: ILendingService = Depends(get_lending_service)):
    return service.return_loan(loan_id)


@router.post("/loans/{loan_id}/renew", response_model=LoanResponse)
@handle_api_errors("Renew loan")
def renew_loan(
    loan_id: str,
    additional_days: int = Query(LendingRules.LOAN_DURATION_DAYS, description="Days to add to the due date"),
    service: ILendingService = Depends(get_lending_service),
):
    """Extend an active, non-overdue loan."""
    return service.renew_loan(loan_id, additional_days)
