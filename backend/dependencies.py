"""
Dependency injection providers for FastAPI.

This module provides factory functions for creating service instances,
following the Dependency Inversion Principle. Tests override get_db to
point every service at an in-memory database.
"""

from sqlalchemy.orm import Session
from fastapi import Depends

from database import get_db
from services.book_service import BookService
from services.interfaces import IBookService, ILendingService, IMemberService
from services.lending_service import LendingService
from services.member_service import MemberService


def get_book_service(db: Session = Depends(get_db)) -> IBookService:
    """
    Factory function for creating BookService instances.

    Args:
        db: Database session (injected)

    Returns:
        IBookService: Book service implementation
    """
    return BookService(db)


def get_member_service(db: Session = Depends(get_db)) -> IMemberService:
    """
    Factory function for creating MemberService instances.

    Args:
        db: Database session (injected)

    Returns:
        IMemberService: Member service implementation
    """
    return MemberService(db)


def get_lending_service(db: Session = Depends(get_db)) -> ILendingService:
    """
    Factory function for creating LendingService instances.

    Args:
        db: Database session (injected)

    Returns:
        ILendingService: Lending service implementation
    """
    return LendingService(db)
