"""
Books API endpoints
"""
from fastapi import APIRouter, Depends, Query, Response
from typing import List, Optional

from constants import HTTPStatus
from dependencies import get_book_service
from dtos.request import AddCopiesRequest, CreateBookRequest, UpdateBookRequest
from dtos.response import BookResponse
from services.interfaces import IBookService
from utils.error_handlers import handle_api_errors

router = APIRouter()


@router.get("/books", response_model=List[BookResponse])
@handle_api_errors("List books")
def list_books(
    title: Optional[str] = Query(None, description="Title contains (case-insensitive)"),
    author: Optional[str] = Query(None, description="Author contains (case-insensitive)"),
    category: Optional[str] = Query(None, description="Exact category"),
    available: Optional[bool] = Query(None, description="Only books with (or without) a free copy"),
    service: IBookService = Depends(get_book_service),
):
    """List the catalog with optional filters."""
    return service.list_books(title=title, author=author, category=category, available=available)


@router.get("/books/{book_id}", response_model=BookResponse)
@handle_api_errors("Get book")
def get_book(book_id: str, service: IBookService = Depends(get_book_service)):
    """Get details for a specific book"""
    return service.get_book(book_id)


@router.post("/books", response_model=BookResponse, status_code=HTTPStatus.CREATED)
@handle_api_errors("Create book")
def create_book(request: CreateBookRequest, service: IBookService = Depends(get_book_service)):
    """
    Add a title to the catalog.

    Returns 400 for invalid fields and 409 if the ISBN is already catalogued.
    """
    return service.create_book(request)


@router.put("/books/{book_id}", response_model=BookResponse)
@handle_api_errors("Update book")
def update_book(book_id: str, request: UpdateBookRequest, service: IBookService = Depends(get_book_service)):
    """Patch book details; empty or out-of-range fields are ignored."""
    return service.update_book(book_id, request)


@router.post("/books/{book_id}/copies", response_model=BookResponse)
@handle_api_errors("Add copies")
def add_copies(book_id: str, request: AddCopiesRequest, service: IBookService = Depends(get_book_service)):
    """Add copies of an existing book."""
    return service.add_copies(book_id, request)


@router.delete("/books/{book_id}", status_code=HTTPStatus.NO_CONTENT)
@handle_api_errors("Delete book")
def delete_book(book_id: str, service: IBookService = Depends(get_book_service)):
    """Remove a book. Refused with 409 while copies are on loan."""
    service.delete_book(book_id)
    return Response(status_code=HTTPStatus.NO_CONTENT)
