"""Integration tests for the HTTP routes."""
import logging

from fastapi import status

from conftest import CLEAN_CODE_ISBN, DESIGN_PATTERNS_ISBN, ISBN10_WITH_X

BOOK = {
    "title": "Clean Code",
    "author": "Robert C. Martin",
    "isbn": CLEAN_CODE_ISBN,
    "publication_year": 2008,
    "category": "Software",
    "total_copies": 1,
}
MEMBER = {"name": "Ada Lovelace", "email": "Ada@Example.com", "phone_number": "555-0100"}


def create_book(client, **overrides):
    response = client.post("/api/books", json={**BOOK, **overrides})
    assert response.status_code == status.HTTP_201_CREATED, response.text
    return response.json()


def create_member(client, **overrides):
    response = client.post("/api/members", json={**MEMBER, **overrides})
    assert response.status_code == status.HTTP_201_CREATED, response.text
    return response.json()


class TestHealth:
    """Health endpoints."""

    def test_health(self, client):
        for path in ("/health", "/api/health"):
            response = client.get(path)
            assert response.status_code == status.HTTP_200_OK
            assert response.json()["status"] == "ok"


class TestBookRoutes:
    """Catalog endpoints."""

    def test_create_and_get(self, client):
        book = create_book(client)
        assert book["isbn"] == "9780132350884"
        assert book["isbn_format"] == "ISBN-13"
        assert book["available_copies"] == 1

        response = client.get(f"/api/books/{book['id']}")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["title"] == "Clean Code"

    def test_isbn10_keeps_its_format(self, client):
        book = create_book(client, isbn=ISBN10_WITH_X)
        assert book["isbn"] == "080442957X"
        assert book["isbn_format"] == "ISBN-10"

    def test_invalid_isbn_is_bad_request(self, client):
        response = client.post("/api/books", json={**BOOK, "isbn": "9780132350885"})
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"]["error"] == "Invalid ISBN format"

    def test_duplicate_isbn_is_conflict(self, client):
        create_book(client)
        response = client.post("/api/books", json={**BOOK, "isbn": "9780132350884"})
        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["detail"]["rule"] == "duplicate_isbn"

    def test_missing_field_is_unprocessable(self, client):
        response = client.post("/api/books", json={"title": "Only a title"})
        assert response.status_code == 422

    def test_unknown_book_is_not_found(self, client):
        response = client.get("/api/books/missing")
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"]["error"] == "Book not found"

    def test_filters_update_and_copies(self, client):
        book = create_book(client)
        create_book(client, isbn=DESIGN_PATTERNS_ISBN, title="Design Patterns", author="Erich Gamma")

        response = client.get("/api/books", params={"title": "design"})
        assert [b["title"] for b in response.json()] == ["Design Patterns"]

        response = client.put(f"/api/books/{book['id']}", json={"category": "Craft", "title": ""})
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["category"] == "Craft"
        assert response.json()["title"] == "Clean Code"

        response = client.post(f"/api/books/{book['id']}/copies", json={"quantity": 2})
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["total_copies"] == 3

        response = client.post(f"/api/books/{book['id']}/copies", json={"quantity": 0})
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_delete(self, client):
        book = create_book(client)
        response = client.delete(f"/api/books/{book['id']}")
        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert client.get(f"/api/books/{book['id']}").status_code == status.HTTP_404_NOT_FOUND


class TestMemberRoutes:
    """Member endpoints."""

    def test_create_suspend_reactivate(self, client):
        member = create_member(client)
        assert member["email"] == "ada@example.com"
        assert member["borrowed_books_count"] == 0
        assert "borrowed_book_ids" not in member

        response = client.post(f"/api/members/{member['id']}/suspend")
        assert response.json()["status"] == "Suspended"
        assert client.get("/api/members", params={"active": True}).json() == []

        response = client.post(f"/api/members/{member['id']}/reactivate")
        assert response.json()["status"] == "Active"

    def test_duplicate_email_is_conflict(self, client):
        create_member(client)
        response = client.post("/api/members", json={**MEMBER, "email": "ada@EXAMPLE.com"})
        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["detail"]["rule"] == "duplicate_email"

    def test_invalid_email_is_bad_request(self, client):
        response = client.post("/api/members", json={**MEMBER, "email": "not an email"})
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_update_phone(self, client):
        member = create_member(client)
        response = client.put(f"/api/members/{member['id']}", json={"phone_number": "555-0199"})
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["phone_number"] == "555-0199"


class TestLoanRoutes:
    """Lending endpoints."""

    def test_lending_lifecycle(self, client):
        book = create_book(client)
        ada = create_member(client)
        grace = create_member(client, email="grace@example.com", name="Grace Hopper")

        response = client.post("/api/loans", json={"book_id": book["id"], "member_id": ada["id"]})
        assert response.status_code == status.HTTP_201_CREATED
        loan = response.json()
        assert loan["status"] == "Active"
        assert loan["return_date"] is None
        assert loan["late_fee"] is None
        assert loan["days_overdue"] == 0

        response = client.post("/api/loans", json={"book_id": book["id"], "member_id": grace["id"]})
        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["detail"]["rule"] == "no_copies_available"

        # cannot remove a book or member while the loan is out
        assert client.delete(f"/api/books/{book['id']}").status_code == status.HTTP_409_CONFLICT
        assert client.delete(f"/api/members/{ada['id']}").status_code == status.HTTP_409_CONFLICT

        assert [l["id"] for l in client.get("/api/loans/active").json()] == [loan["id"]]
        assert client.get("/api/loans/overdue").json() == []
        assert len(client.get(f"/api/loans/member/{ada['id']}").json()) == 1
        assert len(client.get(f"/api/loans/book/{book['id']}").json()) == 1

        response = client.post(f"/api/loans/{loan['id']}/renew", params={"additional_days": 7})
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["due_date"] != loan["due_date"]

        response = client.post(f"/api/loans/{loan['id']}/return")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "Returned"

        response = client.post(f"/api/loans/{loan['id']}/return")
        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["detail"]["rule"] == "loan_not_active"

        assert client.get(f"/api/books/{book['id']}").json()["available_copies"] == 1
        assert client.get(f"/api/members/{ada['id']}").json()["borrowed_books_count"] == 0
        assert client.get(f"/api/loans/{loan['id']}").json()["status"] == "Returned"
        assert len(client.get("/api/loans").json()) == 1

    def test_unknown_references_are_not_found(self, client):
        member = create_member(client)
        response = client.post("/api/loans", json={"book_id": "missing", "member_id": member["id"]})
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert client.get("/api/loans/missing").status_code == status.HTTP_404_NOT_FOUND
        assert client.post("/api/loans/missing/return").status_code == status.HTTP_404_NOT_FOUND

    def test_renew_with_invalid_days_is_bad_request(self, client):
        book = create_book(client)
        member = create_member(client)
        loan = client.post("/api/loans", json={"book_id": book["id"], "member_id": member["id"]}).json()
        response = client.post(f"/api/loans/{loan['id']}/renew", params={"additional_days": 0})
        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestRequestContext:
    """Request ids flow into the service logs."""

    def test_request_id_tags_service_logs(self, client, caplog):
        book = create_book(client)
        member = create_member(client)

        with caplog.at_level(logging.DEBUG):
            response = client.post(
                "/api/loans",
                json={"book_id": book["id"], "member_id": member["id"]},
                headers={"X-Request-ID": "req-42"},
            )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.headers["X-Request-ID"] == "req-42"
        records = [r for r in caplog.records if getattr(r, "context", {}).get("operation") == "start_loan"]
        assert records
        for record in records:
            assert record.context["request_id"] == "req-42"
            assert record.context["path"] == "/api/loans"
            assert "request_id=req-42" in record.getMessage()

    def test_request_id_generated_when_absent(self, client):
        first = client.get("/api/books").headers["X-Request-ID"]
        second = client.get("/api/books").headers["X-Request-ID"]
        assert first and second and first != second
