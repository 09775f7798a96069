"""Tests for the lending use cases and their transaction/retry behavior."""
import threading
from datetime import timedelta
from decimal import Decimal

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from conftest import CLEAN_CODE_ISBN, DESIGN_PATTERNS_ISBN
from database import Base, set_sqlite_pragma
from dtos.request import CreateBookRequest, CreateMemberRequest
from exceptions import ConcurrencyConflictError, InvariantViolation, NotFoundError, ValidationError
from repositories import BookRepository, LoanRepository, MemberRepository
from services.book_service import BookService
from services.lending_service import LendingService
from services.member_service import MemberService
from services.transaction import TransactionalService
from utils.clock import utcnow


def backdate_loan(db_session, loan_id, days_overdue, extra=timedelta(hours=1)):
    """Move a stored loan's due date into the past"""
    repo = LoanRepository(db_session)
    loan = repo.get_by_id(loan_id)
    loan.due_date = utcnow() - timedelta(days=days_overdue) - extra
    repo.update(loan)
    db_session.commit()


class TestStartLoan:
    """Lending a copy to a member."""

    def test_end_to_end_borrow_and_return(self, make_book, make_member, member_service,
                                          book_service, lending_service):
        book = make_book(total_copies=1)
        ada = make_member()
        grace = make_member(email="grace@example.com", name="Grace Hopper")

        loan = lending_service.start_loan(book.id, ada.id)
        assert loan.status == "Active"
        assert loan.due_date - loan.loan_date == timedelta(days=14)
        assert loan.late_fee is None
        assert book_service.get_book(book.id).available_copies == 0
        assert member_service.get_member(ada.id).borrowed_books_count == 1

        with pytest.raises(InvariantViolation, match="No copies available") as exc_info:
            lending_service.start_loan(book.id, grace.id)
        assert exc_info.value.rule == "no_copies_available"
        assert member_service.get_member(grace.id).borrowed_books_count == 0

        returned = lending_service.return_loan(loan.id)
        assert returned.status == "Returned"
        assert returned.return_date is not None
        assert returned.late_fee is None
        assert book_service.get_book(book.id).available_copies == 1
        assert member_service.get_member(ada.id).borrowed_books_count == 0

    def test_unknown_book_or_member(self, make_book, make_member, lending_service):
        book = make_book()
        member = make_member()
        with pytest.raises(NotFoundError, match="Book not found"):
            lending_service.start_loan("missing", member.id)
        with pytest.raises(NotFoundError, match="Member not found"):
            lending_service.start_loan(book.id, "missing")

    def test_suspended_member_cannot_borrow(self, make_book, make_member, member_service,
                                            book_service, lending_service):
        book = make_book(total_copies=2)
        member = make_member()
        member_service.suspend_member(member.id)

        with pytest.raises(InvariantViolation) as exc_info:
            lending_service.start_loan(book.id, member.id)
        assert exc_info.value.rule == "member_not_active"
        assert book_service.get_book(book.id).available_copies == 2
        assert lending_service.list_loans() == []

    def test_borrow_limit(self, make_book, make_member, lending_service):
        member = make_member()
        isbns = ["9780132350884", "9780201633610", "9780596007126", "0132350882", "080442957X"]
        for isbn in isbns:
            lending_service.start_loan(make_book(isbn=isbn).id, member.id)

        sixth = make_book(isbn="9781491950357")
        with pytest.raises(InvariantViolation) as exc_info:
            lending_service.start_loan(sixth.id, member.id)
        assert exc_info.value.rule == "borrow_limit_reached"

    def test_same_title_twice_leaves_nothing_applied(self, make_book, make_member,
                                                     book_service, lending_service):
        book = make_book(total_copies=3)
        member = make_member()
        lending_service.start_loan(book.id, member.id)

        with pytest.raises(InvariantViolation) as exc_info:
            lending_service.start_loan(book.id, member.id)
        assert exc_info.value.rule == "book_already_borrowed"
        # nothing from the rejected attempt is persisted
        assert book_service.get_book(book.id).available_copies == 2
        assert len(lending_service.list_active_loans()) == 1


class TestReturnAndRenew:
    """Closing and extending loans."""

    def test_return_twice_fails(self, make_book, make_member, lending_service):
        loan = lending_service.start_loan(make_book().id, make_member().id)
        lending_service.return_loan(loan.id)
        with pytest.raises(InvariantViolation) as exc_info:
            lending_service.return_loan(loan.id)
        assert exc_info.value.rule == "loan_not_active"

    def test_return_unknown_loan(self, lending_service):
        with pytest.raises(NotFoundError):
            lending_service.return_loan("missing")

    def test_late_return_freezes_fee(self, db_session, make_book, make_member, lending_service):
        loan = lending_service.start_loan(make_book().id, make_member().id)
        backdate_loan(db_session, loan.id, days_overdue=3)

        overdue = lending_service.list_overdue_loans()
        assert [l.id for l in overdue] == [loan.id]
        assert overdue[0].days_overdue == 3
        assert overdue[0].current_late_fee == Decimal("6.00")

        returned = lending_service.return_loan(loan.id)
        assert returned.late_fee == Decimal("6.00")
        assert returned.days_overdue == 0
        assert lending_service.get_loan(loan.id).late_fee == Decimal("6.00")
        assert lending_service.list_overdue_loans() == []

    def test_renew_timely_loan(self, make_book, make_member, lending_service):
        loan = lending_service.start_loan(make_book().id, make_member().id)
        renewed = lending_service.renew_loan(loan.id, 7)
        assert renewed.due_date == loan.due_date + timedelta(days=7)
        assert renewed.status == "Active"

    def test_renew_overdue_loan_fails(self, db_session, make_book, make_member, lending_service):
        loan = lending_service.start_loan(make_book().id, make_member().id)
        backdate_loan(db_session, loan.id, days_overdue=1)
        with pytest.raises(InvariantViolation) as exc_info:
            lending_service.renew_loan(loan.id)
        assert exc_info.value.rule == "loan_overdue"

    def test_renew_rejects_non_positive_days(self, make_book, make_member, lending_service):
        loan = lending_service.start_loan(make_book().id, make_member().id)
        with pytest.raises(ValidationError):
            lending_service.renew_loan(loan.id, 0)

    def test_history_queries(self, make_book, make_member, lending_service):
        book = make_book(total_copies=2)
        other = make_book(isbn=DESIGN_PATTERNS_ISBN)
        ada = make_member()
        grace = make_member(email="grace@example.com")

        first = lending_service.start_loan(book.id, ada.id)
        lending_service.start_loan(book.id, grace.id)
        lending_service.start_loan(other.id, ada.id)
        lending_service.return_loan(first.id)

        assert len(lending_service.list_loans()) == 3
        assert len(lending_service.list_active_loans()) == 2
        assert len(lending_service.list_loans_by_book(book.id)) == 2
        assert len(lending_service.list_loans_by_member(ada.id)) == 2
        assert lending_service.list_loans_by_member("nobody") == []


class TestConcurrencyRetry:
    """Version conflicts roll back the use case and re-run it."""

    def _race_on_first_load(self, monkeypatch, db_session, service):
        """Let a rival request take a copy right after the first load of the book"""
        original = service.book_repo.get_by_id
        raced = []

        def racing_get_by_id(book_id):
            book = original(book_id)
            if not raced:
                raced.append(book_id)
                rival_repo = BookRepository(db_session)
                rival = rival_repo.get_by_id(book_id)
                rival.borrow_copy()
                rival_repo.update(rival)
                db_session.commit()
            return book

        monkeypatch.setattr(service.book_repo, "get_by_id", racing_get_by_id)
        return raced

    def test_conflict_is_retried_from_fresh_read(self, monkeypatch, db_session,
                                                 make_book, make_member, book_service):
        book = make_book(total_copies=2)
        member = make_member()
        service = LendingService(db_session)
        raced = self._race_on_first_load(monkeypatch, db_session, service)

        loan = service.start_loan(book.id, member.id)

        assert raced == [book.id]
        stored = BookRepository(db_session).get_by_id(book.id)
        # both the rival's copy and ours are accounted for
        assert stored.available_copies == 0
        assert stored.version == 2
        assert MemberRepository(db_session).get_by_id(member.id).borrowed_book_ids == (book.id,)
        assert LoanRepository(db_session).get_by_id(loan.id) is not None

    def test_last_copy_cannot_be_lent_twice(self, monkeypatch, db_session, make_book, make_member):
        book = make_book(total_copies=1)
        member = make_member()
        service = LendingService(db_session)
        self._race_on_first_load(monkeypatch, db_session, service)

        with pytest.raises(InvariantViolation) as exc_info:
            service.start_loan(book.id, member.id)
        assert exc_info.value.rule == "no_copies_available"
        assert MemberRepository(db_session).get_by_id(member.id).borrowed_book_ids == ()
        assert LoanRepository(db_session).get_all() == []

    def test_gives_up_after_max_retries(self, db_session):
        service = TransactionalService(db_session, max_retries=2)
        attempts = []

        def always_conflicts():
            attempts.append(1)
            raise ConcurrencyConflictError("Book", "b1")

        with pytest.raises(ConcurrencyConflictError):
            service.run_in_transaction("test", always_conflicts)
        assert len(attempts) == 3

    def test_domain_failures_are_not_retried(self, db_session):
        service = TransactionalService(db_session, max_retries=5)
        attempts = []

        def rejects():
            attempts.append(1)
            raise InvariantViolation("loan_not_active", "Loan is not active")

        with pytest.raises(InvariantViolation):
            service.run_in_transaction("test", rejects)
        assert len(attempts) == 1

    def test_default_retries_come_from_settings(self, db_session):
        from config.settings import settings
        assert TransactionalService(db_session).max_retries == settings.max_conflict_retries


class TestConcurrentRequests:
    """Separate sessions on a shared database file, one per request thread."""

    @pytest.fixture
    def file_sessions(self, tmp_path):
        engine = create_engine(
            f"sqlite:///{tmp_path / 'lending.db'}",
            connect_args={"check_same_thread": False},
        )
        event.listen(engine, "connect", set_sqlite_pragma)
        Base.metadata.create_all(engine)
        yield sessionmaker(bind=engine, expire_on_commit=False)
        engine.dispose()

    def test_copies_are_never_over_lent(self, file_sessions):
        borrowers = 8
        with file_sessions() as session:
            book = BookService(session).create_book(CreateBookRequest(
                title="Clean Code", author="Robert C. Martin", isbn=CLEAN_CODE_ISBN,
                publication_year=2008, total_copies=3,
            ))
            member_ids = [
                MemberService(session).create_member(CreateMemberRequest(
                    name=f"Reader {i}", email=f"reader{i}@example.com", phone_number="555-0100",
                )).id
                for i in range(borrowers)
            ]

        barrier = threading.Barrier(borrowers)
        outcomes = []
        outcomes_lock = threading.Lock()

        def borrow(member_id):
            session = file_sessions()
            try:
                service = LendingService(session, max_retries=10)
                barrier.wait()
                try:
                    service.start_loan(book.id, member_id)
                    outcome = "loaned"
                except InvariantViolation as e:
                    outcome = e.rule
                except Exception as e:
                    outcome = repr(e)
            finally:
                session.close()
            with outcomes_lock:
                outcomes.append(outcome)

        threads = [threading.Thread(target=borrow, args=(member_id,)) for member_id in member_ids]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=60)

        assert sorted(outcomes) == ["loaned"] * 3 + ["no_copies_available"] * (borrowers - 3)

        with file_sessions() as session:
            stored = BookRepository(session).get_by_id(book.id)
            assert stored.available_copies == 0
            assert stored.total_copies == 3
            assert len(LoanRepository(session).get_all()) == 3
            members = [MemberRepository(session).get_by_id(member_id) for member_id in member_ids]
            assert sum(len(m.borrowed_book_ids) for m in members) == 3
