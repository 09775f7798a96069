from sqlalchemy import Column, String, Integer, DateTime, Numeric, JSON, CheckConstraint, Index

from constants import Tables
from database import Base
from domain.entities.base import generate_id
from utils.clock import utcnow


class BookRecord(Base):
    """
    Persisted form of the Book aggregate.

    available_copies is constrained to [0, total_copies] at the database
    level as well as in the entity.
    """
    __tablename__ = Tables.BOOKS

    id = Column(String, primary_key=True, default=generate_id)
    title = Column(String, nullable=False)
    author = Column(String, nullable=False)
    isbn = Column(String, nullable=False, unique=True)  # normalized ISBN-10/13
    publication_year = Column(Integer, nullable=False)
    category = Column(String, nullable=False, default='')
    total_copies = Column(Integer, nullable=False)
    available_copies = Column(Integer, nullable=False)
    version = Column(Integer, nullable=False, default=0)  # optimistic concurrency token
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=True)

    __table_args__ = (
        CheckConstraint("title != ''"),
        CheckConstraint("total_copies >= 1"),
        CheckConstraint("available_copies >= 0 AND available_copies <= total_copies"),
        Index('idx_books_category', 'category'),
    )


class MemberRecord(Base):
    """Persisted form of the Member aggregate."""
    __tablename__ = Tables.MEMBERS

    id = Column(String, primary_key=True, default=generate_id)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True)  # lower-cased
    phone_number = Column(String, nullable=False)
    membership_date = Column(DateTime, nullable=False)
    status = Column(String, nullable=False, default='Active')  # Active, Suspended, Expired
    borrowed_book_ids = Column(JSON, nullable=False, default=list)
    version = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=True)

    __table_args__ = (
        CheckConstraint("name != ''"),
        Index('idx_members_status', 'status'),
    )


class LoanRecord(Base):
    """
    Persisted form of the Loan aggregate.

    book_id and member_id are plain back-references, not foreign keys:
    loan history is kept when a book or member row is removed.
    """
    __tablename__ = Tables.LOANS

    id = Column(String, primary_key=True, default=generate_id)
    book_id = Column(String, nullable=False)
    member_id = Column(String, nullable=False)
    loan_date = Column(DateTime, nullable=False)
    due_date = Column(DateTime, nullable=False)
    return_date = Column(DateTime, nullable=True)
    status = Column(String, nullable=False, default='Active')  # Active, Returned, Lost
    late_fee = Column(Numeric(10, 2), nullable=True)
    version = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=True)

    __table_args__ = (
        CheckConstraint("status IN ('Active', 'Returned', 'Lost')"),
        Index('idx_loans_status_due', 'status', 'due_date'),
        Index('idx_loans_member', 'member_id'),
        Index('idx_loans_book', 'book_id'),
    )
