"""
Application-wide constants and configuration keys.

This module centralizes all magic strings and numbers used throughout the application
to improve maintainability and reduce duplication.
"""
from decimal import Decimal


class LendingRules:
    """
    Fixed lending policy.

    These values are part of the domain contract: a loan runs for
    LOAN_DURATION_DAYS, a member holds at most MAX_BORROWED_BOOKS titles
    at once, and each whole day past the due date costs LATE_FEE_PER_DAY.
    """

    LOAN_DURATION_DAYS = 14
    MAX_BORROWED_BOOKS = 5
    LATE_FEE_PER_DAY = Decimal("2.00")
    MIN_PUBLICATION_YEAR = 1000


class HTTPStatus:
    """HTTP status codes used throughout the application"""

    # Success
    OK = 200
    CREATED = 201
    NO_CONTENT = 204

    # Client Errors
    BAD_REQUEST = 400
    NOT_FOUND = 404
    CONFLICT = 409
    UNPROCESSABLE_ENTITY = 422

    # Server Errors
    INTERNAL_SERVER_ERROR = 500
    SERVICE_UNAVAILABLE = 503


class Tables:
    """Database table names"""

    BOOKS = "books"
    MEMBERS = "members"
    LOANS = "loans"
