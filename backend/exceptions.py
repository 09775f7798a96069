"""
Custom exception classes for the application.

This module defines domain-specific exceptions that provide better error handling
and clearer error messages throughout the application.
"""


class ApplicationError(Exception):
    """Base exception for all application errors"""

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(ApplicationError):
    """Raised when there's a configuration issue"""

    def __init__(self, message: str, missing_keys: list[str] | None = None):
        details = {"missing_keys": missing_keys} if missing_keys else {}
        super().__init__(message, details)


class ValidationError(ApplicationError):
    """Raised when input to a constructor or setter is malformed or out of range"""

    def __init__(self, message: str, invalid_fields: dict | None = None):
        details = {"invalid_fields": invalid_fields} if invalid_fields else {}
        super().__init__(message, details)


class InvariantViolation(ApplicationError):
    """Raised when an operation is attempted in a state that forbids it"""

    def __init__(self, rule: str, message: str, details: dict | None = None):
        self.rule = rule
        merged = {"rule": rule}
        if details:
            merged.update(details)
        super().__init__(message, merged)


class DuplicateError(InvariantViolation):
    """Raised when creating an aggregate whose unique key is already taken"""

    def __init__(self, entity: str, field: str, value: str):
        super().__init__(
            f"duplicate_{field}",
            f"A {entity} with this {field} already exists",
            {"entity": entity, "field": field, "value": value},
        )


class NotFoundError(ApplicationError):
    """Raised when a referenced id does not resolve via a repository"""

    def __init__(self, entity: str, entity_id: str):
        details = {"entity": entity, "id": entity_id}
        super().__init__(f"{entity} not found", details)


class ConcurrencyConflictError(ApplicationError):
    """Raised when an aggregate was modified by someone else since it was loaded"""

    def __init__(self, entity: str, entity_id: str, message: str | None = None):
        details = {"entity": entity, "id": entity_id}
        msg = message or f"{entity} {entity_id} was modified concurrently"
        super().__init__(msg, details)


class DatabaseError(ApplicationError):
    """Raised when database operations fail"""

    def __init__(self, operation: str, message: str):
        details = {"operation": operation}
        super().__init__(message, details)
