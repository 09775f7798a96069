"""
Domain Layer

This package contains the core lending domain logic, separated from
persistence concerns and infrastructure.

Structure:
- entities/: Book, Member and Loan aggregates with identity and lifecycle
- value_objects/: ISBN, Email and the status enums
"""
