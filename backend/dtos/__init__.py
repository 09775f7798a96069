"""
Data Transfer Objects (DTOs) Layer

This package contains DTOs that decouple the API layer from the domain
entities and the database records.

Structure:
- request/: DTOs for incoming API requests
- response/: DTOs for outgoing API responses, built from domain entities
"""
