"""
Email Value Object

Immutable, lower-cased email address.
"""

import re
from dataclasses import dataclass

from exceptions import ValidationError

# local@domain.tld with no whitespace and exactly one '@'
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


@dataclass(frozen=True)
class Email:
    """
    Immutable email value object.

    The address is validated against its raw form and stored lower-cased,
    so Email("Test@EXAMPLE.com") == Email("test@example.com").
    """

    value: str

    def __post_init__(self):
        """Validate shape and canonicalize."""
        if self.value is None or not str(self.value).strip():
            raise ValidationError("Email cannot be empty", {"email": self.value})

        if not EMAIL_PATTERN.fullmatch(str(self.value)):
            raise ValidationError("Invalid email format", {"email": self.value})

        object.__setattr__(self, "value", str(self.value).lower())

    def __str__(self) -> str:
        return self.value
