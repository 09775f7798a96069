"""
ISBN Value Object

Immutable, checksum-validated International Standard Book Number.
"""

from dataclasses import dataclass

from exceptions import ValidationError

DIGITS = frozenset("0123456789")


def _all_digits(text: str) -> bool:
    return all(c in DIGITS for c in text)


def normalize_isbn(raw: str) -> str:
    """Strip hyphens and spaces from a raw ISBN string."""
    return raw.replace("-", "").replace(" ", "")


def is_valid_isbn10(isbn: str) -> bool:
    """
    Check an already-normalized 10 character ISBN.

    The first nine characters must be digits; the last may be a digit or
    'X' (worth 10). Weighted sum with weights 10..1 must be divisible by 11.
    """
    if len(isbn) != 10:
        return False
    if not _all_digits(isbn[:9]):
        return False

    last = isbn[9]
    if last == "X":
        check = 10
    elif last in DIGITS:
        check = int(last)
    else:
        return False

    total = sum(int(isbn[i]) * (10 - i) for i in range(9)) + check
    return total % 11 == 0


def is_valid_isbn13(isbn: str) -> bool:
    """
    Check an already-normalized 13 digit ISBN.

    Digits are weighted alternately 1 and 3; the check digit is
    (10 - sum % 10) % 10.
    """
    if len(isbn) != 13 or not _all_digits(isbn):
        return False

    total = sum(int(isbn[i]) * (1 if i % 2 == 0 else 3) for i in range(12))
    check = (10 - (total % 10)) % 10
    return check == int(isbn[12])


@dataclass(frozen=True)
class ISBN:
    """
    Immutable ISBN value object.

    Accepts ISBN-10 or ISBN-13 with optional hyphens or spaces. Equality,
    hashing and display all use the normalized value, so
    ISBN("978-0-13-235088-4") == ISBN("9780132350884").
    """

    value: str

    def __post_init__(self):
        """Normalize and validate."""
        if self.value is None or not str(self.value).strip():
            raise ValidationError("ISBN cannot be empty", {"isbn": self.value})

        normalized = normalize_isbn(str(self.value))
        if not (is_valid_isbn10(normalized) or is_valid_isbn13(normalized)):
            raise ValidationError("Invalid ISBN format", {"isbn": self.value})

        # frozen dataclass: bypass __setattr__ to store the canonical form
        object.__setattr__(self, "value", normalized)

    @property
    def is_isbn13(self) -> bool:
        """True for the 13 digit form."""
        return len(self.value) == 13

    def __str__(self) -> str:
        return self.value
