# blomsterlan/errors.py
"""
Domain errors raised by the store and the API layer.

The API maps them onto HTTP responses in blomsterlan.main:
    ValidationError            -> 400
    ReferentialIntegrityError  -> 400
    NotFoundError              -> 404
"""

from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str

    def as_dict(self) -> dict:
        return {"field": self.field, "message": self.message}


class BlomsterLanError(Exception):
    """Base class for all application errors."""


class ValidationError(BlomsterLanError):
    def __init__(self, errors: List[FieldError], message: str = "Ogiltiga uppgifter"):
        super().__init__(message)
        self.message = message
        self.errors = list(errors)


class ReferentialIntegrityError(BlomsterLanError):
    """A transaction refers to a customer or item that does not exist."""

    def __init__(self, errors: List[FieldError]):
        message = "; ".join(e.message for e in errors) or "Okänd referens"
        super().__init__(message)
        self.message = message
        self.errors = list(errors)


class NotFoundError(BlomsterLanError):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
