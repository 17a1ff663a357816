"""Domain layer errors.

Every failure that a caller can act on is one of the ``DomainError``
subclasses below. The interface layer maps ``ErrorKind`` to a status code
and renders the message through the ``MessageBundle``.
"""

from enum import Enum
from typing import ClassVar

from roost.domain.message import MessageKey


class ErrorKind(str, Enum):
    """Error taxonomy shared by every layer."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    CONFLICT = "conflict"
    INTERNAL = "internal"


class DomainError(Exception):
    """Base domain error."""

    kind: ClassVar[ErrorKind] = ErrorKind.INTERNAL

    def __init__(self, key: MessageKey, details: str | None = None) -> None:
        self.key = key
        self.details = details
        message = key.value if details is None else f"{key.value}: {details}"
        super().__init__(message)


class ValidationError(DomainError):
    """Malformed input or an illegal state transition."""

    kind = ErrorKind.VALIDATION


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    kind = ErrorKind.NOT_FOUND


class UnauthorizedError(DomainError):
    """Raised when an operation needs a signed-in viewer."""

    kind = ErrorKind.UNAUTHORIZED

    def __init__(self, details: str | None = None) -> None:
        super().__init__(MessageKey.UNAUTHORIZED_ACTION, details)


class ForbiddenError(DomainError):
    """Raised when the viewer lacks permission for an operation."""

    kind = ErrorKind.FORBIDDEN

    def __init__(
        self, key: MessageKey = MessageKey.FORBIDDEN_ACTION, details: str | None = None
    ) -> None:
        super().__init__(key, details)


class ConflictError(DomainError):
    """Uniqueness or state violation (duplicate vote, taken handle)."""

    kind = ErrorKind.CONFLICT
