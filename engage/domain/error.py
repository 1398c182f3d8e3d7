"""Domain layer errors.

Every error raised by the interaction and moderation core carries an
``ErrorKind`` so callers can map failures to stable messages without parsing
free text.
"""

from enum import Enum
from typing import ClassVar


class ErrorKind(str, Enum):
    """Category of a domain failure."""

    UNAUTHENTICATED = "unauthenticated"
    NOT_FOUND = "not_found"
    OPERATION_NOT_ALLOWED = "operation_not_allowed"
    FORBIDDEN = "forbidden"
    ALREADY_EXISTS = "already_exists"
    INVALID_PARENT = "invalid_parent"
    INVALID_ACTION = "invalid_action"


class DomainError(Exception):
    """Base domain error."""

    kind: ClassVar[ErrorKind]


class UnauthenticatedError(DomainError):
    """Raised when no caller identity can be resolved."""

    kind = ErrorKind.UNAUTHENTICATED

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class OperationNotAllowedError(DomainError):
    """Raised when the target forbids the action or the action is out of order."""

    kind = ErrorKind.OPERATION_NOT_ALLOWED


class AlreadyReviewedError(OperationNotAllowedError):
    """Raised when reviewing a flag that has already left PENDING."""

    def __init__(self, flag_id: str):
        self.flag_id = flag_id
        super().__init__(f"Flag {flag_id} has already been reviewed")


class ForbiddenError(DomainError):
    """Raised when the caller lacks ownership or a privileged role."""

    kind = ErrorKind.FORBIDDEN

    def __init__(self, message: str):
        super().__init__(message)


class AlreadyExistsError(DomainError):
    """Raised when a dedup key (target, user) is already taken."""

    kind = ErrorKind.ALREADY_EXISTS


class InvalidParentError(DomainError):
    """Raised when a reply references an unusable parent comment."""

    kind = ErrorKind.INVALID_PARENT


class InvalidActionError(DomainError):
    """Raised for an unrecognized moderation or review action."""

    kind = ErrorKind.INVALID_ACTION

    def __init__(self, action: str):
        self.action = action
        super().__init__(f"Invalid action: {action}")
