"""Error taxonomy for the API.

Every failure a request handler can signal is one of three kinds. Handlers
raise these exceptions; ``blog_api.api.http.errors`` is the only place that
turns them into HTTP responses. No framework imports allowed here.
"""

from enum import Enum
from typing import ClassVar


class ErrorKind(str, Enum):
    """Named failure conditions understood by the error mapper."""

    BAD_REQUEST = "BadRequest"
    NOT_FOUND = "NotFound"
    INTERNAL = "Internal"


class ApiError(Exception):
    """Base error carrying an explicit kind and a client-facing message."""

    kind: ClassVar[ErrorKind] = ErrorKind.INTERNAL

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value}, message={self.message!r})"


class BadRequestError(ApiError):
    """Malformed or invalid input, or an attempt to modify an immutable field."""

    kind = ErrorKind.BAD_REQUEST


class NotFoundError(ApiError):
    """A referenced entity does not exist."""

    kind = ErrorKind.NOT_FOUND

    @classmethod
    def for_entity(cls, entity: str) -> "NotFoundError":
        return cls(f"{entity} not found")


class InternalError(ApiError):
    """Anything unexpected, including persistence-layer failures."""

    kind = ErrorKind.INTERNAL
