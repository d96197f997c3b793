"""Application exception hierarchy with HTTP semantics."""

from __future__ import annotations

from fastapi import status


class ApplicationError(Exception):
    """Base application error, rendered as `{"detail", "code"}` by the app."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    code: str = "application_error"

    def __init__(self, message: str, *, status_code: int | None = None, code: str | None = None) -> None:
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code
        if code is not None:
            self.code = code
        self.message = message


class InvalidQueryError(ApplicationError):
    """A predicate names an unknown field or an operator the field's index can't serve."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "invalid_query"


class StoreUnavailableError(ApplicationError):
    """The backing store could not be reached."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    code = "store_unavailable"
