"""Error taxonomy shared by the store adapter, services and API layer."""

from __future__ import annotations

from enum import StrEnum

from fastapi import status


class ErrorKind(StrEnum):
    """Classification of failures surfaced to API callers."""

    INVALID_ARGUMENT = "InvalidArgument"
    CONFLICT = "Conflict"
    NOT_FOUND = "NotFound"
    INTERNAL = "Internal"


class StoreError(Exception):
    """Base class for failures raised below the HTTP layer."""

    kind: ErrorKind = ErrorKind.INTERNAL
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidArgumentError(StoreError):
    """Missing or malformed input supplied by the caller."""

    kind = ErrorKind.INVALID_ARGUMENT
    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(StoreError):
    """A uniqueness or referential constraint rejected the write."""

    kind = ErrorKind.CONFLICT
    status_code = status.HTTP_409_CONFLICT


class NotFoundError(StoreError):
    """The lookup, update or delete target does not exist."""

    kind = ErrorKind.NOT_FOUND
    status_code = status.HTTP_404_NOT_FOUND


class InternalError(StoreError):
    """Storage engine failure or other unexpected condition."""
