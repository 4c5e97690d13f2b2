"""Custom application exceptions."""

from typing import Any

from fastapi import HTTPException, status


class AppException(HTTPException):
    """Base application exception."""

    def __init__(
        self,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail: str = "An unexpected error occurred",
        headers: dict[str, str] | None = None,
    ) -> None:
        super().__init__(status_code=status_code, detail=detail, headers=headers)


class ValidationError(AppException):
    """Validation error exception."""

    def __init__(self, detail: str = "Validation failed", errors: list[dict[str, Any]] | None = None) -> None:
        self.errors = errors
        super().__init__(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=detail)


class NotFoundError(AppException):
    """Resource not found exception."""

    def __init__(self, resource: str = "Resource", identifier: str | None = None) -> None:
        self.resource = resource
        self.identifier = identifier
        detail = f"{resource} not found"
        if identifier:
            detail = f"{resource} with ID '{identifier}' not found"
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class InvalidTransition(AppException):
    """Requested status change is not allowed from the current status.

    Nothing is persisted when this is raised.
    """

    def __init__(self, current: str, target: str | None = None, entity: str = "booking") -> None:
        self.current = current
        self.target = target
        if target is None:
            detail = f"Invalid {entity} transition: no next status after '{current}'"
        else:
            detail = f"Invalid {entity} transition: {current} → {target}"
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class PersistenceFailure(AppException):
    """The store rejected a write or lost a concurrent update."""

    def __init__(self, detail: str = "Failed to persist changes") -> None:
        super().__init__(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=detail)
