"""Application error taxonomy.

API handlers in ``src.main`` render every ``AppError`` as
``{"success": false, "error": {"message": ..., "details": ...}}`` with the
error's status code. ``UpstreamServiceError`` is the exception: it is raised by
the LLM collaborator and always caught by the meal service.
"""

from typing import Any

from fastapi import status


class AppError(Exception):
    """Base class for errors that map onto an HTTP status code."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: list[Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class NotFoundError(AppError):
    """Referenced user, item, list or notification does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(AppError):
    """Duplicate of something that must be unique."""

    status_code = status.HTTP_409_CONFLICT


class UpstreamServiceError(AppError):
    """External text-generation service failed, timed out or returned garbage."""

    status_code = status.HTTP_502_BAD_GATEWAY
