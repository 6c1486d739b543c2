"""Board error taxonomy and its HTTP mapping."""
import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class TaskBoardError(Exception):
    """Base class for failures raised by the board services."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TaskBoardError):
    """Bad input shape or length; retrying needs different input."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(TaskBoardError):
    """A referenced task, column or attachment does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(TaskBoardError):
    """The operation clashes with current board state (e.g. deleting a non-empty column)."""

    status_code = status.HTTP_409_CONFLICT


class StorageError(TaskBoardError):
    """Transient store or disk failure; the whole operation may be retried."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


async def _board_error_handler(request: Request, exc: TaskBoardError) -> JSONResponse:
    if isinstance(exc, StorageError):
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TaskBoardError, _board_error_handler)
