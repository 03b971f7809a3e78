from typing import Any, List, Optional


class ApiError(Exception):
    """Base error carrying the HTTP status it renders to"""

    status_code: int = 500
    default_message: str = "Something went wrong"

    def __init__(
        self,
        message: Optional[str] = None,
        status_code: Optional[int] = None,
        errors: Optional[List[Any]] = None
    ):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        self.errors = errors or []
        super().__init__(self.message)


class ValidationError(ApiError):
    status_code = 400
    default_message = "Validation failed"


class InvalidIdError(ApiError):
    status_code = 400
    default_message = "Invalid id"


class UnauthorizedError(ApiError):
    status_code = 401
    default_message = "Unauthorized request"


class ForbiddenError(ApiError):
    status_code = 403
    default_message = "You are not allowed to perform this action"


class NotFoundError(ApiError):
    status_code = 404
    default_message = "Resource not found"


class ConflictError(ApiError):
    status_code = 409
    default_message = "Resource already exists"


class MediaStoreError(ApiError):
    status_code = 500
    default_message = "Media store request failed"


class UploadError(MediaStoreError):
    default_message = "Error while uploading media"


class MediaDeleteError(MediaStoreError):
    default_message = "Error while deleting media"


class PersistenceError(ApiError):
    status_code = 500
    default_message = "Database operation failed"
