from typing import Any, Dict, List, Optional
from starlette import status

class AppError(Exception):
    def __init__(
        self,
        message: str,
        *,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        code: str = "bad_request",
        field: Optional[str] = None,
        errors: Optional[List[dict]] = None,  # [{'code':..., 'message':..., 'field':...}]
        details: Optional[Dict[str, Any]] = None,  # Additional details for the error
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code
        self.field = field
        self.errors = errors
        self.details = details


class NotFoundError(AppError):
    def __init__(self, message: str = "Document not found", **kwargs):
        super().__init__(message, status_code=status.HTTP_404_NOT_FOUND, code="not_found", **kwargs)


class InvalidIdError(AppError):
    """Malformed identifier; reported to clients like a missing document"""

    def __init__(self, message: str = "Invalid identifier", **kwargs):
        super().__init__(message, status_code=status.HTTP_404_NOT_FOUND, code="invalid_id", **kwargs)


class EmptyFileNameError(AppError):
    def __init__(self, message: str = "File name can't be empty", **kwargs):
        kwargs.setdefault("field", "file_name")
        super().__init__(message, status_code=status.HTTP_400_BAD_REQUEST, code="empty_file_name", **kwargs)


class InvalidFileTypeError(AppError):
    def __init__(self, message: str = "Invalid file type", **kwargs):
        super().__init__(message, status_code=status.HTTP_400_BAD_REQUEST, code="invalid_file_type", **kwargs)


class ConflictError(AppError):
    def __init__(self, message: str = "Document already exists", **kwargs):
        super().__init__(message, status_code=status.HTTP_409_CONFLICT, code="conflict", **kwargs)


class StorageError(AppError):
    """Object storage call failed; provider detail stays in the logs"""

    def __init__(self, message: str = "Storage operation failed", **kwargs):
        super().__init__(message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, code="storage_failure", **kwargs)


class PersistenceError(AppError):
    """Metadata store call failed"""

    def __init__(self, message: str = "Database operation failed", **kwargs):
        super().__init__(message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, code="persistence_failure", **kwargs)


class OperationTimeoutError(AppError):
    def __init__(self, message: str = "Operation timed out", **kwargs):
        super().__init__(message, status_code=status.HTTP_504_GATEWAY_TIMEOUT, code="timeout", **kwargs)
