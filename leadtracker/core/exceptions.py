"""
Custom exceptions for the lead tracker.
Provides consistent error handling across the application.
"""
from fastapi import HTTPException, status


class LeadTrackerException(Exception):
    """Base exception for the lead tracker"""
    def __init__(self, message: str = "An error occurred"):
        self.message = message
        super().__init__(self.message)


class NotFoundError(LeadTrackerException):
    """Resource not found"""
    def __init__(self, resource: str = "Resource", resource_id: str = None):
        message = f"{resource} not found"
        if resource_id:
            message = f"{resource} with id '{resource_id}' not found"
        super().__init__(message)


class ForbiddenError(LeadTrackerException):
    """Access denied"""
    def __init__(self, message: str = "You don't have permission to perform this action"):
        super().__init__(message)


class ValidationError(LeadTrackerException):
    """Validation failed"""
    def __init__(self, message: str = "Validation failed", field: str = None):
        if field:
            message = f"Validation failed for field '{field}': {message}"
        super().__init__(message)


class ImportStructureError(LeadTrackerException):
    """The uploaded source has no usable header/data rows or is not a table at all."""
    def __init__(self, message: str = "Source could not be read as a table"):
        super().__init__(message)


class ImportCancelledError(LeadTrackerException):
    """An import was cancelled before it committed."""
    def __init__(self, rows_read: int = 0):
        self.rows_read = rows_read
        super().__init__(f"Import cancelled after {rows_read} rows; nothing was imported")


# HTTP Exception helpers
def raise_not_found(resource: str = "Resource", resource_id: str = None):
    """Raise 404 HTTPException"""
    err = NotFoundError(resource, resource_id)
    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=err.message)


def raise_forbidden(message: str = "You don't have permission to perform this action"):
    """Raise 403 HTTPException"""
    raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=message)


def raise_validation_error(message: str = "Validation failed", field: str = None):
    """Raise 422 HTTPException"""
    err = ValidationError(message, field)
    raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=err.message)

