"""
HTTP error helpers.

Every error response carries ``message`` and ``statusCode``; validation
failures add an ``errors`` mapping of field name to message.
"""
from typing import Dict, Optional

from fastapi import HTTPException, status


class ValidationFailed(HTTPException):
    """400 response carrying every field error collected by a validation chain."""

    def __init__(self, errors: Dict[str, str], message: str = "Validation error", status_code: int = status.HTTP_400_BAD_REQUEST):
        super().__init__(status_code=status_code, detail=message)
        self.errors = errors


def not_found(resource: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{resource} couldn't be found")


def forbidden(message: str = "Forbidden") -> HTTPException:
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=message)


def authentication_required() -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")


def error_body(message: str, status_code: int, errors: Optional[Dict[str, str]] = None) -> dict:
    body = {"message": message, "statusCode": status_code}
    if errors:
        body["errors"] = errors
    return body
