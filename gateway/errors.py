"""Errors raised by the receipts backend client."""
from __future__ import annotations
from typing import Any, Optional


class ApiError(Exception):
    """A failed backend call. ``message`` is what the user gets to see."""

    def __init__(self, message: str, status_code: Optional[int] = None, payload: Any = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload

    @property
    def is_auth_error(self) -> bool:
        return self.status_code in (401, 403)


class NotAuthenticatedError(ApiError):
    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message, status_code=401)
