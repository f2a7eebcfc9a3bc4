"""Receipts backend access."""
from .client import ReceiptsApi, unwrap_items
from .errors import ApiError, NotAuthenticatedError
from .session import AuthSession

__all__ = ["ReceiptsApi", "unwrap_items", "ApiError", "NotAuthenticatedError", "AuthSession"]
