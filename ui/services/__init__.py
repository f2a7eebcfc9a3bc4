"""UI services module."""
from .session_manager import SessionManager
from .receipts_service import (
    ReceiptFilters,
    ReceiptPage,
    ReceiptsService,
    StatsService,
    can_modify,
    receipt_row,
    record_from_server,
    view_error_message,
)
from .users_service import UsersService

__all__ = [
    "SessionManager",
    "ReceiptFilters",
    "ReceiptPage",
    "ReceiptsService",
    "StatsService",
    "UsersService",
    "can_modify",
    "receipt_row",
    "record_from_server",
    "view_error_message",
]
