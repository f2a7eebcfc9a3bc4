"""UI pages module."""
from .login_page import render as render_login_page
from .receipt_page import render as render_receipt_page
from .transactions_page import render as render_transactions_page
from .dashboard_page import render as render_dashboard_page
from .users_page import render as render_users_page

__all__ = [
    "render_login_page",
    "render_receipt_page",
    "render_transactions_page",
    "render_dashboard_page",
    "render_users_page",
]
