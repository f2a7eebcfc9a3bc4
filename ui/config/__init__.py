"""UI configuration."""
from .page_config import setup_page

__all__ = ["setup_page"]
