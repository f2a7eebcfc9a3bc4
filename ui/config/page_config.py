"""Streamlit page configuration."""
from __future__ import annotations
import streamlit as st

from core.config import config


def setup_page() -> None:
    """Configure Streamlit page settings."""
    st.set_page_config(
        page_title=f"{config.company_name} Receipts",
        page_icon="🧾",
        layout="wide",
        initial_sidebar_state="expanded"
    )
