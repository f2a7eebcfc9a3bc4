"""ECS Receipts - Main Streamlit application entry point."""
from __future__ import annotations
from pathlib import Path
import sys
import streamlit as st

# Ensure project root is on sys.path for absolute imports
ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from core.logger import get_logger
from ui.config import setup_page
from ui.pages import (
    render_dashboard_page,
    render_login_page,
    render_receipt_page,
    render_transactions_page,
    render_users_page,
)
from ui.services import SessionManager

log = get_logger("ui")

# Configure page
setup_page()
SessionManager.init_session()

user = SessionManager.current_user()
if user is None:
    render_login_page()
    st.stop()

with st.sidebar:
    st.markdown(f"**{user.name or user.emp_code}**")
    st.caption(f"{user.emp_code} • {user.branch or '—'} • {user.role}")
    if st.button("Sign Out", key="sign_out"):
        SessionManager.logout()
        st.rerun()

# Create tabs
labels = ["🧾 New Receipt", "📋 Transactions", "📊 Dashboard"]
if user.is_admin:
    labels.append("👥 Users")
tabs = st.tabs(labels)

with tabs[0]:
    render_receipt_page()

with tabs[1]:
    render_transactions_page()

with tabs[2]:
    render_dashboard_page()

if user.is_admin:
    with tabs[3]:
        render_users_page()
