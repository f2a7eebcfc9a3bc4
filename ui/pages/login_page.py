"""Login page - gates the rest of the app."""
from __future__ import annotations
import streamlit as st

from core.config import config
from core.logger import get_logger
from gateway import ApiError
from ui.services import SessionManager

log = get_logger("ui/pages/login_page")


def render() -> None:
    """Render the sign-in form."""
    SessionManager.init_session()

    st.header(f"🔐 {config.company_name}")
    st.caption("Sign in with your employee code")

    with st.form("login_form"):
        emp_code = st.text_input("Employee Code", placeholder="e.g., ECS497")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Sign In", type="primary")

    if not submitted:
        return
    if not emp_code.strip() or not password:
        st.error("Enter both employee code and password.")
        return

    try:
        with st.spinner("Signing in..."):
            SessionManager.get_auth().login(emp_code, password)
    except ApiError as e:
        log.warning(f"Login failed for {emp_code.strip()}: {e}")
        st.error(f"Login failed: {e.message}")
        return

    # Pre-fill step 1 with the signed-in employee
    SessionManager.get_wizard().reset()
    st.rerun()
