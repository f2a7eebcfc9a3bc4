"""New Receipt page - drives the four-step receipt wizard."""
from __future__ import annotations
import streamlit as st

from core.logger import get_logger
from ui.components import (
    render_employee_step,
    render_investor_step,
    render_preview_step,
    render_product_step,
    render_step_header,
)
from ui.services import SessionManager
from wizard import Step

log = get_logger("ui/pages/receipt_page")


def render() -> None:
    """Render the wizard at its current step and apply the chosen action."""
    SessionManager.init_session()
    wizard = SessionManager.get_wizard()
    user = SessionManager.current_user()

    st.header("🧾 New Receipt")
    flash = SessionManager.pop_flash()
    if flash:
        st.success(flash)

    render_step_header(wizard.step)
    st.divider()

    if wizard.step == Step.EMPLOYEE:
        locked = user is not None and not user.is_admin and bool(user.emp_code)
        if render_employee_step(wizard, locked=locked):
            st.rerun()
        return

    if wizard.step == Step.INVESTOR:
        action = render_investor_step(wizard)
        if action == "back":
            wizard.back()
            st.rerun()
        elif action == "continue" and wizard.continue_from_investor():
            st.rerun()
        return

    if wizard.step == Step.PRODUCT:
        action = render_product_step(wizard)
        if action == "back":
            wizard.back()
            st.rerun()
        elif action == "continue" and wizard.continue_from_product():
            st.rerun()
        return

    action = render_preview_step(wizard, SessionManager.get_pdf_regenerator())
    if action == "back":
        SessionManager.release_pdf_regenerator()
        wizard.back()
        st.rerun()
    elif action == "save":
        with st.spinner("Saving..."):
            result = wizard.save()
        if result.ok:
            SessionManager.release_pdf_regenerator()
            SessionManager.set_flash(f"Receipt saved successfully! Receipt ID: {result.receipt_id}")
        st.rerun()
