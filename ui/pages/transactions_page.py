"""Transactions page - filtered receipt listing."""
from __future__ import annotations
import streamlit as st

from core.logger import get_logger
from gateway import ApiError
from models.receipt import PRODUCT_LABELS
from ui.components import render_receipts_table, render_saved_receipt
from ui.components.receipts_table import VIEW_STATE_KEY
from ui.services import ReceiptFilters, ReceiptsService, SessionManager
from ui.services.receipts_service import month_start

log = get_logger("ui/pages/transactions_page")


def _render_filters(is_admin: bool) -> ReceiptFilters:
    col1, col2, col3 = st.columns(3)
    with col1:
        date_from = st.date_input("From", value=month_start(), key="txn_from", format="DD/MM/YYYY")
    with col2:
        date_to = st.date_input("To", key="txn_to", format="DD/MM/YYYY")
    with col3:
        category = st.selectbox(
            "Category",
            [""] + list(PRODUCT_LABELS),
            format_func=lambda c: PRODUCT_LABELS.get(c, "All"),
            key="txn_category",
        )

    col1, col2, col3 = st.columns(3)
    with col1:
        issuer = st.text_input("Issuer", key="txn_issuer")
    with col2:
        emp_code = st.text_input("Employee Code", key="txn_emp_code") if is_admin else ""
    with col3:
        page = st.number_input("Page", min_value=1, value=1, step=1, key="txn_page")

    return ReceiptFilters(
        date_from=date_from,
        date_to=date_to,
        category=category,
        issuer=issuer,
        emp_code=emp_code,
        page=int(page),
    )


def render() -> None:
    """Render the transactions list."""
    SessionManager.init_session()
    auth = SessionManager.get_auth()

    st.header("📋 Transactions")
    flash = SessionManager.pop_flash(scope="transactions")
    if flash:
        st.success(flash)

    viewing = st.session_state.get(VIEW_STATE_KEY)
    if viewing and render_saved_receipt(auth, viewing):
        st.session_state.pop(VIEW_STATE_KEY, None)
        st.rerun()

    filters = _render_filters(auth.is_admin)

    try:
        with st.spinner("Loading receipts..."):
            page = ReceiptsService.load(auth, filters)
    except ApiError as e:
        log.error(f"Failed to load receipts: {e}")
        st.error(f"Failed to load receipts: {e.message}")
        return

    st.caption(f"{page.total} receipt(s) • page {filters.page}" + (" • more available" if page.has_more else ""))
    if render_receipts_table(auth, page.items):
        st.rerun()
