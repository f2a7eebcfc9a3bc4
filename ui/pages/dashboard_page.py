"""Dashboard page - receipt totals and charts."""
from __future__ import annotations
import streamlit as st

from core.logger import get_logger
from gateway import ApiError
from ui.components import render_category_chart, render_daily_chart, render_employee_table, render_kpis
from ui.services import SessionManager, StatsService
from ui.services.receipts_service import month_start

log = get_logger("ui/pages/dashboard_page")


def render() -> None:
    """Render the dashboard."""
    SessionManager.init_session()
    auth = SessionManager.get_auth()

    st.header("📊 Dashboard")
    st.caption("All receipts" if auth.is_admin else "Your receipts")

    col1, col2 = st.columns(2)
    with col1:
        date_from = st.date_input("From", value=month_start(), key="dash_from", format="DD/MM/YYYY")
    with col2:
        date_to = st.date_input("To", key="dash_to", format="DD/MM/YYYY")

    try:
        with st.spinner("Loading stats..."):
            summary, by_category, by_day = StatsService.load(auth, date_from, date_to)
    except ApiError as e:
        log.error(f"Failed to load stats: {e}")
        st.error(f"Failed to load dashboard: {e.message}")
        return

    render_kpis(summary)
    st.divider()

    col1, col2 = st.columns(2)
    with col1:
        render_category_chart(by_category)
    with col2:
        render_daily_chart(by_day)

    if auth.is_admin:
        st.divider()
        render_employee_table(summary)
