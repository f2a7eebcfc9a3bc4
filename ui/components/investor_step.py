"""Step 2: investor search and selection."""
from __future__ import annotations
from typing import Optional
import pandas as pd
import streamlit as st

from wizard import ReceiptWizard


def render_investor_step(wizard: ReceiptWizard) -> Optional[str]:
    """
    Search box, result table and selection.

    Returns:
        "back", "continue" or None
    """
    st.subheader("🔎 Investor")

    def _on_query_change() -> None:
        wizard.set_investor_query(st.session_state["wizard_investor_query"])

    st.text_input(
        "Search Investor (ID / Name / Address / PAN / Email)",
        value=wizard.investor_query,
        placeholder="Type any part of ID, name, address, PAN, or email",
        key="wizard_investor_query",
        on_change=_on_query_change,
    )

    results = wizard.investor_results()
    if not results:
        st.info("No investors match this search.")
    else:
        df = pd.DataFrame([r.model_dump() for r in results])
        df = df.rename(columns={
            "investorId": "ID", "investorName": "Name", "investorAddress": "Address",
            "pinCode": "PIN", "pan": "PAN", "email": "Email",
        })
        event = st.dataframe(
            df,
            hide_index=True,
            use_container_width=True,
            on_select="rerun",
            selection_mode="single-row",
            key=f"wizard_investor_table_{wizard.investor_query}",
        )
        rows = event.selection.rows if event and event.selection else []
        if rows:
            wizard.select_investor(results[rows[0]])

    chosen = wizard.selected_investor
    if chosen is not None:
        st.success(f"Selected: {chosen.investorName} ({chosen.investorId}) • PAN {chosen.pan or '—'}")

    col1, col2 = st.columns(2)
    if col1.button("⬅ Back", key="investor_back"):
        return "back"
    if col2.button("Continue ➜", disabled=not wizard.can_continue(), type="primary", key="investor_continue"):
        return "continue"
    return None
