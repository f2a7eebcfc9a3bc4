"""Receipts table with view, soft delete and restore actions."""
from __future__ import annotations
from typing import Any, Dict, List, Optional
import pandas as pd
import streamlit as st

from core.logger import get_logger
from core.utils import format_inr
from gateway import ApiError, AuthSession
from ui.services import ReceiptsService, SessionManager, can_modify, receipt_row

log = get_logger("ui/components/receipts_table")

VIEW_STATE_KEY = "viewing_receipt_id"


def receipts_frame(items: List[Dict[str, Any]]) -> pd.DataFrame:
    return pd.DataFrame([receipt_row(r) for r in items])


def selected_index(rows: List[int], count: int) -> Optional[int]:
    """Row picked in the table, or None when nothing valid is selected."""
    # A persisted selection can point past a list that shrank after a filter change
    if not rows or not 0 <= rows[0] < count:
        return None
    return rows[0]


def render_receipts_table(auth: AuthSession, items: List[Dict[str, Any]]) -> bool:
    """
    Render the receipt list and the action panel for one selected receipt.

    Returns:
        True when a receipt was opened or a delete/restore went through, so the page should rerun
    """
    if not items:
        st.info("No receipts found for these filters.")
        return False

    df = receipts_frame(items)
    display = df.drop(columns=["ID"]).copy()
    display["Amount"] = display["Amount"].apply(format_inr)
    event = st.dataframe(
        display,
        hide_index=True,
        use_container_width=True,
        on_select="rerun",
        selection_mode="single-row",
        key="receipts_table",
    )

    st.download_button(
        "⬇ Export CSV",
        data=df.to_csv(index=False).encode("utf-8"),
        file_name="receipts.csv",
        mime="text/csv",
        key="receipts_export",
    )

    index = selected_index(event.selection.rows if event and event.selection else [], len(items))
    if index is None:
        st.caption("Select a row to view, delete or restore it.")
        return False

    receipt = items[index]
    row = df.iloc[index]
    if not can_modify(receipt, auth):
        st.caption("You can only view or modify your own receipts.")
        return False

    st.markdown(f"**{row['Receipt No']}** • {row['Investor']} • {format_inr(row['Amount'])}")
    if st.button("👁 View / Download", key=f"view_{row['ID']}"):
        st.session_state[VIEW_STATE_KEY] = row["ID"]
        return True

    try:
        if ReceiptsService.is_deleted(receipt):
            if st.button("♻️ Restore", key=f"restore_{row['ID']}"):
                ReceiptsService.restore(auth, row["ID"])
                SessionManager.set_flash(f"Receipt {row['Receipt No']} restored.", scope="transactions")
                return True
        else:
            reason = st.text_input("Reason for deletion", value="deleted by user", key=f"delete_reason_{row['ID']}")
            if st.button("🗑️ Delete", type="primary", key=f"delete_{row['ID']}"):
                ReceiptsService.delete(auth, row["ID"], reason)
                SessionManager.set_flash(f"Receipt {row['Receipt No']} deleted.", scope="transactions")
                return True
    except ApiError as e:
        log.error(f"Receipt action failed for {row['ID']}: {e}")
        st.error(f"Failed: {e.message}")
    return False
