"""Stored receipt viewer with PDF reprint."""
from __future__ import annotations
import streamlit as st

from core.logger import get_logger
from gateway import ApiError, AuthSession
from render import build_receipt_pdf, pdf_filename
from ui.components.receipt_view import render_receipt_view
from ui.services import ReceiptsService, view_error_message

log = get_logger("ui/components/saved_receipt")


def render_saved_receipt(auth: AuthSession, receipt_id: str) -> bool:
    """
    Show a saved receipt fetched from the backend with a download button.

    Returns:
        True when the viewer was closed
    """
    with st.container(border=True):
        closed = st.button("✖ Close", key=f"close_view_{receipt_id}")
        try:
            with st.spinner("Loading receipt..."):
                record = ReceiptsService.fetch(auth, receipt_id)
        except ApiError as e:
            log.error(f"Failed to load receipt {receipt_id}: {e}")
            st.error(view_error_message(e))
            return closed

        render_receipt_view(record)
        try:
            pdf_bytes = build_receipt_pdf(record)
        except Exception as e:
            log.error(f"PDF render failed for receipt {receipt_id}: {e}")
            st.warning("PDF not available")
        else:
            st.download_button(
                "⬇ Download PDF",
                data=pdf_bytes,
                file_name=pdf_filename(record),
                mime="application/pdf",
                key=f"saved_pdf_{receipt_id}",
            )
    return closed
