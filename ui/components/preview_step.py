"""Step 4: preview, PDF and save."""
from __future__ import annotations
from typing import Optional
import streamlit as st

from render import PdfRegenerator
from ui.components.receipt_view import render_receipt_view
from wizard import ReceiptWizard

PDF_WAIT_S = 10.0


def render_preview_step(wizard: ReceiptWizard, regenerator: PdfRegenerator) -> Optional[str]:
    """
    Receipt preview with a downloadable PDF kept in sync by the regenerator.

    Returns:
        "back", "save" or None
    """
    st.subheader("🧾 Preview")
    record = wizard.final_data
    if record is None:
        st.warning("Nothing to preview yet.")
        return "back"

    if wizard.save_error:
        st.error(f"Error: {wizard.save_error}")

    regenerator.request(record)
    if st.session_state.get("pdf_force_regenerate"):
        st.session_state["pdf_force_regenerate"] = False
        regenerator.regenerate(record)

    with st.spinner("Generating PDF…"):
        regenerator.wait_idle(timeout=PDF_WAIT_S)

    artifact = regenerator.artifact
    col_pdf, col_regen = st.columns([3, 1])
    with col_pdf:
        if artifact is not None:
            st.download_button(
                "⬇ Download PDF",
                data=artifact.read_bytes(),
                file_name=artifact.filename,
                mime="application/pdf",
                key=f"pdf_download_{artifact.generation}",
            )
        else:
            st.info(regenerator.status())
            if regenerator.last_error:
                st.caption(regenerator.last_error)
    with col_regen:
        if st.button("🔄 Regenerate PDF", disabled=regenerator.busy, key="pdf_regenerate"):
            st.session_state["pdf_force_regenerate"] = True
            st.rerun()

    st.divider()
    render_receipt_view(record)
    st.divider()

    col1, col2 = st.columns(2)
    if col1.button("⬅ Back", disabled=wizard.is_saving, key="preview_back"):
        return "back"
    if col2.button("💾 Save to Server", disabled=wizard.is_saving, type="primary", key="preview_save"):
        return "save"
    return None
