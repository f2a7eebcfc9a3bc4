"""On-screen receipt layout."""
from __future__ import annotations
import streamlit as st

from core.config import config
from models.receipt import ReceiptRecord
from render import build_preview


def render_receipt_view(record: ReceiptRecord) -> None:
    """Show every section of the receipt, two sections per row."""
    st.markdown(f"### {config.company_name}")
    st.caption(config.company_tagline)

    sections = build_preview(record)
    for i in range(0, len(sections), 2):
        cols = st.columns(2)
        for col, section in zip(cols, sections[i:i + 2]):
            with col.container(border=True):
                st.markdown(f"**{section.title}**")
                for row in section.rows:
                    st.caption(row.label)
                    st.text(row.value)
