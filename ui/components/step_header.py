"""Wizard progress header."""
from __future__ import annotations
import streamlit as st

from wizard import Step


def render_step_header(step: Step) -> None:
    cols = st.columns(len(Step))
    for col, s in zip(cols, Step):
        marker = "🔵" if s == step else ("✅" if s < step else "⚪")
        col.markdown(f"{marker} **{s.value}. {s.label}**" if s == step else f"{marker} {s.value}. {s.label}")
    st.progress(step.progress, text=f"Step {step.value} of {len(Step)}")
