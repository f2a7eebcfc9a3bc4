"""Session state management service."""
from __future__ import annotations
from typing import Optional
import streamlit as st

from catalog import load_reference_data
from core.logger import get_logger
from gateway import AuthSession, ReceiptsApi
from models.user import UserProfile
from render import PdfRegenerator
from wizard import ReceiptWizard

log = get_logger("ui/services/session_manager")


class SessionManager:
    """Centralized session state management."""

    @staticmethod
    def init_session() -> None:
        """Initialize session-specific state."""
        if "auth" not in st.session_state:
            st.session_state["auth"] = AuthSession(ReceiptsApi())
            log.debug("Auth session created")

        if "wizard" not in st.session_state:
            st.session_state["wizard"] = ReceiptWizard(
                load_reference_data(),
                session=st.session_state["auth"],
            )

        if "pdf_regenerator" not in st.session_state:
            st.session_state["pdf_regenerator"] = None

        if "flash" not in st.session_state:
            st.session_state["flash"] = {}

    @staticmethod
    def get_auth() -> AuthSession:
        SessionManager.init_session()
        return st.session_state["auth"]

    @staticmethod
    def get_api() -> ReceiptsApi:
        return SessionManager.get_auth().api

    @staticmethod
    def current_user() -> Optional[UserProfile]:
        return SessionManager.get_auth().current_user()

    @staticmethod
    def get_wizard() -> ReceiptWizard:
        SessionManager.init_session()
        return st.session_state["wizard"]

    @staticmethod
    def get_pdf_regenerator() -> PdfRegenerator:
        """Regenerator for the preview step, created on first use."""
        SessionManager.init_session()
        regen = st.session_state["pdf_regenerator"]
        if regen is None:
            regen = PdfRegenerator()
            st.session_state["pdf_regenerator"] = regen
        return regen

    @staticmethod
    def release_pdf_regenerator() -> None:
        """Drop the preview's regenerator and its rendered file."""
        regen = st.session_state.get("pdf_regenerator")
        if regen is not None:
            regen.close()
            st.session_state["pdf_regenerator"] = None

    @staticmethod
    def set_flash(message: Optional[str], scope: str = "wizard") -> None:
        """One-shot message shown on the next rerun by the page owning ``scope``."""
        SessionManager.init_session()
        st.session_state["flash"][scope] = message

    @staticmethod
    def pop_flash(scope: str = "wizard") -> Optional[str]:
        SessionManager.init_session()
        return st.session_state["flash"].pop(scope, None)

    @staticmethod
    def logout() -> None:
        """Sign out and clear everything tied to the user."""
        SessionManager.release_pdf_regenerator()
        SessionManager.get_auth().logout()
        SessionManager.get_wizard().reset()
        log.info("Session cleared on logout")
