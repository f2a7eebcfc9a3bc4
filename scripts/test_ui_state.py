#!/usr/bin/env python3
"""Test script for session flash messages and table selection."""
from __future__ import annotations
import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

# Add project root to path
ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from ui.components.receipts_table import selected_index
from ui.services import SessionManager


def _streamlit() -> MagicMock:
    fake = MagicMock()
    fake.session_state = {}
    return fake


def test_flash_is_scoped_per_page():
    with patch("ui.services.session_manager.st", _streamlit()):
        SessionManager.set_flash("User ECS101 created.", scope="users")
        SessionManager.set_flash("Receipt ECS-1 deleted.", scope="transactions")

        # The wizard page renders first and must not take other pages' messages
        assert SessionManager.pop_flash() is None
        assert SessionManager.pop_flash(scope="users") == "User ECS101 created."
        assert SessionManager.pop_flash(scope="users") is None
        assert SessionManager.pop_flash(scope="transactions") == "Receipt ECS-1 deleted."

        SessionManager.set_flash("Receipt saved successfully! Receipt ID: 42")
        assert SessionManager.pop_flash() == "Receipt saved successfully! Receipt ID: 42"
    print("✅ PASS: flash scope")


def test_selection_outside_list_is_ignored():
    assert selected_index([], 3) is None
    assert selected_index([0], 3) == 0
    assert selected_index([2], 3) == 2
    # List shrank after a filter change
    assert selected_index([5], 3) is None
    assert selected_index([0], 0) is None
    assert selected_index([-1], 3) is None
    print("✅ PASS: table selection")


if __name__ == "__main__":
    test_flash_is_scoped_per_page()
    test_selection_outside_list_is_ignored()
    print("\nAll UI state tests passed")
