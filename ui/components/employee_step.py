"""Step 1: employee."""
from __future__ import annotations
import streamlit as st

from wizard import ReceiptWizard


def render_employee_step(wizard: ReceiptWizard, locked: bool = False) -> bool:
    """
    Employee code entry with live directory match.

    Args:
        wizard: Wizard to update
        locked: Signed-in employees cannot type another code

    Returns:
        True when the user pressed Continue and the wizard advanced
    """
    st.subheader("👤 Employee")
    code = st.text_input(
        "Employee Code",
        value=wizard.employee_code,
        placeholder="e.g., ECS497",
        disabled=locked,
        key="wizard_employee_code",
    )
    if not locked:
        wizard.set_employee_code(code)

    if wizard.employee_code.strip():
        match = wizard.employee_match()
        if match is not None:
            col1, col2 = st.columns(2)
            col1.text_input("Name", value=match.employeeName, disabled=True)
            col2.text_input("Branch", value=match.branch, disabled=True)
        else:
            st.warning(wizard.employee_notice())

    if st.button("Continue ➜", disabled=not wizard.can_continue(), type="primary", key="employee_continue"):
        return wizard.continue_from_employee()
    return False
