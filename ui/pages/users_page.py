"""Users page - admin user management."""
from __future__ import annotations
from typing import Optional
import pandas as pd
import streamlit as st
from pydantic import ValidationError

from core.logger import get_logger
from gateway import ApiError
from models.user import UserDraft, UserProfile
from ui.services import SessionManager, UsersService

log = get_logger("ui/pages/users_page")

ROLES = ["employee", "admin"]


def _user_form(key: str, user: Optional[UserProfile] = None) -> Optional[UserDraft]:
    """Create/edit form. Returns a validated draft on submit."""
    with st.form(key, clear_on_submit=user is None):
        col1, col2 = st.columns(2)
        emp_code = col1.text_input("Employee Code", value=user.emp_code if user else "", disabled=user is not None)
        name = col2.text_input("Name", value=user.name if user else "")
        email = col1.text_input("Email", value=(user.email or "") if user else "")
        branch = col2.text_input("Branch", value=user.branch if user else "")
        role = col1.selectbox("Role", ROLES, index=ROLES.index(user.role) if user else 0)
        password = col2.text_input("Password", type="password") if user is None else None
        submitted = st.form_submit_button("Save" if user else "Create User", type="primary")

    if not submitted:
        return None
    try:
        return UserDraft(
            emp_code=emp_code,
            name=name.strip(),
            email=email.strip() or None,
            branch=branch.strip(),
            role=role,
            password=password or None,
        )
    except ValidationError as e:
        st.error(f"Invalid user: {e.errors()[0]['msg']}")
        return None


def render() -> None:
    """Render the user management page (admins only)."""
    SessionManager.init_session()
    auth = SessionManager.get_auth()

    st.header("👥 Users")
    flash = SessionManager.pop_flash(scope="users")
    if flash:
        st.success(flash)
    if not auth.is_admin:
        st.warning("Only administrators can manage users.")
        return

    try:
        users = UsersService.list(auth)
    except ApiError as e:
        log.error(f"Failed to load users: {e}")
        st.error(f"Failed to load users: {e.message}")
        return

    if users:
        st.dataframe(
            pd.DataFrame([u.model_dump(exclude={"id"}) for u in users]),
            hide_index=True,
            use_container_width=True,
        )
    else:
        st.info("No users yet.")

    with st.expander("➕ Add User"):
        draft = _user_form("user_create")
        if draft is not None:
            if not draft.password:
                st.error("Password is required for new users.")
            else:
                try:
                    UsersService.create(auth, draft)
                    SessionManager.set_flash(f"User {draft.emp_code} created.", scope="users")
                    st.rerun()
                except ApiError as e:
                    st.error(f"Failed to create user: {e.message}")

    if not users:
        return

    st.subheader("✏️ Edit User")
    by_label = {f"{u.emp_code} • {u.name}": u for u in users if u.id}
    label = st.selectbox("User", list(by_label), key="user_edit_select")
    if not label:
        return
    user = by_label[label]

    draft = _user_form(f"user_edit_{user.id}", user)
    if draft is not None:
        try:
            UsersService.update(auth, user.id, draft)
            SessionManager.set_flash("User updated.", scope="users")
            st.rerun()
        except ApiError as e:
            st.error(f"Failed to update user: {e.message}")

    col1, col2 = st.columns(2)
    with col1:
        new_password = st.text_input("New Password", type="password", key=f"user_pw_{user.id}")
        if st.button("🔑 Change Password", key=f"user_pw_btn_{user.id}"):
            try:
                UsersService.change_password(auth, user.id, new_password)
                st.success("Password changed.")
            except (ApiError, ValueError) as e:
                st.error(f"Failed to change password: {e}")
    with col2:
        current = auth.current_user()
        is_self = current is not None and current.id == user.id
        if st.button("🗑️ Delete User", disabled=is_self, key=f"user_del_{user.id}"):
            try:
                UsersService.delete(auth, user.id)
                SessionManager.set_flash(f"User {user.emp_code} deleted.", scope="users")
                st.rerun()
            except ApiError as e:
                st.error(f"Failed to delete user: {e.message}")
