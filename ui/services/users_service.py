"""User administration calls."""
from __future__ import annotations
from typing import List

from core.logger import get_logger
from gateway import AuthSession, NotAuthenticatedError, unwrap_items
from models.user import UserDraft, UserProfile

log = get_logger("ui/services/users_service")


class UsersService:
    """Admin-only user management."""

    @staticmethod
    def _token(auth: AuthSession) -> str:
        if not auth.is_authenticated:
            raise NotAuthenticatedError()
        return auth.token

    @staticmethod
    def list(auth: AuthSession) -> List[UserProfile]:
        items, _ = unwrap_items(auth.api.list_users(UsersService._token(auth)))
        return [UserProfile.model_validate(u) for u in items]

    @staticmethod
    def create(auth: AuthSession, draft: UserDraft) -> None:
        auth.api.create_user(UsersService._token(auth), draft.model_dump(exclude_none=True))
        log.info(f"User created: emp_code={draft.emp_code} role={draft.role}")

    @staticmethod
    def update(auth: AuthSession, user_id: str, draft: UserDraft) -> None:
        # Password changes go through their own endpoint
        payload = draft.model_dump(exclude_none=True, exclude={"password"})
        auth.api.update_user(UsersService._token(auth), user_id, payload)
        log.info(f"User updated: id={user_id}")

    @staticmethod
    def change_password(auth: AuthSession, user_id: str, password: str) -> None:
        if not password:
            raise ValueError("Password cannot be empty")
        auth.api.change_password(UsersService._token(auth), user_id, password)
        log.info(f"Password changed: id={user_id}")

    @staticmethod
    def delete(auth: AuthSession, user_id: str) -> None:
        auth.api.delete_user(UsersService._token(auth), user_id)
        log.info(f"User deleted: id={user_id}")
