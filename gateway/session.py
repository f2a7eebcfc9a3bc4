"""Logged-in user session, passed explicitly to whoever needs the token."""
from __future__ import annotations
from typing import Optional

from core.logger import get_logger
from gateway.client import ReceiptsApi
from gateway.errors import ApiError
from models.user import UserProfile

log = get_logger("gateway/session")


class AuthSession:
    """Holds the bearer token and profile of the signed-in employee."""

    def __init__(self, api: ReceiptsApi):
        self.api = api
        self.token: str = ""
        self._user: Optional[UserProfile] = None

    def login(self, emp_code: str, password: str) -> UserProfile:
        """
        Authenticate and fetch the profile.

        Raises:
            ApiError: If the backend rejects the credentials or is unreachable
        """
        out = self.api.login(emp_code.strip(), password)
        token = (out or {}).get("token") if isinstance(out, dict) else None
        if not token:
            raise ApiError("Login response did not include a token", payload=out)

        profile = UserProfile.model_validate(self.api.me(token))
        self.token = token
        self._user = profile
        log.info(f"Signed in: emp_code={profile.emp_code} role={profile.role}")
        return profile

    def logout(self) -> None:
        if self._user is not None:
            log.info(f"Signed out: emp_code={self._user.emp_code}")
        self.token = ""
        self._user = None

    def current_user(self) -> Optional[UserProfile]:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    @property
    def is_admin(self) -> bool:
        return self._user is not None and self._user.is_admin
