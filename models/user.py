"""Portal user models."""
from __future__ import annotations
from typing import Literal, Optional
from pydantic import BaseModel, Field, field_validator


class UserProfile(BaseModel):
    """Profile returned by ``GET /users/me`` and the user listing."""
    id: Optional[str] = None
    emp_code: str = ""
    name: str = ""
    branch: str = ""
    role: Literal["admin", "employee"] = "employee"
    email: Optional[str] = None

    model_config = {
        "extra": "ignore",
    }

    @field_validator("id", mode="before")
    @classmethod
    def _id_to_str(cls, value):
        return None if value is None else str(value)

    @field_validator("emp_code", "name", "branch", mode="before")
    @classmethod
    def _strip_strings(cls, value):
        return str(value).strip() if value is not None else ""

    @field_validator("role", mode="before")
    @classmethod
    def _normalize_role(cls, value):
        return "admin" if str(value or "").lower() == "admin" else "employee"

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


class UserDraft(BaseModel):
    """Payload for creating or editing a user from the admin screen."""
    emp_code: str = Field(min_length=1)
    name: str = Field(min_length=1)
    email: Optional[str] = None
    branch: str = ""
    role: Literal["admin", "employee"] = "employee"
    password: Optional[str] = None

    @field_validator("emp_code", mode="before")
    @classmethod
    def _upper_code(cls, value):
        return str(value or "").strip().upper()
