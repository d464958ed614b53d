# Copyright 2025 CNOE Contributors
# SPDX-License-Identifier: Apache-2.0

"""User data models."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class UserRole(str, Enum):
    PROXY_ADMIN = "proxy_admin"
    PROXY_ADMIN_VIEWER = "proxy_admin_viewer"
    INTERNAL_USER = "internal_user"
    INTERNAL_USER_VIEWER = "internal_user_viewer"
    TEAM = "team"
    CUSTOMER = "customer"


@dataclass(frozen=True)
class UserField:
    """How one declarative attribute travels over the wire."""

    attribute: str
    wire_name: str
    # False for write-only inputs that /user/info never returns
    read_back: bool = True


# The proxy reads send_invite_email, not the attribute name.
USER_FIELDS: Tuple[UserField, ...] = (
    UserField("user_email", "user_email"),
    UserField("user_alias", "user_alias"),
    UserField("key_alias", "key_alias", read_back=False),
    UserField("user_role", "user_role"),
    UserField("max_budget", "max_budget"),
    UserField("models", "models"),
    UserField("tpm_limit", "tpm_limit"),
    UserField("rpm_limit", "rpm_limit"),
    UserField("auto_create_key", "auto_create_key", read_back=False),
    UserField("send_user_invite", "send_invite_email", read_back=False),
    UserField("teams", "teams"),
)

USER_ATTRIBUTES: Tuple[str, ...] = tuple(f.attribute for f in USER_FIELDS)


class UserDesiredState(BaseModel):
    """Desired attributes of a LiteLLM user."""

    model_config = ConfigDict(extra="forbid")

    user_email: Optional[str] = None
    user_alias: Optional[str] = None
    key_alias: Optional[str] = None
    user_role: UserRole
    max_budget: Optional[float] = None
    models: Optional[List[str]] = None
    tpm_limit: Optional[int] = None
    rpm_limit: Optional[int] = None
    auto_create_key: Optional[bool] = None
    send_user_invite: Optional[bool] = None
    teams: Optional[List[str]] = None

    def to_wire(self, user_id: str) -> Dict[str, Any]:
        """Request body for /user/new and /user/update.

        Unset attributes are left out entirely rather than sent as null.
        """
        values = self.model_dump(mode="json", exclude_none=True)
        payload: Dict[str, Any] = {"user_id": user_id}
        for field in USER_FIELDS:
            if field.attribute in values:
                payload[field.wire_name] = values[field.attribute]
        return payload


class UserRemoteRecord(BaseModel):
    """A user row as returned by /user/info."""

    model_config = ConfigDict(extra="ignore")

    user_id: str
    user_email: Optional[str] = None
    user_alias: Optional[str] = None
    user_role: Optional[str] = None
    max_budget: Optional[float] = None
    models: List[str] = Field(default_factory=list)
    tpm_limit: Optional[int] = None
    rpm_limit: Optional[int] = None
    teams: List[str] = Field(default_factory=list)

    @staticmethod
    def extract_row(body: Any) -> Optional[Dict[str, Any]]:
        """Pull the user row out of a /user/info body.

        Returns None when the body describes no user. Some proxy versions
        answer 200 with a bare ``{"spend": 0}`` row for unknown ids.

        Raises:
            TypeError: If the body is not a JSON object.
        """
        if not isinstance(body, dict):
            raise TypeError(f"expected a JSON object, got {type(body).__name__}")

        row = body["user_info"] if "user_info" in body else body
        if row is None:
            return None
        if not isinstance(row, dict):
            raise TypeError(f"expected user_info to be an object, got {type(row).__name__}")
        if not row.get("user_id"):
            return None

        # null list columns come back as None
        return {k: v for k, v in row.items() if not (k in ("models", "teams") and v is None)}
