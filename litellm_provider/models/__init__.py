"""LiteLLM data models."""

from .user import USER_FIELDS, UserDesiredState, UserField, UserRemoteRecord, UserRole

__all__ = [
    "USER_FIELDS",
    "UserDesiredState",
    "UserField",
    "UserRemoteRecord",
    "UserRole",
]
