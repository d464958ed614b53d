"""Declarative resources managed against the LiteLLM proxy."""

from .state import ResourceData, StateStore
from .user import UserResource, build_user_data

__all__ = ["ResourceData", "StateStore", "UserResource", "build_user_data"]
