# Copyright 2025 CNOE Contributors
# SPDX-License-Identifier: Apache-2.0

"""
LiteLLM Provider

Declarative management of LiteLLM proxy users: desired attributes go in,
REST calls against the proxy come out, and the proxy's answer is written back
into a caller-owned resource state record.
"""

from .config import LiteLLMConfig
from .errors import (
    APIError,
    ConsistencyTimeoutError,
    DecodeError,
    LiteLLMProviderError,
    NotFoundError,
    TransportError,
)
from .api.client import LiteLLMClient, handle_response
from .models.user import UserDesiredState, UserRemoteRecord, UserRole
from .resources.state import ResourceData, StateStore
from .resources.user import UserResource

__all__ = [
    "LiteLLMConfig",
    "LiteLLMClient",
    "handle_response",
    "UserResource",
    "UserDesiredState",
    "UserRemoteRecord",
    "UserRole",
    "ResourceData",
    "StateStore",
    # Errors
    "LiteLLMProviderError",
    "TransportError",
    "APIError",
    "DecodeError",
    "NotFoundError",
    "ConsistencyTimeoutError",
]
