# Copyright 2025 CNOE Contributors
# SPDX-License-Identifier: Apache-2.0

"""Exceptions raised by the LiteLLM client and resource adapters."""

from typing import Optional


class LiteLLMProviderError(Exception):
    """Base class for every error raised by this package."""


class TransportError(LiteLLMProviderError):
    """The request could not be sent or the response could not be read."""


class APIError(LiteLLMProviderError):
    """The LiteLLM proxy answered with a non-success status code."""

    def __init__(self, action: str, status_code: int, body: str = ""):
        self.action = action
        self.status_code = status_code
        self.body = body
        super().__init__(f"error {action}: API returned {status_code}: {body}")


class DecodeError(LiteLLMProviderError):
    """The response body did not have the expected shape."""


class NotFoundError(LiteLLMProviderError):
    """The requested resource does not exist on the proxy."""

    def __init__(self, resource_id: str, message: Optional[str] = None):
        self.resource_id = resource_id
        super().__init__(message or f"resource {resource_id} not found")


class ConsistencyTimeoutError(LiteLLMProviderError):
    """A freshly written resource did not become readable in time."""

    def __init__(self, resource_id: str, timeout: float):
        self.resource_id = resource_id
        self.timeout = timeout
        super().__init__(
            f"timed out after {timeout:g}s waiting for {resource_id} to become readable"
        )
