# Copyright 2025 CNOE Contributors
# SPDX-License-Identifier: Apache-2.0

"""LiteLLM API client

This module provides a client for interacting with the LiteLLM proxy
management API. It handles authentication, request formatting, and
the shared success/failure check applied to every response.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from litellm_provider.config import LiteLLMConfig
from litellm_provider.errors import APIError, TransportError

logger = logging.getLogger(__name__)

SUPPORTED_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE")
JSON_BODY_METHODS = ("POST", "PUT", "PATCH")

# Longest slice of an error body carried into exception messages
MAX_ERROR_BODY = 500


class LiteLLMClient:
    """Synchronous client for the LiteLLM proxy."""

    def __init__(self, config: LiteLLMConfig, transport: Optional[httpx.BaseTransport] = None):
        self.config = config
        self.client = httpx.Client(
            base_url=config.api_base,
            headers={
                "Authorization": f"Bearer {config.api_key}",
                "Content-Type": "application/json",
                "Accept": "application/json",
            },
            timeout=config.timeout,
            verify=not config.insecure_skip_verify,
            transport=transport,
        )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        self.client.close()

    def make_request(
        self,
        method: str,
        path: str,
        data: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        """
        Send a request to the LiteLLM proxy.

        Args:
            method: HTTP method
            path: API path relative to the configured base URL
            data: JSON body for POST/PUT/PATCH requests (optional)
            params: Query parameters (optional)

        Returns:
            The raw response. Status codes are not checked here; see
            ``handle_response``.

        Raises:
            ValueError: If the method is not supported.
            TransportError: If the request could not be sent or read.
        """
        method = method.upper()
        if method not in SUPPORTED_METHODS:
            raise ValueError(f"Unsupported method: {method}")

        # DO NOT log headers, they carry the master key
        logger.debug(f"Preparing {method} request to {path}")
        if params:
            logger.debug(f"Request parameters: {params}")

        try:
            response = self.client.request(
                method,
                path,
                params=params,
                json=data if method in JSON_BODY_METHODS else None,
            )
        except httpx.TimeoutException as e:
            raise TransportError(
                f"request timed out after {self.config.timeout:g} seconds: {e}"
            ) from e
        except httpx.RequestError as e:
            raise TransportError(f"request error: {e}") from e

        logger.debug(f"Response status code: {response.status_code}")
        return response


def handle_response(response: httpx.Response, action: str) -> None:
    """Raise ``APIError`` unless the response carries a 2xx status.

    Args:
        response: Response returned by ``LiteLLMClient.make_request``
        action: Operation label used in the error message, e.g. "creating user"
    """
    if response.is_success:
        return

    body = response.text[:MAX_ERROR_BODY] if response.text else ""
    logger.error(f"Error {action}: status {response.status_code}, body: {body}")
    raise APIError(action, response.status_code, body)
