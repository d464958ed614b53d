# Copyright 2025 CNOE Contributors
# SPDX-License-Identifier: Apache-2.0

"""Configuration for the LiteLLM provider

The configuration is an explicit object handed to the client and the resource
adapters. ``LiteLLMConfig.from_env`` builds one from environment variables
(and a ``.env`` file, if present).
"""

import os
import logging
from typing import Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

TRUTHY_VALUES = ("true", "1", "yes")


def _first_env(*names: str) -> Optional[str]:
    for name in names:
        value = os.getenv(name)
        if value:
            return value
    return None


def _env_bool(name: str, default: bool = False) -> bool:
    return os.getenv(name, str(default)).lower() in TRUTHY_VALUES


class LiteLLMConfig(BaseModel):
    """Connection and behaviour settings for talking to a LiteLLM proxy."""

    api_base: str = Field(description="Base URL of the LiteLLM proxy, e.g. http://localhost:4000")
    api_key: str = Field(description="Master key sent as a bearer token")
    timeout: float = Field(default=30.0, gt=0)
    insecure_skip_verify: bool = False
    create_consistency_timeout: float = Field(default=10.0, ge=0)
    consistency_poll_interval: float = Field(default=1.0, gt=0)

    @field_validator("api_base")
    @classmethod
    def _normalize_api_base(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value:
            raise ValueError("api_base must not be empty")
        return value

    @field_validator("api_key")
    @classmethod
    def _require_api_key(cls, value: str) -> str:
        if not value:
            raise ValueError("api_key must not be empty")
        return value

    @classmethod
    def from_env(cls, **overrides) -> "LiteLLMConfig":
        """Build a configuration from the environment.

        Keyword arguments that are not ``None`` take precedence over the
        environment.

        Raises:
            ValueError: If the base URL or API key cannot be resolved.
        """
        load_dotenv(find_dotenv(usecwd=True))

        api_base = _first_env("LITELLM_API_BASE", "LITELLM_PROXY_URL")
        api_key = _first_env("LITELLM_API_KEY", "LITELLM_MASTER_KEY")

        values = {
            "api_base": api_base,
            "api_key": api_key,
            "timeout": float(os.getenv("LITELLM_TIMEOUT", "30")),
            "insecure_skip_verify": _env_bool("LITELLM_INSECURE_SKIP_VERIFY"),
            "create_consistency_timeout": float(
                os.getenv("LITELLM_CREATE_CONSISTENCY_TIMEOUT", "10")
            ),
            "consistency_poll_interval": float(
                os.getenv("LITELLM_CONSISTENCY_POLL_INTERVAL", "1")
            ),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})

        if not values["api_base"]:
            raise ValueError(
                "LITELLM_API_BASE is required. Please set the LITELLM_API_BASE "
                "(or LITELLM_PROXY_URL) environment variable."
            )
        if not values["api_key"]:
            raise ValueError(
                "LITELLM_API_KEY is required. Please set the LITELLM_API_KEY "
                "(or LITELLM_MASTER_KEY) environment variable."
            )

        if values["insecure_skip_verify"]:
            logger.warning("TLS certificate verification is disabled for the LiteLLM proxy")

        return cls(**values)
