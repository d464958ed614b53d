"""HTTP access to the LiteLLM proxy."""

from .client import LiteLLMClient, handle_response

__all__ = ["LiteLLMClient", "handle_response"]
