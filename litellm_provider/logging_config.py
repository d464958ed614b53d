# Copyright 2025 CNOE Contributors
# SPDX-License-Identifier: Apache-2.0

"""
Logging setup with credential redaction.

Request payloads and error bodies are logged at DEBUG and ERROR. The filter
installed here keeps the proxy master key and any bearer token out of those
records.

Usage:
    from litellm_provider.logging_config import configure_logging

    configure_logging("DEBUG", secrets=[config.api_key])
"""

import logging
import re
from typing import Iterable, List, Optional

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

# Placeholder for redacted tokens
REDACTED = "[REDACTED]"

# LiteLLM master and virtual keys: sk- prefix
_LITELLM_KEY_RE = re.compile(r'\bsk-[A-Za-z0-9\-_]{4,}')

# Generic Bearer auth in headers or output
_BEARER_TOKEN_RE = re.compile(
    r'(Bearer\s+)([A-Za-z0-9_\-\.=+/]{8,})',
    re.IGNORECASE,
)


def sanitize(text: str, secrets: Optional[Iterable[str]] = None) -> str:
    """Replace known secrets and key-shaped strings in ``text`` with [REDACTED]."""
    if not text:
        return text

    sanitized = text
    for secret in secrets or ():
        if secret and len(secret) > 4 and secret in sanitized:
            sanitized = sanitized.replace(secret, REDACTED)

    sanitized = _BEARER_TOKEN_RE.sub(lambda m: f"{m.group(1)}{REDACTED}", sanitized)
    sanitized = _LITELLM_KEY_RE.sub(REDACTED, sanitized)
    return sanitized


class CredentialRedactionFilter(logging.Filter):
    """Filter that rewrites log records so they carry no credentials."""

    def __init__(self, secrets: Optional[Iterable[str]] = None):
        super().__init__()
        self.secrets: List[str] = [s for s in (secrets or ()) if s]

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        sanitized = sanitize(message, self.secrets)
        if sanitized != message:
            record.msg = sanitized
            record.args = None
        return True


def configure_logging(level: str = "INFO", secrets: Optional[Iterable[str]] = None) -> None:
    """Configure root logging and attach the redaction filter to every handler."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(level.upper())

    redaction_filter = CredentialRedactionFilter(secrets)
    for handler in root_logger.handlers:
        for existing in list(handler.filters):
            if isinstance(existing, CredentialRedactionFilter):
                handler.removeFilter(existing)
        handler.addFilter(redaction_filter)

    # httpx logs every request line at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
