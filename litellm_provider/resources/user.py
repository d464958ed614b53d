# Copyright 2025 CNOE Contributors
# SPDX-License-Identifier: Apache-2.0

"""LiteLLM user resource

Create, read, update, delete and import for LiteLLM proxy users. Every
operation takes the caller's ``ResourceData`` and updates it in place.
"""

import logging
import time
import uuid
from typing import Optional

import httpx
from pydantic import ValidationError

from litellm_provider.api.client import LiteLLMClient, handle_response
from litellm_provider.config import LiteLLMConfig
from litellm_provider.errors import (
    ConsistencyTimeoutError,
    DecodeError,
    NotFoundError,
    TransportError,
)
from litellm_provider.models.user import (
    USER_ATTRIBUTES,
    USER_FIELDS,
    UserDesiredState,
    UserRemoteRecord,
)
from litellm_provider.resources.state import ResourceData

logger = logging.getLogger(__name__)

ENDPOINT_USER_NEW = "/user/new"
ENDPOINT_USER_INFO = "/user/info"
ENDPOINT_USER_UPDATE = "/user/update"
ENDPOINT_USER_DELETE = "/user/delete"


def build_user_data(data: ResourceData, user_id: str) -> dict:
    """Validate the tracked attributes and turn them into a request body.

    Raises:
        pydantic.ValidationError: If the attributes do not describe a valid user.
    """
    attributes = {}
    for key in USER_ATTRIBUTES:
        value, ok = data.get_ok(key)
        if ok:
            attributes[key] = value
    return UserDesiredState.model_validate(attributes).to_wire(user_id)


class UserResource:
    """Adapter between a ``ResourceData`` record and the LiteLLM user endpoints."""

    def __init__(self, client: LiteLLMClient, config: Optional[LiteLLMConfig] = None):
        self.client = client
        self.config = config or client.config

    def _send(self, method: str, path: str, action: str, **kwargs) -> httpx.Response:
        try:
            return self.client.make_request(method, path, **kwargs)
        except TransportError as e:
            raise TransportError(f"error {action}: {e}") from e

    def create(self, data: ResourceData) -> UserRemoteRecord:
        user_id = str(uuid.uuid4())
        user_data = build_user_data(data, user_id)

        logger.debug(f"Create user request payload: {user_data}")

        response = self._send("POST", ENDPOINT_USER_NEW, "creating user", data=user_data)
        handle_response(response, "creating user")

        data.set_id(user_id)
        logger.info(f"User created with ID: {user_id}")

        record = self.wait_until_readable(user_id)
        self._apply(data, record)
        return record

    def wait_until_readable(self, user_id: str) -> UserRemoteRecord:
        """Poll /user/info until a freshly created user shows up.

        The proxy does not always serve a new user on the very next read.
        Only not-found answers are retried; anything else propagates.

        Raises:
            ConsistencyTimeoutError: If the user is still missing once
                ``create_consistency_timeout`` has elapsed.
        """
        deadline = time.monotonic() + self.config.create_consistency_timeout
        attempt = 0
        while True:
            attempt += 1
            try:
                record = self.fetch(user_id)
            except NotFoundError:
                if time.monotonic() >= deadline:
                    logger.error(f"User {user_id} not readable after {attempt} attempt(s)")
                    raise ConsistencyTimeoutError(user_id, self.config.create_consistency_timeout)
                logger.debug(f"User {user_id} not readable yet (attempt {attempt}), retrying")
                time.sleep(self.config.consistency_poll_interval)
                continue

            if attempt > 1:
                logger.info(f"User {user_id} readable after {attempt} attempts")
            return record

    def fetch(self, user_id: str) -> UserRemoteRecord:
        """Fetch one user.

        Raises:
            NotFoundError: If the proxy has no such user.
            TransportError, APIError, DecodeError: On any other failure.
        """
        response = self._send(
            "GET", ENDPOINT_USER_INFO, "reading user", params={"user_id": user_id}
        )

        if response.status_code == httpx.codes.NOT_FOUND:
            raise NotFoundError(user_id, f"user {user_id} not found")
        handle_response(response, "reading user")

        try:
            row = UserRemoteRecord.extract_row(response.json())
        except (ValueError, TypeError) as e:
            raise DecodeError(f"error decoding user info response: {e}") from e

        if row is None:
            raise NotFoundError(user_id, f"user {user_id} not found")

        try:
            return UserRemoteRecord.model_validate(row)
        except ValidationError as e:
            raise DecodeError(f"error decoding user info response: {e}") from e

    def read(self, data: ResourceData) -> Optional[UserRemoteRecord]:
        """Refresh ``data`` from the proxy.

        Returns None, and clears the id, when the user no longer exists.
        """
        logger.info(f"Reading user with ID: {data.id}")

        try:
            record = self.fetch(data.id)
        except NotFoundError:
            logger.warning(f"user with ID {data.id} not found, removing from state")
            data.set_id("")
            return None

        self._apply(data, record)
        return record

    def update(self, data: ResourceData) -> Optional[UserRemoteRecord]:
        user_data = build_user_data(data, data.id)
        logger.debug(f"Update user request payload: {user_data}")

        response = self._send("POST", ENDPOINT_USER_UPDATE, "updating user", data=user_data)
        handle_response(response, "updating user")

        logger.info(f"Successfully updated user with ID: {data.id}")
        return self.read(data)

    def delete(self, data: ResourceData) -> None:
        logger.info(f"Deleting user with ID: {data.id}")

        # /user/delete only takes lists
        delete_data = {"user_ids": [data.id]}

        response = self._send("POST", ENDPOINT_USER_DELETE, "deleting user", data=delete_data)
        if response.status_code == httpx.codes.NOT_FOUND:
            logger.warning(f"user with ID {data.id} already deleted, removing from state")
            data.set_id("")
            return
        handle_response(response, "deleting user")

        logger.info(f"Successfully deleted user with ID: {data.id}")
        data.set_id("")

    def import_state(self, data: ResourceData) -> UserRemoteRecord:
        """Adopt an existing user given only its id.

        Raises:
            NotFoundError: If there is nothing to import.
        """
        user_id = data.id
        record = self.read(data)
        if record is None:
            raise NotFoundError(user_id, f"cannot import user {user_id}: not found")
        return record

    @staticmethod
    def _apply(data: ResourceData, record: UserRemoteRecord) -> None:
        # write-only inputs keep whatever the caller set
        for field in USER_FIELDS:
            if field.read_back:
                data.set(field.attribute, getattr(record, field.wire_name))
