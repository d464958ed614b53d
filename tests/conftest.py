# Copyright 2025 CNOE Contributors
# SPDX-License-Identifier: Apache-2.0

"""Shared pytest fixtures: an in-memory LiteLLM proxy behind httpx.MockTransport."""

import json
import uuid
from typing import Any, Dict, List, Optional, Tuple
from unittest.mock import patch

import httpx
import pytest

from litellm_provider.api.client import LiteLLMClient
from litellm_provider.config import LiteLLMConfig
from litellm_provider.resources.user import UserResource

API_BASE = "http://litellm.test"
API_KEY = "sk-test-master-key"

# Columns the proxy keeps on its user table
STORED_COLUMNS = (
    "user_email",
    "user_alias",
    "user_role",
    "max_budget",
    "models",
    "tpm_limit",
    "rpm_limit",
    "teams",
)


class FakeLiteLLMProxy:
    """Just enough of the LiteLLM user management API to exercise the adapter."""

    def __init__(self):
        self.users: Dict[str, Dict[str, Any]] = {}
        self.requests: List[Tuple[str, str, Optional[Dict[str, Any]]]] = []
        # path -> (status, body) forced for every request to that path
        self.failures: Dict[str, Tuple[int, Any]] = {}
        # number of /user/info calls that miss a freshly created user
        self.invisible_reads = 0
        self._pending: Dict[str, int] = {}

    def bodies(self, path: str) -> List[Dict[str, Any]]:
        return [body for _, p, body in self.requests if p == path]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content) if request.content else None
        path = request.url.path
        self.requests.append((request.method, path, body))

        if request.headers.get("Authorization") != f"Bearer {API_KEY}":
            return httpx.Response(401, json={"error": {"message": "Authentication Error"}})

        if path in self.failures:
            status, payload = self.failures[path]
            if isinstance(payload, str):
                return httpx.Response(status, text=payload)
            return httpx.Response(status, json=payload)

        if request.method == "POST" and path == "/user/new":
            return self._new_user(body)
        if request.method == "GET" and path == "/user/info":
            return self._user_info(request.url.params.get("user_id"))
        if request.method == "POST" and path == "/user/update":
            return self._update_user(body)
        if request.method == "POST" and path == "/user/delete":
            return self._delete_users(body)
        return httpx.Response(404, json={"detail": "Not Found"})

    def _new_user(self, body: Dict[str, Any]) -> httpx.Response:
        user_id = body.get("user_id") or str(uuid.uuid4())
        row = {"user_id": user_id, "spend": 0.0, "models": [], "teams": []}
        row.update({k: body[k] for k in STORED_COLUMNS if k in body})
        self.users[user_id] = row
        self._pending[user_id] = self.invisible_reads
        response = dict(row)
        if body.get("auto_create_key", True):
            response["key"] = "sk-generated-user-key"
        return httpx.Response(200, json=response)

    def _user_info(self, user_id: Optional[str]) -> httpx.Response:
        if user_id not in self.users:
            return httpx.Response(
                404, json={"detail": {"error": f"User not found, passed user_id={user_id}"}}
            )
        if self._pending.get(user_id):
            self._pending[user_id] -= 1
            return httpx.Response(404, json={"detail": {"error": "User not found"}})
        return httpx.Response(
            200,
            json={"user_id": user_id, "user_info": self.users[user_id], "keys": [], "teams": []},
        )

    def _update_user(self, body: Dict[str, Any]) -> httpx.Response:
        user_id = body.get("user_id")
        if user_id not in self.users:
            return httpx.Response(400, json={"error": {"message": f"user {user_id} does not exist"}})
        self.users[user_id].update({k: body[k] for k in STORED_COLUMNS if k in body})
        return httpx.Response(200, json=self.users[user_id])

    def _delete_users(self, body: Dict[str, Any]) -> httpx.Response:
        user_ids = body.get("user_ids")
        for user_id in user_ids:
            if user_id not in self.users:
                return httpx.Response(
                    404, json={"detail": {"error": f"User not found, passed user_id={user_id}"}}
                )
        for user_id in user_ids:
            del self.users[user_id]
        return httpx.Response(200, json={"deleted_users": user_ids})


@pytest.fixture
def config():
    return LiteLLMConfig(
        api_base=API_BASE,
        api_key=API_KEY,
        create_consistency_timeout=5.0,
        consistency_poll_interval=0.25,
    )


@pytest.fixture
def proxy():
    return FakeLiteLLMProxy()


@pytest.fixture
def client(config, proxy):
    litellm_client = LiteLLMClient(config, transport=httpx.MockTransport(proxy))
    yield litellm_client
    litellm_client.close()


@pytest.fixture
def resource(client, config):
    return UserResource(client, config)


@pytest.fixture(autouse=True)
def no_sleep():
    """Never actually wait between consistency polls."""
    with patch("litellm_provider.resources.user.time.sleep") as mock_sleep:
        yield mock_sleep
