# Copyright 2025 CNOE Contributors
# SPDX-License-Identifier: Apache-2.0

"""Unit tests for the user data models."""

import pytest
from pydantic import ValidationError

from litellm_provider.models.user import (
    USER_FIELDS,
    UserDesiredState,
    UserRemoteRecord,
    UserRole,
)


class TestUserFields:
    """Tests for the attribute to wire name table."""

    def test_every_desired_attribute_has_one_entry(self):
        attributes = [f.attribute for f in USER_FIELDS]
        assert sorted(attributes) == sorted(UserDesiredState.model_fields)

    def test_wire_names_are_unique(self):
        wire_names = [f.wire_name for f in USER_FIELDS]
        assert len(wire_names) == len(set(wire_names))

    def test_divergent_wire_names(self):
        mapping = {f.attribute: f.wire_name for f in USER_FIELDS}
        assert mapping["send_user_invite"] == "send_invite_email"
        assert mapping["auto_create_key"] == "auto_create_key"

    def test_read_back_fields_exist_on_remote_record(self):
        for field in USER_FIELDS:
            if field.read_back:
                assert field.wire_name in UserRemoteRecord.model_fields


class TestUserDesiredState:
    """Tests for desired state validation and serialization."""

    @pytest.mark.parametrize("role", [r.value for r in UserRole])
    def test_accepts_every_role(self, role):
        assert UserDesiredState(user_role=role).user_role.value == role

    def test_rejects_unknown_role(self):
        with pytest.raises(ValidationError):
            UserDesiredState(user_role="admin")

    def test_rejects_unknown_attribute(self):
        with pytest.raises(ValidationError):
            UserDesiredState(user_role="team", send_email_invite=True)

    def test_to_wire_serializes_role_as_string(self):
        payload = UserDesiredState(user_role=UserRole.CUSTOMER).to_wire("abc")
        assert payload == {"user_id": "abc", "user_role": "customer"}

    def test_to_wire_never_emits_null(self):
        payload = UserDesiredState(user_role="team", user_email=None, teams=None).to_wire("abc")
        assert None not in payload.values()


class TestUserRemoteRecord:
    """Tests for decoding /user/info bodies."""

    def test_extracts_nested_user_info(self):
        body = {
            "user_id": "abc",
            "user_info": {"user_id": "abc", "user_role": "team", "models": ["gpt-4"]},
            "keys": [],
            "teams": [{"team_id": "t1"}],
        }

        record = UserRemoteRecord.model_validate(UserRemoteRecord.extract_row(body))

        assert record.user_role == "team"
        assert record.models == ["gpt-4"]
        # teams come from the user row, not the expanded team objects
        assert record.teams == []

    def test_accepts_flat_body(self):
        row = UserRemoteRecord.extract_row({"user_id": "abc", "max_budget": 3.5})
        assert row == {"user_id": "abc", "max_budget": 3.5}

    @pytest.mark.parametrize(
        "body",
        [
            {"user_id": "abc", "user_info": None},
            {"user_id": "abc", "user_info": {"spend": 0}},
            {"spend": 0},
        ],
    )
    def test_missing_user_row(self, body):
        assert UserRemoteRecord.extract_row(body) is None

    def test_rejects_non_object_body(self):
        with pytest.raises(TypeError):
            UserRemoteRecord.extract_row([])

    def test_ignores_unknown_columns(self):
        record = UserRemoteRecord.model_validate(
            {"user_id": "abc", "sso_user_id": None, "organization_memberships": []}
        )
        assert record.user_id == "abc"
