"""
Unit tests for the request and response schemas.
"""

import pytest
from pydantic import ValidationError

from userserver.db import User
from userserver.schemas import UserOut, UserPayload, users_to_json


class TestUserPayload:
    """Tests for decoding request bodies."""

    def test_full_payload(self):
        payload = UserPayload.model_validate_json(
            '{"name":"Ana","email":"ana@x.com","age":30,"phone":"555"}'
        )

        assert payload.model_dump() == {
            "name": "Ana", "email": "ana@x.com", "age": 30, "phone": "555",
        }

    def test_optional_fields_absent(self):
        payload = UserPayload.model_validate_json('{"name":"Ana","email":"ana@x.com"}')

        assert payload.age is None
        assert payload.phone is None

    def test_optional_fields_null(self):
        payload = UserPayload.model_validate_json(
            '{"name":"Ana","email":"ana@x.com","age":null,"phone":null}'
        )

        assert payload.age is None
        assert payload.phone is None

    def test_spanish_field_names(self):
        payload = UserPayload.model_validate_json(
            '{"name":"Ana","email":"ana@x.com","edad":41,"telefono":"600"}'
        )

        assert payload.age == 41
        assert payload.phone == "600"

    def test_id_is_ignored(self):
        payload = UserPayload.model_validate_json('{"id":99,"name":"Ana","email":"a@x"}')

        assert "id" not in payload.model_dump()

    @pytest.mark.parametrize("body", [
        "",
        "not json",
        '{"name":"Ana"',
        '{"email":"ana@x.com"}',
        '{"name":"Ana"}',
        '{"name":"Ana","email":"a@x","age":"30"}',
        '{"name":"Ana","email":"a@x","age":30.5}',
        '{"name":"Ana","email":"a@x","phone":555}',
        '{"name":1,"email":"a@x"}',
        '[]',
    ])
    def test_rejected_bodies(self, body: str):
        with pytest.raises(ValidationError):
            UserPayload.model_validate_json(body)


class TestUserOut:
    """Tests for the JSON view of a user."""

    def test_wire_format(self):
        user = User(id=1, name="Ana", email="ana@x.com", age=30, phone="555")

        assert UserOut.model_validate(user).to_json() == (
            '{"id":1,"name":"Ana","email":"ana@x.com","edad":30,"telefono":"555"}'
        )

    def test_null_optional_fields(self):
        user = User(id=2, name="Bo", email="bo@x.com", age=None, phone=None)

        assert UserOut.model_validate(user).to_json() == (
            '{"id":2,"name":"Bo","email":"bo@x.com","edad":null,"telefono":null}'
        )

    def test_list(self):
        users = [
            UserOut(id=1, name="A", email="a@x", age=1, phone="1"),
            UserOut(id=2, name="B", email="b@x"),
        ]

        assert users_to_json(users) == (
            '[{"id":1,"name":"A","email":"a@x","edad":1,"telefono":"1"},'
            '{"id":2,"name":"B","email":"b@x","edad":null,"telefono":null}]'
        )

    def test_empty_list(self):
        assert users_to_json([]) == "[]"
