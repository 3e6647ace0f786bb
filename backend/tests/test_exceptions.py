from __future__ import annotations

from anggota.core.exceptions import (
    ForbiddenError,
    UserNotFoundError,
    ValidationFailed,
    validation_errors_from_pydantic,
)


def test_validation_errors_group_by_field() -> None:
    errors = [
        {"loc": ("body", "email"), "msg": "Field required"},
        {"loc": ("body", "email"), "msg": "value is not a valid email address"},
        {"loc": ("query", "page"), "msg": "Input should be greater than or equal to 1"},
    ]
    assert validation_errors_from_pydantic(errors) == {
        "email": ["Field required", "value is not a valid email address"],
        "page": ["Input should be greater than or equal to 1"],
    }


def test_model_level_error_uses_tagged_field() -> None:
    errors = [{"loc": ("body",), "msg": "does not match", "ctx": {"field": "password"}}]
    assert validation_errors_from_pydantic(errors) == {"password": ["does not match"]}


def test_error_bodies() -> None:
    assert ValidationFailed.for_field("email", "taken").to_body() == {
        "message": "The given data was invalid.",
        "errors": {"email": ["taken"]},
    }
    assert UserNotFoundError().to_body() == {"error": "User not found."}
    assert ForbiddenError().status_code == 403
