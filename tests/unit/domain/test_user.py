"""
Unit tests for the User entity.
"""
import pytest

from social_api.domain.entities.user import User
from social_api.domain.exceptions import ValidationException


def make_user(**overrides):
    data = {"username": "alice", "password_hash": "$2b$04$hash", "nickname": "Alice"}
    data.update(overrides)
    return User(**data)


class TestUser:

    def test_new_user_has_no_session(self):
        assert make_user().has_active_session is False

    def test_session_follows_fingerprint(self):
        assert make_user(refresh_token_hash="$2b$04$fp").has_active_session is True

    def test_profile_omits_credentials(self):
        user = make_user(refresh_token_hash="$2b$04$fp")

        profile = user.to_profile()

        assert profile.id == user.id
        assert profile.username == "alice"
        assert not hasattr(profile, "password_hash")
        assert not hasattr(profile, "refresh_token_hash")

    def test_identity_equality(self):
        user = make_user()

        assert user != make_user()
        assert user == user

    @pytest.mark.parametrize("field,value", [
        ("username", ""),
        ("username", "x" * 21),
        ("nickname", "  "),
        ("password_hash", ""),
    ])
    def test_invalid_fields(self, field, value):
        with pytest.raises(ValidationException) as exc_info:
            make_user(**{field: value})

        assert field in exc_info.value.errors
