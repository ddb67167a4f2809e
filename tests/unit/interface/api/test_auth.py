"""Unit tests for request authentication helpers."""

from uuid import uuid4

import pytest
from fastapi import HTTPException

from relay.config import AuthSettings
from relay.domain.service import JWTService
from relay.interface.api.auth import require_user_id, token_from_request


class TestTokenFromRequest:
    """Tests for token_from_request."""

    def test_cookie_wins_over_header(self):
        assert token_from_request("cookie", "Bearer header") == "cookie"

    def test_bearer_header(self):
        assert token_from_request(None, "Bearer abc.def") == "abc.def"
        assert token_from_request(None, "bearer abc.def") == "abc.def"

    def test_missing_or_other_scheme(self):
        assert token_from_request(None, None) is None
        assert token_from_request(None, "Basic dXNlcg==") is None


class TestRequireUserId:
    """Tests for require_user_id."""

    def test_valid_token(self):
        jwt_service = JWTService(auth_settings=AuthSettings())
        user_id = str(uuid4())
        token = jwt_service.create_token(user_id)

        assert require_user_id(jwt_service, None, f"Bearer {token}", "test") == user_id

    def test_missing_token_is_401(self):
        jwt_service = JWTService(auth_settings=AuthSettings())

        with pytest.raises(HTTPException) as exc_info:
            require_user_id(jwt_service, None, None, "publish events")

        assert exc_info.value.status_code == 401
        assert "publish events" in exc_info.value.detail
