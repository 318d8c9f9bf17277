# =============================================================================
# tests/test_auth.py - Authentication Tests
# =============================================================================
# This module contains tests for:
# - Supabase JWT verification (HS256)
# - The protected-route middleware
# - The session endpoint (optional authentication)
# =============================================================================

import time
import uuid

import pytest
from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient
from jose import jwt

from app.auth import ProtectedRouteMiddleware, decode_token
from app.auth.middleware import SESSION_COOKIE, is_protected
from app.config import settings
from app.main import app as api_app


def make_token(sub: str | None = None, secret: str | None = None, **claims) -> str:
    payload = {
        "aud": "authenticated",
        "exp": int(time.time()) + 3600,
        "email": "coach@example.com",
        **claims,
    }
    if sub is not None:
        payload["sub"] = sub
    return jwt.encode(payload, secret or settings.SUPABASE_JWT_SECRET, algorithm="HS256")


# =============================================================================
# decode_token
# =============================================================================

class TestDecodeToken:

    def test_valid_token(self):
        user_id = str(uuid.uuid4())
        user = decode_token(make_token(sub=user_id))

        assert str(user.id) == user_id
        assert user.email == "coach@example.com"

    def test_wrong_secret(self):
        with pytest.raises(HTTPException) as exc_info:
            decode_token(make_token(sub=str(uuid.uuid4()), secret="not-the-secret"))
        assert exc_info.value.status_code == 401

    def test_expired(self):
        token = make_token(sub=str(uuid.uuid4()), exp=int(time.time()) - 60)
        with pytest.raises(HTTPException) as exc_info:
            decode_token(token)
        assert exc_info.value.detail == "Token has expired"

    def test_wrong_audience(self):
        with pytest.raises(HTTPException):
            decode_token(make_token(sub=str(uuid.uuid4()), aud="anon"))

    def test_missing_sub(self):
        with pytest.raises(HTTPException) as exc_info:
            decode_token(make_token())
        assert "missing user ID" in exc_info.value.detail

    def test_malformed_sub(self):
        with pytest.raises(HTTPException) as exc_info:
            decode_token(make_token(sub="not-a-uuid"))
        assert "malformed" in exc_info.value.detail

    def test_garbage(self):
        with pytest.raises(HTTPException):
            decode_token("not.a.jwt")


# =============================================================================
# ProtectedRouteMiddleware
# =============================================================================

@pytest.fixture
def guarded_client():
    app = FastAPI()
    app.add_middleware(ProtectedRouteMiddleware, prefixes=["/admin"], login_url="/login")

    @app.get("/admin/teams")
    async def admin_teams():
        return {"ok": True}

    @app.get("/administrator")
    async def lookalike():
        return {"ok": True}

    @app.get("/public")
    async def public():
        return {"ok": True}

    return TestClient(app)


class TestIsProtected:

    @pytest.mark.parametrize("path, expected", [
        ("/admin", True),
        ("/admin/", True),
        ("/admin/teams/1", True),
        ("/administrator", False),
        ("/", False),
        ("/api/v1/teams", False),
    ])
    def test_segment_prefix(self, path, expected):
        assert is_protected(path, ["/admin"]) is expected


class TestProtectedRouteMiddleware:

    def test_public_path_passes(self, guarded_client):
        assert guarded_client.get("/public").status_code == 200
        assert guarded_client.get("/administrator").status_code == 200

    def test_browser_redirected_to_login(self, guarded_client):
        response = guarded_client.get(
            "/admin/teams",
            headers={"Accept": "text/html,application/xhtml+xml"},
            follow_redirects=False,
        )
        assert response.status_code == 307
        assert response.headers["location"] == "/login"

    def test_api_client_gets_401(self, guarded_client):
        response = guarded_client.get("/admin/teams", headers={"Accept": "application/json"})
        assert response.status_code == 401
        assert response.json()["code"] == "AUTH_REQUIRED"

    def test_bearer_token_passes(self, guarded_client):
        response = guarded_client.get("/admin/teams", headers={"Authorization": "Bearer abc"})
        assert response.status_code == 200

    def test_session_cookie_passes(self, guarded_client):
        guarded_client.cookies.set(SESSION_COOKIE, "abc")
        assert guarded_client.get("/admin/teams").status_code == 200

    def test_empty_bearer_rejected(self, guarded_client):
        response = guarded_client.get("/admin/teams", headers={"Authorization": "Bearer "})
        assert response.status_code == 401


# =============================================================================
# /api/v1/auth/session
# =============================================================================

class TestSessionEndpoint:
    """Uses the optional dependency: bad or missing tokens are not errors."""

    @pytest.fixture
    def client(self):
        return TestClient(api_app)

    def test_no_token(self, client):
        body = client.get("/api/v1/auth/session").json()
        assert body == {"authenticated": False, "login_url": "/login"}

    def test_invalid_token(self, client):
        response = client.get("/api/v1/auth/session", headers={"Authorization": "Bearer nope"})
        assert response.status_code == 200
        assert response.json()["authenticated"] is False

    def test_valid_token(self, client):
        user_id = str(uuid.uuid4())
        response = client.get(
            "/api/v1/auth/session",
            headers={"Authorization": f"Bearer {make_token(sub=user_id)}"},
        )
        assert response.json() == {
            "authenticated": True,
            "user_id": user_id,
            "email": "coach@example.com",
        }
