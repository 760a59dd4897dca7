"""
Tests for sign-in, callback and sign-out handling.
"""
from unittest.mock import patch

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient

from event_connect.auth import identity
from event_connect.auth.msal_flow import build_msal_app, complete_auth_code_flow
from event_connect.core.config import AppConfig
from event_connect.main import app

from tests.fakes import FakeDirectory


FLOW = {"auth_uri": "https://login.microsoftonline.com/common/oauth2/v2.0/authorize?state=abc", "state": "abc"}
TOKEN_RESULT = {
    "access_token": "delegated-token",
    "expires_in": 3600,
    "id_token_claims": {"preferred_username": "megan@contoso.com", "name": "Megan Bowen"},
}


def _sign_in(client):
    with patch("event_connect.routes.auth.start_auth_code_flow", return_value=FLOW):
        client.get("/auth/login", follow_redirects=False)
    with patch("event_connect.routes.auth.complete_auth_code_flow", return_value=TOKEN_RESULT):
        return client.get("/auth/callback", params={"code": "c", "state": "abc"}, follow_redirects=False)


class TestLogin:
    def test_login_redirects_to_identity_provider(self):
        client = TestClient(app)

        with patch("event_connect.routes.auth.start_auth_code_flow", return_value=FLOW):
            response = client.get("/auth/login", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == FLOW["auth_uri"]

    def test_login_without_identity_config_is_unavailable(self):
        client = TestClient(app)

        with patch("event_connect.routes.auth.load_config", return_value=AppConfig()):
            response = client.get("/auth/login", follow_redirects=False)

        assert response.status_code == 503


class TestCallback:
    def test_callback_signs_user_in(self):
        client = TestClient(app)
        directory = FakeDirectory(users={"megan@contoso.com": "Megan Bowen"})

        response = _sign_in(client)

        assert response.status_code == 302
        assert response.headers["location"] == "/"

        with patch("event_connect.routes.home.create_directory_client", return_value=directory) as factory:
            page = client.get("/")

        signed_in = factory.call_args[0][0]
        assert signed_in.email == "megan@contoso.com"
        assert signed_in.access_token == "delegated-token"
        assert "Megan Bowen" in page.text
        assert "Sign in" not in page.text

    def test_callback_without_pending_flow_goes_home(self):
        client = TestClient(app)

        with patch("event_connect.routes.auth.complete_auth_code_flow") as complete:
            response = client.get("/auth/callback", params={"code": "c"}, follow_redirects=False)

        assert response.headers["location"] == "/"
        complete.assert_not_called()

    def test_failed_redemption_goes_to_error_page(self):
        client = TestClient(app)

        with patch("event_connect.routes.auth.start_auth_code_flow", return_value=FLOW):
            client.get("/auth/login", follow_redirects=False)
        with patch(
            "event_connect.routes.auth.complete_auth_code_flow",
            return_value={"error": "invalid_grant", "error_description": "AADSTS70000"},
        ):
            response = client.get("/auth/callback", params={"code": "c", "state": "abc"}, follow_redirects=False)

        assert response.headers["location"] == "/error"


class TestLogout:
    def test_logout_drops_token(self):
        client = TestClient(app)
        _sign_in(client)
        assert identity.token_store.size() >= 1

        response = client.get("/auth/logout", follow_redirects=False)
        assert response.headers["location"] == "/"

        page = client.get("/")
        assert "Sign in" in page.text


class TestIdentityStore:
    def test_expired_token_means_signed_out(self):
        client = TestClient(app)
        _sign_in(client)

        identity.token_store.clear()

        page = client.get("/")
        assert "Sign in" in page.text

    def test_require_identity_raises_without_session(self):
        class _Request:
            session = {}

        with pytest.raises(identity.ReauthenticationRequired):
            identity.require_identity(_Request())

    def test_expired_cache_entry_is_not_returned(self):
        identity.token_store.set("stale", "token", ttl_seconds=-1)

        class _Request:
            session = {identity.SESSION_ID_KEY: "stale", identity.SESSION_USER_KEY: {"email": "megan@contoso.com"}}

        assert identity.current_identity(_Request()) is None

    def test_abandoned_expired_tokens_are_purged_on_sign_in(self):
        identity.token_store.clear()

        for _ in range(50):
            request = _SessionRequest()
            identity.sign_in(request, "megan@contoso.com", "Megan Bowen", "token", expires_in=-1)

        assert identity.token_store.size() == 0

    def test_sign_in_replaces_token_of_same_session(self):
        identity.token_store.clear()
        request = _SessionRequest()

        identity.sign_in(request, "megan@contoso.com", "Megan Bowen", "first", expires_in=3600)
        first_id = request.session[identity.SESSION_ID_KEY]
        identity.sign_in(request, "megan@contoso.com", "Megan Bowen", "second", expires_in=3600)

        assert identity.token_store.size() == 1
        assert identity.token_store.get(first_id) is None
        assert identity.current_identity(request).access_token == "second"


class _SessionRequest:
    def __init__(self):
        self.session = {}


class TestMsalFlow:
    def test_build_requires_client_credentials(self):
        with pytest.raises(HTTPException) as exc_info:
            build_msal_app(AppConfig(ms_client_id="id"))
        assert exc_info.value.status_code == 503

    def test_state_mismatch_is_reported_as_error(self):
        config = AppConfig(ms_client_id="id", ms_client_secret="secret")

        with patch("event_connect.auth.msal_flow.msal.ConfidentialClientApplication") as msal_app:
            msal_app.return_value.acquire_token_by_auth_code_flow.side_effect = ValueError("state mismatch")
            result = complete_auth_code_flow(config, FLOW, {"code": "c", "state": "other"})

        assert result["error"] == "invalid_auth_response"
