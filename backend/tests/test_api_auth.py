"""
Tests for the browser-facing endpoints (/auth, /callback, /, /health).
"""
from urllib.parse import parse_qs, urlparse

import httpx

from relay.services.google import SCOPES

MOCK_TOKENS_RESPONSE = {
    "access_token": "mock-access-token",
    "refresh_token": "mock-refresh-token",
    "expires_in": 3599,
    "token_type": "Bearer",
}


class TestAuthStart:
    """Tests for GET /auth."""

    def test_redirects_to_google(self, client):
        response = client.get("/auth", follow_redirects=False)

        assert response.status_code == 302
        location = urlparse(response.headers["location"])
        assert f"{location.scheme}://{location.netloc}{location.path}" == (
            "https://accounts.google.com/o/oauth2/v2/auth"
        )

        params = parse_qs(location.query)
        assert params["client_id"] == ["test-client-id"]
        assert params["redirect_uri"] == ["http://testserver/callback"]
        assert params["response_type"] == ["code"]
        assert params["access_type"] == ["offline"]
        assert params["prompt"] == ["consent"]
        assert params["scope"] == [" ".join(SCOPES)]

    def test_scopes_cover_calendar_gmail_and_drive(self, client):
        response = client.get("/auth", follow_redirects=False)

        location = response.headers["location"]
        assert (
            "scope=https%3A%2F%2Fwww.googleapis.com%2Fauth%2Fgmail.modify"
            "%20https%3A%2F%2Fwww.googleapis.com%2Fauth%2Fuserinfo.email"
            "%20https%3A%2F%2Fwww.googleapis.com%2Fauth%2Fcalendar.events"
            "%20https%3A%2F%2Fwww.googleapis.com%2Fauth%2Fdrive.readonly"
        ) in location

    def test_configured_redirect_uri_wins(self, client, settings):
        settings.google_redirect_uri = "https://relay.example.com/callback"

        response = client.get("/auth", follow_redirects=False)

        params = parse_qs(urlparse(response.headers["location"]).query)
        assert params["redirect_uri"] == ["https://relay.example.com/callback"]

    def test_missing_client_id_is_500_html(self, client, settings):
        settings.google_client_id = None

        response = client.get("/auth", follow_redirects=False)

        assert response.status_code == 500
        assert response.headers["content-type"].startswith("text/html")
        assert "GOOGLE_CLIENT_ID" in response.text


class TestAuthCallback:
    """Tests for GET /callback."""

    def test_success_stores_token_in_browser(self, client, google_upstream):
        google_upstream.respond(200, json=MOCK_TOKENS_RESPONSE)

        response = client.get("/callback", params={"code": "ABC123"})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert 'localStorage.setItem("google_token", "mock-access-token")' in response.text
        assert "google_login_time" in response.text
        assert 'window.location.href = "/"' in response.text

    def test_exchange_request_is_form_encoded(self, client, google_upstream):
        google_upstream.respond(200, json=MOCK_TOKENS_RESPONSE)

        client.get("/callback", params={"code": "ABC123"})

        [request] = google_upstream.requests
        assert str(request.url) == "https://oauth2.googleapis.com/token"
        assert request.headers["content-type"] == "application/x-www-form-urlencoded"
        form = parse_qs(request.content.decode())
        assert form == {
            "code": ["ABC123"],
            "client_id": ["test-client-id"],
            "client_secret": ["test-client-secret"],
            "redirect_uri": ["http://testserver/callback"],
            "grant_type": ["authorization_code"],
        }

    def test_missing_code_is_400(self, client, google_upstream):
        response = client.get("/callback")

        assert response.status_code == 400
        assert "No authorization code received" in response.text
        assert google_upstream.requests == []

    def test_provider_error_is_shown(self, client):
        response = client.get(
            "/callback",
            params={"error": "access_denied", "error_description": "User said no"},
        )

        assert response.status_code == 400
        assert "access_denied: User said no" in response.text

    def test_rejected_code_is_400(self, client, google_upstream):
        google_upstream.respond(400, json={"error": "invalid_grant"})

        response = client.get("/callback", params={"code": "used-code"})

        assert response.status_code == 400
        assert "Token exchange failed" in response.text
        assert "invalid_grant" in response.text
        assert len(google_upstream.requests) == 1

    def test_missing_client_secret_is_500(self, client, settings, google_upstream):
        settings.google_client_secret = None

        response = client.get("/callback", params={"code": "ABC123"})

        assert response.status_code == 500
        assert "GOOGLE_CLIENT_SECRET" in response.text
        assert google_upstream.requests == []

    def test_network_error_is_500(self, client, google_upstream):
        google_upstream.fail(httpx.ConnectError("connection refused"))

        response = client.get("/callback", params={"code": "ABC123"})

        assert response.status_code == 500
        assert "connection refused" in response.text

    def test_token_cannot_break_out_of_script(self, client, google_upstream):
        google_upstream.respond(200, json={"access_token": "</script><script>alert(1)</script>"})

        response = client.get("/callback", params={"code": "ABC123"})

        assert "</script><script>alert(1)" not in response.text
        assert "<\\/script>" in response.text

    def test_error_text_is_escaped(self, client):
        response = client.get("/callback", params={"error": "<b>bad</b>"})

        assert "<b>bad</b>" not in response.text
        assert "&lt;b&gt;bad&lt;/b&gt;" in response.text


class TestPages:
    """Tests for / and /health."""

    def test_index_serves_html(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert 'href="/auth"' in response.text
        assert "google_token" in response.text

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"ok": True}
