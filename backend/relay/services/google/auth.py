"""
Google OAuth - Stateless authorization-code flow
Tokens are handed to the browser, backend never stores them
"""
import urllib.parse
from typing import List, Optional

import httpx

from relay.schemas.google import OAuthToken
from relay.services.exceptions import (
    ConfigurationError,
    InvalidInputError,
    TokenExchangeError,
    UpstreamTransportError,
)

# Calendar + Gmail + Drive, plus the account email
SCOPES = [
    "https://www.googleapis.com/auth/gmail.modify",
    "https://www.googleapis.com/auth/userinfo.email",
    "https://www.googleapis.com/auth/calendar.events",
    "https://www.googleapis.com/auth/drive.readonly",
]


def build_auth_url(
    auth_endpoint: str,
    client_id: str,
    redirect_uri: str,
    scopes: List[str] = SCOPES,
) -> str:
    """Build the Google consent URL (offline access, always prompt)"""
    params = {
        "client_id": client_id,
        "redirect_uri": redirect_uri,
        "response_type": "code",
        "scope": " ".join(scopes),
        "access_type": "offline",
        "prompt": "consent",
    }
    return f"{auth_endpoint}?{urllib.parse.urlencode(params, quote_via=urllib.parse.quote)}"


async def exchange_code_for_token(
    client: httpx.AsyncClient,
    token_url: str,
    code: Optional[str],
    client_id: Optional[str],
    client_secret: Optional[str],
    redirect_uri: str,
) -> OAuthToken:
    """
    Exchange an authorization code for tokens.

    Called exactly once per code - Google codes are single-use.

    Raises:
        ConfigurationError: client id/secret not configured
        InvalidInputError: empty code
        TokenExchangeError: Google answered non-2xx (status and body kept verbatim)
        UpstreamTransportError: network failure or unreadable body
    """
    if not client_id or not client_secret:
        raise ConfigurationError("GOOGLE_CLIENT_ID and GOOGLE_CLIENT_SECRET are required")
    if not code:
        raise InvalidInputError("No authorization code received")

    try:
        response = await client.post(
            token_url,
            data={
                "code": code,
                "client_id": client_id,
                "client_secret": client_secret,
                "redirect_uri": redirect_uri,
                "grant_type": "authorization_code",
            },
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )
    except httpx.HTTPError as e:
        print(f"❌ Token exchange request failed: {e}", flush=True)
        raise UpstreamTransportError(str(e) or type(e).__name__) from e

    if not response.is_success:
        print(f"❌ Token exchange error: {response.status_code}", flush=True)
        raise TokenExchangeError(response.status_code, response.text)

    try:
        return OAuthToken.from_token_response(response.json())
    except (ValueError, KeyError, TypeError) as e:
        raise UpstreamTransportError(f"Unexpected token response: {e}") from e
