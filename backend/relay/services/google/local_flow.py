"""
Local OAuth flow for the command line - opens the browser, waits for the
redirect on localhost and returns the tokens
"""
from datetime import datetime, timezone
from typing import List

from google_auth_oauthlib.flow import InstalledAppFlow

from relay.schemas.google import OAuthToken
from relay.services.exceptions import ConfigurationError
from .auth import SCOPES


def _client_config(client_id: str, client_secret: str, auth_url: str, token_url: str) -> dict:
    return {
        "installed": {
            "client_id": client_id,
            "client_secret": client_secret,
            "auth_uri": auth_url,
            "token_uri": token_url,
            "redirect_uris": ["http://localhost"],
        }
    }


def run_local_auth_flow(
    client_id: str,
    client_secret: str,
    auth_url: str,
    token_url: str,
    port: int,
    scopes: List[str] = SCOPES,
) -> OAuthToken:
    """Run the installed-app flow on localhost:port"""
    if not client_id or not client_secret:
        raise ConfigurationError("GOOGLE_CLIENT_ID and GOOGLE_CLIENT_SECRET are required")

    flow = InstalledAppFlow.from_client_config(
        _client_config(client_id, client_secret, auth_url, token_url),
        scopes=scopes,
    )
    credentials = flow.run_local_server(
        host="localhost",
        port=port,
        access_type="offline",
        prompt="consent",
        success_message="Authentication successful! You can close this window.",
    )

    expires_in = None
    if credentials.expiry:
        # google-auth keeps expiry as naive UTC
        now = datetime.now(timezone.utc).replace(tzinfo=None)
        expires_in = max(int((credentials.expiry - now).total_seconds()), 0)

    return OAuthToken(
        access_token=credentials.token,
        refresh_token=credentials.refresh_token,
        expires_in=expires_in,
    )
