"""
Google OAuth endpoints - browser facing, answer with HTML
"""
import html
import json
from typing import Optional

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from relay.config import Settings, get_settings
from relay.core import get_http_client
from relay.services.exceptions import ConfigurationError, RelayException
from relay.services.google import build_auth_url, exchange_code_for_token

router = APIRouter()


def _redirect_uri(request: Request, settings: Settings) -> str:
    """Same value for /auth and /callback - Google requires an exact match"""
    if settings.google_redirect_uri:
        return settings.google_redirect_uri
    return f"{request.url.scheme}://{request.url.netloc}/callback"


def _message_page(title: str, message: str, back_link: bool = True) -> str:
    """Minimal HTML page with an escaped message"""
    link = '<p><a href="/">Go back</a></p>' if back_link else ""
    return (
        f"<html><body><h1>{html.escape(title)}</h1>"
        f"<p>{html.escape(message)}</p>{link}</body></html>"
    )


def _token_page(access_token: str) -> str:
    """Store the token in localStorage, then go home"""
    # JSON string literal, with "</" broken up so it cannot close the script tag
    token_literal = json.dumps(access_token).replace("</", "<\\/")
    return f"""<!DOCTYPE html>
<html>
<head>
  <title>Authentication Successful</title>
  <style>
    body {{ font-family: system-ui; padding: 2rem; text-align: center; }}
    .success {{ color: #28a745; font-size: 1.2rem; margin: 2rem 0; }}
  </style>
</head>
<body>
  <h1>✅ Authentication Successful!</h1>
  <p class="success">Redirecting...</p>
  <script>
    localStorage.setItem("google_token", {token_literal});
    localStorage.setItem("google_login_time", Date.now().toString());
    window.location.href = "/";
  </script>
</body>
</html>"""


@router.get("/auth")
def google_auth_start(request: Request, settings: Settings = Depends(get_settings)):
    """Redirect the browser to Google's consent screen"""
    if not settings.google_client_id:
        return HTMLResponse(
            content=_message_page("Error", "GOOGLE_CLIENT_ID is required in environment variables", back_link=False),
            status_code=500,
        )

    auth_url = build_auth_url(
        settings.google_auth_url,
        settings.google_client_id,
        _redirect_uri(request, settings),
    )
    return RedirectResponse(auth_url, status_code=302)


@router.get("/callback")
async def google_auth_callback(
    request: Request,
    code: Optional[str] = None,
    error: Optional[str] = None,
    error_description: Optional[str] = None,
    settings: Settings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    """
    Handle Google OAuth callback.
    Exchanges the code once and hands the access token to the browser.
    """
    if not code:
        message = error or "No authorization code received"
        if error_description:
            message = f"{message}: {error_description}"
        return HTMLResponse(content=_message_page("Authentication Failed", message), status_code=400)

    try:
        token = await exchange_code_for_token(
            client,
            settings.google_token_url,
            code,
            settings.google_client_id,
            settings.google_client_secret,
            _redirect_uri(request, settings),
        )
    except ConfigurationError as e:
        return HTMLResponse(content=_message_page("Error", e.message, back_link=False), status_code=500)
    except RelayException as e:
        title = "Authentication Failed" if e.status_code < 500 else "Error"
        return HTMLResponse(content=_message_page(title, e.message), status_code=e.status_code)

    print("🔑 Google authorization code exchanged", flush=True)
    return HTMLResponse(content=_token_page(token.access_token))
