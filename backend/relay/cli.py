"""
Command line entry point.

Usage:
    mcp-relay auth                       # log in, print GOOGLE_AUTHORIZATION=...
    mcp-relay ask calendar "whats on my schedule today"
    mcp-relay serve --port 8000
"""
import argparse
import asyncio
import sys
from typing import List, Optional

from relay.config import Settings, get_settings
from relay.core import get_llm_client
from relay.services.exceptions import RelayException
from relay.services.google import run_local_auth_flow
from relay.services.proxy import proxy_prompt

SERVICES = {
    "calendar": ["calendar"],
    "gmail": ["gmail"],
    "drive": ["drive"],
    "omni": ["calendar", "gmail", "drive"],
}

CREDENTIALS_HELP = """
To get these credentials:
1. Go to https://console.cloud.google.com/apis/credentials
2. Create OAuth 2.0 Client ID credentials
3. Add http://localhost:{port} to authorized redirect URIs
4. Add GOOGLE_CLIENT_ID and GOOGLE_CLIENT_SECRET to your .env file
"""


def cmd_auth(args: argparse.Namespace, settings: Settings) -> int:
    if not settings.google_client_id or not settings.google_client_secret:
        print("❌ Error: GOOGLE_CLIENT_ID and GOOGLE_CLIENT_SECRET are required in .env", file=sys.stderr)
        print(CREDENTIALS_HELP.format(port=args.port or settings.auth_port), file=sys.stderr)
        return 1

    try:
        token = run_local_auth_flow(
            settings.google_client_id,
            settings.google_client_secret,
            settings.google_auth_url,
            settings.google_token_url,
            port=args.port or settings.auth_port,
        )
    except Exception as e:
        print(f"\n❌ Authentication failed: {e}", file=sys.stderr)
        return 1

    print("\n✅ Authentication successful!\n")
    print("Add this to your .env file:\n")
    print(f"GOOGLE_AUTHORIZATION={token.access_token}\n")
    if token.refresh_token:
        print(f"GOOGLE_REFRESH_TOKEN={token.refresh_token}\n")
    return 0


async def _ask(settings: Settings, service: str, prompt: str, token: Optional[str]) -> str:
    connectors = settings.connectors()
    return await proxy_prompt(
        get_llm_client(settings),
        settings.llm_model,
        [connectors[name] for name in SERVICES[service]],
        prompt,
        token,
        route=service,
        debug=settings.debug,
    )


def cmd_ask(args: argparse.Namespace, settings: Settings) -> int:
    try:
        answer = asyncio.run(_ask(settings, args.service, args.prompt, args.token or settings.google_authorization))
    except RelayException as e:
        print(f"❌ Error: {e.message}", file=sys.stderr)
        return 1
    print(answer)
    return 0


def cmd_serve(args: argparse.Namespace, settings: Settings) -> int:
    import uvicorn

    uvicorn.run(
        "relay.main:app",
        host=args.host or settings.host,
        port=args.port or settings.port,
        reload=args.reload,
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="mcp-relay", description="Google MCP relay")
    sub = parser.add_subparsers(dest="command", required=True)

    auth = sub.add_parser("auth", help="Log in with Google and print the access token")
    auth.add_argument("--port", type=int, default=None, help="Local callback port (default: AUTH_PORT)")
    auth.set_defaults(func=cmd_auth)

    ask = sub.add_parser("ask", help="Send one prompt through the relay")
    ask.add_argument("service", choices=sorted(SERVICES))
    ask.add_argument("prompt")
    ask.add_argument("--token", default=None, help="Google access token (default: GOOGLE_AUTHORIZATION)")
    ask.set_defaults(func=cmd_ask)

    serve = sub.add_parser("serve", help="Run the HTTP relay")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)
    serve.add_argument("--reload", action="store_true")
    serve.set_defaults(func=cmd_serve)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    return args.func(args, get_settings())


if __name__ == "__main__":
    sys.exit(main())
