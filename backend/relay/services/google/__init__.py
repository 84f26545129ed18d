"""
Google Services - Stateless OAuth
Tokens are returned to the caller - nothing is stored server-side
"""
from .auth import SCOPES, build_auth_url, exchange_code_for_token
from .local_flow import run_local_auth_flow

__all__ = [
    "SCOPES",
    "build_auth_url",
    "exchange_code_for_token",
    "run_local_auth_flow",
]
