"""Pydantic schemas for API models"""
from .google import OAuthToken
from .proxy import ConnectorConfig, ProxyRequest, ProxyResult, ProxyError

__all__ = [
    # Google
    "OAuthToken",
    # Proxy
    "ConnectorConfig",
    "ProxyRequest",
    "ProxyResult",
    "ProxyError",
]
