"""Core utilities"""
from .http_client import get_http_client
from .llm_client import get_llm_client
from .logging import log_llm_request, log_llm_response

__all__ = [
    "get_http_client",
    "get_llm_client",
    "log_llm_request",
    "log_llm_response",
]
