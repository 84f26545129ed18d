"""
Relay exceptions - services raise, routes translate to JSON or HTML
"""
import json
from typing import Any, Union


class StructuredErrorBody:
    """Upstream error body that parsed as JSON"""

    def __init__(self, data: Any):
        self.data = data

    def render(self) -> str:
        return json.dumps(self.data, indent=2, ensure_ascii=False)


class TextErrorBody:
    """Upstream error body that is not JSON - passed through as-is"""

    def __init__(self, text: str):
        self.text = text

    def render(self) -> str:
        return self.text


ErrorBody = Union[StructuredErrorBody, TextErrorBody]


def parse_error_body(text: str) -> ErrorBody:
    """Classify an upstream error body as structured JSON or opaque text"""
    try:
        return StructuredErrorBody(json.loads(text))
    except (json.JSONDecodeError, TypeError):
        return TextErrorBody(text)


class RelayException(Exception):
    """Base class for every error a request can end in"""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(RelayException):
    """Required server configuration is missing"""

    status_code = 400


class NotAuthenticatedError(RelayException):
    """Caller did not supply a Google access token"""

    status_code = 400


class InvalidInputError(RelayException):
    """Caller input is missing or malformed"""

    status_code = 400


class UpstreamHTTPError(RelayException):
    """Non-2xx response from an upstream service"""

    def __init__(self, service: str, upstream_status: int, body: ErrorBody):
        self.service = service
        self.upstream_status = upstream_status
        self.body = body
        super().__init__(f"{service} error ({upstream_status}): {body.render()}")

    @property
    def status_code(self) -> int:
        # Upstream 5xx collapses to a generic 500
        return 500 if self.upstream_status >= 500 else self.upstream_status


class TokenExchangeError(UpstreamHTTPError):
    """Google refused the authorization code"""

    def __init__(self, upstream_status: int, text: str):
        super().__init__("Google token endpoint", upstream_status, TextErrorBody(text))
        self.message = f"Token exchange failed: {text}"

    @property
    def status_code(self) -> int:
        return 400


class UpstreamTransportError(RelayException):
    """Network failure or unreadable upstream response"""

    status_code = 500
