"""
Google-related schemas
"""
from typing import Any, Dict, Optional
from pydantic import BaseModel


class OAuthToken(BaseModel):
    """Token endpoint response - held only for the duration of one exchange"""
    access_token: str
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None

    @classmethod
    def from_token_response(cls, data: Dict[str, Any]) -> "OAuthToken":
        return cls(
            access_token=data["access_token"],
            refresh_token=data.get("refresh_token"),
            expires_in=data.get("expires_in"),
        )
