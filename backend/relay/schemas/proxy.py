"""
Prompt proxy schemas
"""
from typing import Any, Dict, Optional
from pydantic import BaseModel


class ConnectorConfig(BaseModel):
    """MCP connector binding for one Google service"""
    server_label: str
    connector_id: str

    def to_tool(self, authorization: str) -> Dict[str, Any]:
        """Tool descriptor attached to the completion call"""
        return {
            "type": "mcp",
            "server_label": self.server_label,
            "connector_id": self.connector_id,
            "authorization": authorization,
            "require_approval": "never",
        }


class ProxyRequest(BaseModel):
    """Prompt plus Google access token sent by the browser"""
    input: Optional[str] = None
    token: Optional[str] = None


class ProxyResult(BaseModel):
    """Extracted plain-text answer"""
    result: str


class ProxyError(BaseModel):
    """Upstream failure as seen by the browser"""
    error: str
    errorDetails: Optional[str] = None
    status: Optional[int] = None
