"""
Application Configuration
All settings loaded once from environment variables (or .env).
"""
from functools import lru_cache
from typing import Dict, List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

from relay.schemas.proxy import ConnectorConfig


class Settings(BaseSettings):
    """Application settings from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Google OAuth
    google_client_id: Optional[str] = None
    google_client_secret: Optional[str] = None
    # Derived from the request origin when unset
    google_redirect_uri: Optional[str] = None
    google_auth_url: str = "https://accounts.google.com/o/oauth2/v2/auth"
    google_token_url: str = "https://oauth2.googleapis.com/token"

    # Groq (OpenAI-compatible /responses endpoint)
    groq_api_key: Optional[str] = None
    groq_base_url: str = "https://api.groq.com/openai/v1"
    llm_model: str = "openai/gpt-oss-120b"

    # MCP connectors
    calendar_server_label: str = "googlecalendar"
    calendar_connector_id: str = "connector_googlecalendar"
    gmail_server_label: str = "gmail"
    gmail_connector_id: str = "connector_gmail"
    drive_server_label: str = "google"
    drive_connector_id: str = "connector_googledrive"

    # Outbound calls
    http_timeout_seconds: float = 120.0
    cancel_on_disconnect: bool = False

    # CLI
    google_authorization: Optional[str] = None
    auth_port: int = 8080

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    cors_origins: str = "*"

    def connectors(self) -> Dict[str, ConnectorConfig]:
        """Per-service connector bindings, keyed by service name"""
        return {
            "calendar": ConnectorConfig(
                server_label=self.calendar_server_label,
                connector_id=self.calendar_connector_id,
            ),
            "gmail": ConnectorConfig(
                server_label=self.gmail_server_label,
                connector_id=self.gmail_connector_id,
            ),
            "drive": ConnectorConfig(
                server_label=self.drive_server_label,
                connector_id=self.drive_connector_id,
            ),
        }

    def cors_origin_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Resolve settings once for the process lifetime"""
    return Settings()
