"""
HTTP client for Google OAuth calls - one client per request
"""
from typing import AsyncIterator
import httpx
from fastapi import Depends

from relay.config import Settings, get_settings


async def get_http_client(
    settings: Settings = Depends(get_settings),
) -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient(timeout=settings.http_timeout_seconds) as client:
        yield client
