"""
LLM Client - Lazy initialization of the Groq (OpenAI-compatible) client
"""
from typing import Optional
from fastapi import Depends
from openai import AsyncOpenAI

from relay.config import Settings, get_settings

_client: Optional[AsyncOpenAI] = None


def get_llm_client(settings: Settings = Depends(get_settings)) -> Optional[AsyncOpenAI]:
    """Get or create the LLM client; None while no API key is configured"""
    global _client

    if not settings.groq_api_key:
        return None

    if _client is None:
        _client = AsyncOpenAI(
            api_key=settings.groq_api_key,
            base_url=settings.groq_base_url,
            timeout=settings.http_timeout_seconds,
            max_retries=0,
        )

    return _client
