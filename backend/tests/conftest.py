"""
Shared fixtures - settings injection and fake upstream services.

Outbound HTTP never leaves the process: the Google token endpoint and the
LLM endpoint are both served by httpx.MockTransport handlers.
"""
import json
from typing import Any, List, Optional

import httpx
import pytest
from fastapi.testclient import TestClient
from openai import AsyncOpenAI

from relay.config import Settings, get_settings
from relay.core import get_http_client, get_llm_client
from relay.main import app

LLM_BASE_URL = "https://api.groq.test/openai/v1"


def make_settings(**overrides: Any) -> Settings:
    values = {
        "google_client_id": "test-client-id",
        "google_client_secret": "test-client-secret",
        "groq_api_key": "test-groq-key",
        "groq_base_url": LLM_BASE_URL,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def message(*texts: str) -> dict:
    """A /responses output item of type message"""
    return {
        "type": "message",
        "role": "assistant",
        "content": [{"type": "output_text", "text": text} for text in texts],
    }


class FakeUpstream:
    """Records requests and answers with a canned response (or raises)"""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.response = httpx.Response(200, json={"output": []})
        self.error: Optional[Exception] = None

    def respond(self, status_code: int = 200, **kwargs: Any):
        self.response = httpx.Response(status_code, **kwargs)

    def fail(self, error: Exception):
        self.error = error

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.response

    def last_json(self) -> dict:
        return json.loads(self.requests[-1].content)


def make_llm_client(settings: Settings, upstream: FakeUpstream) -> AsyncOpenAI:
    return AsyncOpenAI(
        api_key=settings.groq_api_key or "unused",
        base_url=settings.groq_base_url,
        max_retries=0,
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(upstream)),
    )


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def llm_upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def google_upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def client(settings, llm_upstream, google_upstream):
    llm = make_llm_client(settings, llm_upstream)

    async def _http_client():
        async with httpx.AsyncClient(transport=httpx.MockTransport(google_upstream)) as http_client:
            yield http_client

    app.dependency_overrides[get_settings] = lambda: settings
    # Read the key at call time so tests can unset it on the settings fixture
    app.dependency_overrides[get_llm_client] = lambda: llm if settings.groq_api_key else None
    app.dependency_overrides[get_http_client] = _http_client

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
