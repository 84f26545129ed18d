"""
Prompt Proxy Service - Forwards a prompt plus the user's Google token to the
LLM with one or more MCP connectors attached, returns the final text answer.
Stateless - one completion call per request, never retried.
"""
import json
from typing import Any, Dict, List, Optional

import openai
from openai import AsyncOpenAI

from relay.core import log_llm_request, log_llm_response
from relay.schemas.proxy import ConnectorConfig
from relay.services.exceptions import (
    ConfigurationError,
    InvalidInputError,
    NotAuthenticatedError,
    UpstreamHTTPError,
    UpstreamTransportError,
    parse_error_body,
)
from relay.services.prompts.loader import load_prompt

NO_MESSAGE_FOUND = "No message found in response"
UPSTREAM_NAME = "Groq API"


def _part_text(part: Dict[str, Any]) -> str:
    # null text joins as an empty line
    text = part.get("text")
    return "" if text is None else str(text)


def extract_final_message(data: Dict[str, Any]) -> str:
    """
    Pull the final assistant answer out of a /responses payload.

    Only the last "message" item of `output` counts; its "output_text"
    parts are joined with newlines. A payload without any message yields
    the NO_MESSAGE_FOUND sentinel rather than an error.
    """
    output = data.get("output") or []
    messages = [item for item in output if isinstance(item, dict) and item.get("type") == "message"]
    if not messages:
        return NO_MESSAGE_FOUND

    content = messages[-1].get("content") or []
    return "\n".join(
        _part_text(part)
        for part in content
        if isinstance(part, dict) and part.get("type") == "output_text"
    )


def build_prompt(user_input: str) -> str:
    """Append the plain-text formatting instruction to the user prompt"""
    return f"{user_input}\n\n{load_prompt('plain_text')}"


def build_tools(connectors: List[ConnectorConfig], token: str) -> List[Dict[str, Any]]:
    return [connector.to_tool(token) for connector in connectors]


async def proxy_prompt(
    client: Optional[AsyncOpenAI],
    model: str,
    connectors: List[ConnectorConfig],
    user_input: Optional[str],
    token: Optional[str],
    route: str = "proxy",
    debug: bool = False,
) -> str:
    """
    Run one completion call with the given connectors attached.

    Validation happens before any network call, in this order:
    API key, Google token, prompt.

    Raises:
        ConfigurationError: no LLM API key configured
        NotAuthenticatedError: no Google token supplied
        InvalidInputError: empty prompt
        UpstreamHTTPError: LLM provider answered non-2xx
        UpstreamTransportError: network failure or malformed JSON
    """
    if client is None:
        raise ConfigurationError("GROQ_API_KEY is required")
    if not token:
        raise NotAuthenticatedError("Please login with Google first")
    if not user_input:
        raise InvalidInputError("input is required")

    prompt = build_prompt(user_input)
    log_llm_request(debug, route, [c.server_label for c in connectors], prompt)

    try:
        raw = await client.responses.with_raw_response.create(
            model=model,
            tools=build_tools(connectors, token),
            input=prompt,
            stream=False,
        )
        data = raw.http_response.json()
    except openai.APIStatusError as e:
        body = parse_error_body(e.response.text)
        print(f"❌ {UPSTREAM_NAME} error: {e.status_code} {body.render()}", flush=True)
        raise UpstreamHTTPError(UPSTREAM_NAME, e.status_code, body) from e
    except openai.APIConnectionError as e:
        print(f"❌ {UPSTREAM_NAME} unreachable: {e}", flush=True)
        raise UpstreamTransportError(str(e)) from e
    except json.JSONDecodeError as e:
        raise UpstreamTransportError(f"Malformed response from {UPSTREAM_NAME}: {e}") from e

    if not isinstance(data, dict):
        raise UpstreamTransportError(f"Malformed response from {UPSTREAM_NAME}")

    result = extract_final_message(data)
    log_llm_response(debug, route, result)
    return result
