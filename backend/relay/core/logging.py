"""
Logging utilities for LLM proxy calls
"""
from typing import List

MAX_LOGGED_CHARS = 2000


def _truncate(text: str) -> str:
    return text[:MAX_LOGGED_CHARS] + "..." if len(text) > MAX_LOGGED_CHARS else text


def log_llm_request(enabled: bool, route: str, server_labels: List[str], prompt: str):
    """Log outbound prompt to terminal (never the token)"""
    if enabled:
        print(f"\n{'='*60}")
        print(f"🤖 LLM REQUEST [{route}] connectors={', '.join(server_labels)}")
        print(f"{'='*60}")
        print(_truncate(prompt))
        print(f"{'='*60}\n", flush=True)


def log_llm_response(enabled: bool, route: str, response: str):
    """Log extracted answer to terminal"""
    if enabled:
        print(f"\n{'-'*60}")
        print(f"📨 LLM RESPONSE [{route}]")
        print(f"{'-'*60}")
        print(_truncate(response))
        print(f"{'-'*60}\n", flush=True)
