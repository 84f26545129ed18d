"""
Prompt proxy endpoints - calendar, gmail, drive and omni (all three)
"""
import asyncio
from typing import Awaitable, List, Optional, TypeVar

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from openai import AsyncOpenAI

from relay.config import Settings, get_settings
from relay.core import get_llm_client
from relay.schemas.proxy import ProxyError, ProxyRequest, ProxyResult
from relay.services.exceptions import RelayException, UpstreamHTTPError, UpstreamTransportError
from relay.services.proxy import proxy_prompt

router = APIRouter()

T = TypeVar("T")

DISCONNECT_POLL_SECONDS = 0.5
# nginx convention for "client closed request"
CLIENT_CLOSED_REQUEST = 499

ERROR_RESPONSES = {
    400: {"model": ProxyError, "description": "Missing configuration, token or input"},
    500: {"model": ProxyError, "description": "Upstream or transport failure"},
}


class ClientDisconnected(Exception):
    pass


async def _unless_disconnected(request: Request, call: Awaitable[T]) -> T:
    """Await call, cancelling it if the browser goes away first"""
    task = asyncio.ensure_future(call)
    while True:
        done, _ = await asyncio.wait({task}, timeout=DISCONNECT_POLL_SECONDS)
        if done:
            return task.result()
        if await request.is_disconnected():
            task.cancel()
            raise ClientDisconnected()


async def _proxy(
    request: Request,
    payload: ProxyRequest,
    service_names: List[str],
    route: str,
    settings: Settings,
    client: Optional[AsyncOpenAI],
) -> JSONResponse:
    connectors = settings.connectors()
    call = proxy_prompt(
        client,
        settings.llm_model,
        [connectors[name] for name in service_names],
        payload.input,
        payload.token,
        route=route,
        debug=settings.debug,
    )

    try:
        if settings.cancel_on_disconnect:
            result = await _unless_disconnected(request, call)
        else:
            result = await call
    except UpstreamHTTPError as e:
        return JSONResponse(
            status_code=e.status_code,
            content={
                "error": e.message,
                "errorDetails": e.body.render(),
                "status": e.upstream_status,
            },
        )
    except UpstreamTransportError as e:
        print(f"❌ {route} API error: {e.message}", flush=True)
        return JSONResponse(status_code=500, content={"error": f"Server error: {e.message}"})
    except RelayException as e:
        return JSONResponse(status_code=e.status_code, content={"error": e.message})
    except ClientDisconnected:
        print(f"⚠️ {route} client disconnected, completion call cancelled", flush=True)
        return JSONResponse(status_code=CLIENT_CLOSED_REQUEST, content={"error": "Client disconnected"})

    return JSONResponse(content={"result": result})


@router.post("/calendar", response_model=ProxyResult, responses=ERROR_RESPONSES)
async def calendar_endpoint(
    request: Request,
    payload: ProxyRequest,
    settings: Settings = Depends(get_settings),
    client: Optional[AsyncOpenAI] = Depends(get_llm_client),
):
    """Ask about Google Calendar"""
    return await _proxy(request, payload, ["calendar"], "calendar", settings, client)


@router.post("/gmail", response_model=ProxyResult, responses=ERROR_RESPONSES)
async def gmail_endpoint(
    request: Request,
    payload: ProxyRequest,
    settings: Settings = Depends(get_settings),
    client: Optional[AsyncOpenAI] = Depends(get_llm_client),
):
    """Ask about Gmail"""
    return await _proxy(request, payload, ["gmail"], "gmail", settings, client)


@router.post("/drive", response_model=ProxyResult, responses=ERROR_RESPONSES)
async def drive_endpoint(
    request: Request,
    payload: ProxyRequest,
    settings: Settings = Depends(get_settings),
    client: Optional[AsyncOpenAI] = Depends(get_llm_client),
):
    """Ask about Google Drive"""
    return await _proxy(request, payload, ["drive"], "drive", settings, client)


@router.post("/omni", response_model=ProxyResult, responses=ERROR_RESPONSES)
async def omni_endpoint(
    request: Request,
    payload: ProxyRequest,
    settings: Settings = Depends(get_settings),
    client: Optional[AsyncOpenAI] = Depends(get_llm_client),
):
    """Ask across Calendar, Gmail and Drive in one completion call"""
    return await _proxy(request, payload, ["calendar", "gmail", "drive"], "omni", settings, client)
