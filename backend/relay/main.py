"""
Google MCP Relay - Stateless OAuth + LLM prompt proxy

Architecture:
- Stateless: the browser keeps the Google access token, sends it per request
- One outbound call per request, never retried

Flow:
1. /auth → Google consent → /callback stores the token in the browser
2. /api/{calendar,gmail,drive,omni} → LLM with MCP connectors → plain-text answer
"""
from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Load environment variables
from dotenv import load_dotenv
load_dotenv()

from relay.api.router import api_router
from relay.config import get_settings

settings = get_settings()

# Create app
app = FastAPI(
    title="Google MCP Relay",
    version="1.0.0",
    description="Google OAuth login plus prompt proxy to an LLM with Calendar, Gmail and Drive connectors",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include all routes
app.include_router(api_router)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """API routes answer malformed bodies with the relay's JSON error shape"""
    if request.url.path.startswith("/api/"):
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})
    return await request_validation_exception_handler(request, exc)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    print(f"❌ Unhandled error on {request.url.path}: {exc!r}", flush=True)
    return JSONResponse(status_code=500, content={"error": f"Server error: {exc}"})


@app.on_event("startup")
async def startup_event():
    print("🚀 Relay server started!", flush=True)
    print(f"🌐 Open http://{settings.host}:{settings.port} and log in with Google", flush=True)
    if not settings.groq_api_key:
        print("⚠️ GROQ_API_KEY is not set - /api routes will answer 400", flush=True)
    if not settings.google_client_id or not settings.google_client_secret:
        print("⚠️ GOOGLE_CLIENT_ID / GOOGLE_CLIENT_SECRET not set - login is unavailable", flush=True)
