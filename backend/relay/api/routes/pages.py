"""
Browser page and health endpoints
"""
from functools import lru_cache
from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

router = APIRouter()

STATIC_DIR = Path(__file__).resolve().parents[2] / "static"


@lru_cache(maxsize=1)
def _index_html() -> str:
    return (STATIC_DIR / "index.html").read_text(encoding="utf-8")


@router.get("/", response_class=HTMLResponse)
def index():
    """Serve the single-page client"""
    return HTMLResponse(content=_index_html())


@router.get("/health")
def health():
    """Health check endpoint"""
    return {"ok": True}
