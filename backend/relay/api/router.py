"""
Main API Router - Combines all route modules
"""
from fastapi import APIRouter

from .routes import auth, pages, proxy

# Create main router
api_router = APIRouter()

# Include all route modules
api_router.include_router(pages.router, tags=["Pages"])
api_router.include_router(auth.router, tags=["Google OAuth"])
api_router.include_router(proxy.router, prefix="/api", tags=["Proxy"])
