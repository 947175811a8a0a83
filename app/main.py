"""
Main FastAPI application
"""

from typing import Optional
import random

from fastapi import FastAPI

from app.core.config import Settings, get_settings
from app.core.events import lifespan
from app.core.exceptions import register_exception_handlers
from app.core.middleware import setup_middleware
from app.core.state import build_state
from app.api import api_router, health_router, websocket_router

def create_app(settings: Optional[Settings] = None, rng: Optional[random.Random] = None) -> FastAPI:
    """Build an app with its own in-memory state"""
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Spend-to-earn rewards API: wallet, perks, partner dashboard and test simulation",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
        lifespan=lifespan
    )
    app.state.services = build_state(settings, rng=rng)

    # Setup middleware
    setup_middleware(app, settings)
    register_exception_handlers(app)

    # Include API routes
    app.include_router(api_router, prefix="/api")
    app.include_router(health_router)
    app.include_router(websocket_router)

    # Root endpoint
    @app.get("/", include_in_schema=False)
    async def root():
        return {
            "app": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "status": "running",
            "docs": "/api/docs"
        }

    return app

app = create_app()

if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG
    )
