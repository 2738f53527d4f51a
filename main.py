import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from shortlinks.api.v1 import links, redirect, users
from shortlinks.config import Settings
from shortlinks.container import AppContainer, build_container
from shortlinks.logging_config import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    container: AppContainer = app.state.container
    task = None
    if container.settings.sweeper_enabled:
        task = asyncio.create_task(container.sweeper.start())
    yield
    if task is not None:
        container.sweeper.stop()
        try:
            await asyncio.wait_for(task, timeout=5)
        except asyncio.TimeoutError:
            logger.warning("Sweeper did not stop in time, cancelling")
            task.cancel()


def create_app(container: Optional[AppContainer] = None) -> FastAPI:
    container = container or build_container()
    settings = container.settings

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="A URL shortener with per-link click quotas and expiry",
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.container = container

    @app.get("/")
    def read_root():
        """Root endpoint with API information"""
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": settings.app_version,
            "docs": "/docs",
            "redoc": "/redoc"
        }

    @app.get("/health")
    def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "environment": settings.environment,
            "links": len(container.link_registry),
            "users": len(container.user_registry),
        }

    ######## Include routers
    app.include_router(links.router, prefix="/api/v1")
    app.include_router(users.router, prefix="/api/v1")
    app.include_router(redirect.router)

    return app


settings = Settings()
setup_logging(settings.log_level, settings.log_json)
app = create_app(build_container(settings))


if __name__ == "__main__":
    import uvicorn

    # Single worker: all state lives in this process
    uvicorn.run(
        "main:app",
        host="127.0.0.1",
        port=8000,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
