"""FastAPI application factory; the lifespan owns the service container."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from catalog import __version__
from catalog.core.config import Settings, get_settings
from catalog.core.container import ApplicationContainer


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        container = ApplicationContainer.build(settings)
        await container.startup()
        app.state.container = container
        try:
            yield
        finally:
            await container.shutdown()

    app = FastAPI(
        title=settings.project_name,
        description="Product catalog with filesystem-backed assets",
        version=__version__,
        lifespan=lifespan,
    )

    @app.get("/health")
    async def health() -> dict:
        return {"status": "ok"}

    return app


app = create_app()
