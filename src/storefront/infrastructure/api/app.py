"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from storefront.infrastructure.api.errors import install_error_handlers
from storefront.infrastructure.api.routes import router
from storefront.infrastructure.bootstrap import Container, build_container
from storefront.infrastructure.config import load_config
from storefront.infrastructure.logging_setup import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # Let queued notifications finish before the process exits.
    app.state.container.close()


def create_app(container: Container | None = None) -> FastAPI:
    if container is None:
        config = load_config()
        configure_logging(config.LOG_LEVEL)
        container = build_container(config)

    app = FastAPI(
        title="Storefront",
        description="Ordering, checkout and order lifecycle for a small prepared-food shop",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.container = container
    install_error_handlers(app)
    app.include_router(router)
    return app
