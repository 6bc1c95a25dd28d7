import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from relay.application.context import RelayContext
from relay.config import Settings, get_settings
from relay.interfaces.api.routes import register_routes


def configure_logging(level: str) -> None:
    """Configure the root logger once for the relay process."""

    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create missing tables on startup; let relay work finish on shutdown."""

    context: RelayContext = app.state.relay
    context.store.initialize()
    yield
    await context.aclose()
    context.store.dispose()


def create_app(
    settings: Settings | None = None, *, context: RelayContext | None = None
) -> FastAPI:
    """Create and configure the relay FastAPI application."""

    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(lifespan=lifespan)
    app.state.relay = context or RelayContext.from_settings(settings)

    origins = settings.cors_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "Cookie"],
    )

    register_routes(app)
    return app


app = create_app()
