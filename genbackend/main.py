import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from genbackend.core.config import Settings, settings
from genbackend.core.logging import configure_logging
from genbackend.core.state import ModelStore
from genbackend.api.routes import router as api_router
from genbackend.pipeline.translator import CompletionClient
from genbackend.tasks.jobs import GenerationRegistry

configure_logging()
log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    # Startup
    log.info("Starting API server...")
    store: ModelStore = app.state.store
    if store.current() is None:
        store.load()
    yield
    # Shutdown
    log.info("Shutting down API server...")


def create_app(
    config: Optional[Settings] = None,
    store: Optional[ModelStore] = None,
    client: Optional[CompletionClient] = None,
) -> FastAPI:
    """
    Build the API application.

    The app owns the model store and the generation registry; both live on
    app.state for the lifetime of the process.
    """
    config = config or settings
    app = FastAPI(
        title=config.app_name,
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = config
    app.state.store = store if store is not None else ModelStore(config.state_file)
    app.state.registry = GenerationRegistry(max_jobs=config.max_generations)
    app.state.completion_client = client
    app.include_router(api_router, prefix="/v1")
    return app


app = create_app()
