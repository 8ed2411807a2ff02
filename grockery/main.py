import logging
from contextlib import asynccontextmanager
from ariadne.asgi import GraphQL
from fastapi import FastAPI
from grockery.api.graphql import build_schema
from grockery.api.routes import router as api_router
from grockery.core.config import settings
from grockery.db.store import RecordStore
from grockery.generators.compose import compose
from grockery.schemas.config import MockConfig

log = logging.getLogger(__name__)


async def initialize_store(store: RecordStore, config: MockConfig) -> None:
    """Reset the database if configured, then seed an empty list per entity."""
    if config.db.reset_on_start:
        log.info("Resetting database %s", store.filepath, extra={"entity": "-", "op": "reset"})
        await store.reset()
    await store.ensure_entities(entity.name for entity in config.entities)


def create_app(config: MockConfig, debug: bool = False) -> FastAPI:
    """
    Build the FastAPI application serving the generated GraphQL API.

    The store is opened here, while reset and bucket seeding run at startup.
    """
    store = RecordStore.open(config.db.filepath)
    api = compose(config.entities, store)
    schema = build_schema(api)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup and shutdown events."""
        log.info("Starting mock API server...")
        try:
            await initialize_store(store, config)
            log.info(
                "Serving %d entities from %s",
                len(config.entities), store.filepath,
            )
        except Exception as e:
            log.error("Mock API startup failed: %s", e, exc_info=True)
            raise
        yield
        log.info("Shutting down mock API server...")

    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.store = store
    app.state.mock_api = api
    app.include_router(api_router)
    app.mount("/graphql", GraphQL(schema, debug=debug))
    return app
