"""Book Catalog API — FastAPI entry point.

Registers middleware, routers, and lifecycle hooks. The catalog router is
mounted under /api/.

The store is chosen at startup: an in-memory list by default, or the
relational table when CATALOG_STORE=sql. A database that cannot be reached
aborts startup.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from api.middleware import RequestContextMiddleware
from core.database import (
    check_connection,
    close_db,
    create_engine,
    create_session_factory,
    init_db,
)
from core.observability.logging_setup import configure_logging
from verticals.catalog.config import CatalogConfig, load_config
from verticals.catalog.router import router as catalog_router
from verticals.catalog.service import CatalogService
from verticals.catalog.store import BookStore, InMemoryBookStore, SqlBookStore


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup/shutdown hooks."""
    config: CatalogConfig = app.state.config
    engine = None

    if getattr(app.state, "catalog_service", None) is None:
        logger.info("Attempting database connection...")
        engine = create_engine(config.database)
        try:
            await check_connection(engine)
            await init_db(engine)
        except Exception:
            logger.critical("Fatal startup error: database unavailable")
            await close_db(engine)
            raise
        app.state.catalog_service = CatalogService(
            SqlBookStore(create_session_factory(engine))
        )

    logger.bind(store=type(app.state.catalog_service.store).__name__).info(
        "Catalog API started"
    )
    yield
    logger.info("Catalog API shutting down")
    if engine is not None:
        await close_db(engine)


# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------

def create_app(config: CatalogConfig | None = None, store: BookStore | None = None) -> FastAPI:
    """Build the application.

    An explicit ``store`` wins over configuration, which is how tests get a
    fresh catalog per app.
    """
    config = config or load_config()
    configure_logging(config.logging)

    app = FastAPI(
        title="Book Catalog",
        description="CRUD service for a catalog of books with genre discount pricing",
        version=config.app.version,
        lifespan=lifespan,
    )
    app.state.config = config

    if store is None and config.app.store == "memory":
        store = InMemoryBookStore()
    # SQL stores are connected in the lifespan hook.
    app.state.catalog_service = CatalogService(store) if store is not None else None

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.app.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request id + access logging
    app.add_middleware(RequestContextMiddleware)

    app.include_router(catalog_router, prefix="/api", tags=["Catalog"])

    # -----------------------------------------------------------------------
    # Health
    # -----------------------------------------------------------------------

    @app.get("/health")
    async def health():
        return {"status": "healthy", "version": config.app.version}

    return app


def run() -> None:
    """Serve the app with uvicorn using HOST/PORT from the environment.

    There is no module-level app; the equivalent command line is
    ``uvicorn api.main:create_app --factory``.
    """
    import uvicorn

    config = load_config()
    uvicorn.run(
        "api.main:create_app", factory=True, host=config.app.host, port=config.app.port
    )


if __name__ == "__main__":
    run()
