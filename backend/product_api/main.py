"""FastAPI application bootstrap with router wiring."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from product_api.api.routers import health, products
from product_api.core.config import Settings, get_settings
from product_api.core.exceptions import MalformedBodyError, error_message
from product_api.core.logging_config import configure_logging
from product_api.db.session import Database

logger = logging.getLogger(__name__)


async def open_database(database: Database, settings: Settings) -> None:
    """Connect once at startup.

    A failed connection is logged and the server keeps running; requests then
    fail with a storage error until the database is reachable. Setting
    ``DATABASE_REQUIRED`` turns the failure into a startup abort.
    """
    try:
        await run_in_threadpool(database.connect)
        logger.info("Connection successful")
    except Exception as e:
        logger.error(f"Database connection failed: {error_message(e)}", exc_info=True)
        if settings.database_required:
            raise


def register_exception_handlers(app: FastAPI) -> None:
    """Render every framework-level failure as a JSON ``{"message": ...}``."""

    @app.exception_handler(MalformedBodyError)
    async def malformed_body_handler(request: Request, exc: MalformedBodyError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content={"message": exc.message}
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ):
        errors = [
            {
                "field": ".".join(str(part) for part in error.get("loc", ())),
                "message": error.get("msg", "Invalid value"),
            }
            for error in exc.errors()
        ]
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": "Validation failed", "errors": errors},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": error_message(exc)},
        )


def create_app(
    settings: Settings | None = None, database: Database | None = None
) -> FastAPI:
    """Instantiate the FastAPI app and include top-level routers.

    ``database`` lets callers (tests, embedding applications) hand in an
    already-built handle; otherwise one is created from ``settings`` when
    the app starts.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        configure_logging(settings.log_level)
        db = database or Database(settings.database_url)
        app.state.database = db
        await open_database(db, settings)
        try:
            yield
        finally:
            if database is None:
                db.dispose()
            logger.info("Database connections closed")

    app = FastAPI(title=settings.app_name, version="0.1.0", lifespan=lifespan)
    app.state.settings = settings

    logger.info(f"[CORS] Parsed allowed origins: {settings.cors_origins}")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(products.router, prefix="/api/products", tags=["products"])

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn on the configured port."""
    import uvicorn

    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info(f"Listening on port {settings.port}")
    uvicorn.run(
        "product_api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
