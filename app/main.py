"""
app/main.py

Purpose: Application entry point

- Builds the FastAPI app from Settings (create_app)
- Loads configuration and logging
- Registers page routes and exception handlers
- Serves the upload directory statically
- Manages application lifecycle (startup/shutdown)
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from contextlib import asynccontextmanager
import time

from app.core.config import Settings, settings, validate_settings
from app.core.errors import add_exception_handlers
from app.core.logging import setup_logging, get_logger
from app.core.middleware import RequestSizeLimitMiddleware
from app.db.mongo import connect_to_mongo, close_mongo_connection, check_database_health
from app.services.file_store import FileStore
from app.api import pages

# Initialize logging first
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    app_settings: Settings = app.state.settings

    logger.info("🚀 Starting ProfileDrop...")

    try:
        validate_settings(app_settings)
        logger.info("✅ Configuration validated")

        await connect_to_mongo(app_settings)

        logger.info(f"Upload directory: {app.state.file_store.root.resolve()}")
        logger.info(f"Environment: {app_settings.ENVIRONMENT}")
        logger.info(f"🎉 Server is running on port {app_settings.PORT}")

    except Exception as e:
        logger.critical(f"Failed to start application: {str(e)}", exc_info=True)
        raise

    yield  # Application runs here

    logger.info("🛑 Shutting down ProfileDrop...")

    try:
        await close_mongo_connection()
        logger.info("👋 ProfileDrop shut down successfully")

    except Exception as e:
        logger.error(f"Error during shutdown: {str(e)}", exc_info=True)


def create_app(app_settings: Settings = settings) -> FastAPI:
    """
    Builds the application around one upload directory and one database.
    """
    app = FastAPI(
        title="ProfileDrop",
        description="User registration with profile pictures and file attachments",
        version="1.0.0",
        lifespan=lifespan,
        debug=app_settings.DEBUG,
        docs_url="/docs" if app_settings.is_development else None,
        redoc_url=None,
    )

    file_store = FileStore(app_settings.UPLOAD_DIR)
    file_store.ensure_root()

    app.state.settings = app_settings
    app.state.file_store = file_store

    @app.middleware("http")
    async def add_process_time_header(request: Request, call_next):
        """Add processing time header to all responses."""
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = str(process_time)

        if process_time > 5.0:
            logger.warning(
                f"Slow request detected: {request.method} {request.url.path}",
                extra={"process_time": process_time}
            )

        return response

    app.add_middleware(RequestSizeLimitMiddleware, max_bytes=app_settings.MAX_REQUEST_SIZE)

    add_exception_handlers(app, is_production=app_settings.is_production)

    app.include_router(pages.router, tags=["Pages"])

    @app.get("/health", tags=["Health"])
    async def health_check():
        """
        Health check endpoint.
        Reports database connectivity.
        """
        db_healthy = await check_database_health()
        health_status = {
            "status": "healthy" if db_healthy else "unhealthy",
            "timestamp": time.time(),
            "environment": app_settings.ENVIRONMENT,
            "version": "1.0.0",
            "checks": {"database": "healthy" if db_healthy else "unhealthy"}
        }

        status_code = 200 if db_healthy else 503
        return JSONResponse(content=health_status, status_code=status_code)

    @app.get("/live", tags=["Health"])
    async def liveness_check():
        """
        Liveness check - indicates if app is alive.
        """
        return {"status": "alive"}

    # Mounted last so explicit routes take precedence
    if app_settings.SERVE_UPLOADS_STATIC:
        app.mount("/", StaticFiles(directory=str(file_store.root)), name="uploads")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.is_development,
        log_level=settings.LOG_LEVEL.lower()
    )
