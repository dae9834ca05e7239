"""
Mission Control Server

Serves the factory status API and the dashboard page.
"""

from contextlib import asynccontextmanager

import uvicorn
from dotenv import load_dotenv

# Load environment variables FIRST before importing config
load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.dashboard_endpoints import router as dashboard_router
from api.status_endpoints import router as status_router
from api.system_endpoints import router as system_router
from config import settings
from utils.logging import RequestLoggingMiddleware, configure_logging, get_logger

configure_logging(
    service_name="mission-control",
    log_level=settings.LOG_LEVEL,
    enable_json=settings.LOG_JSON,
)

logger = get_logger("mission-control")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info(
        "Starting Mission Control...",
        extra={"data": {"store_configured": settings.store_configured, "key": settings.STATUS_KEY}}
    )
    if not settings.store_configured:
        logger.warning("Status store credentials missing; /api/status will answer 500 until they are set")

    # Created lazily on the first status request
    app.state.status_store = None

    yield

    logger.info("Shutting down Mission Control...")
    store = getattr(app.state, "status_store", None)
    if store is not None:
        await store.close()
        app.state.status_store = None


def create_app() -> FastAPI:
    app = FastAPI(
        title="Mission Control API",
        description="Operational dashboard for the SpinTheBloc agent factory",
        version="1.0.0",
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware, service_name="mission-control")

    app.include_router(status_router)
    app.include_router(system_router)
    app.include_router(dashboard_router)
    return app


app = create_app()


def main() -> None:
    logger.info(f"Starting server on {settings.HOST}:{settings.PORT}")
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
