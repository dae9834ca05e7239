"""
Structured logging configuration for the Mission Control backend.
Implements consistent JSON logging with request correlation.
"""

import logging
import sys
import time
import uuid
from typing import Any, Dict, Optional

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response


def configure_logging(
    service_name: str = "mission-control",
    log_level: str = "INFO",
    enable_json: bool = True
) -> None:
    """
    Configure structured logging for the backend.

    Args:
        service_name: Name of the service for log identification
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        enable_json: Whether to use JSON output (True) or console output (False)
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=numeric_level,
        force=True  # Override any existing configuration
    )

    shared_processors = [
        structlog.stdlib.filter_by_level,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        # Merge context variables (request ID, etc.)
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if enable_json:
        final_processor = structlog.processors.JSONRenderer()
    else:
        final_processor = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=shared_processors + [final_processor],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    structlog.contextvars.bind_contextvars(service=service_name)


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """
    Get a configured logger instance.

    Args:
        name: Optional logger name. If None, uses the calling module's name.

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    FastAPI middleware that adds request correlation IDs and logs HTTP requests.
    """

    def __init__(self, app, service_name: str = "mission-control"):
        super().__init__(app)
        self.service_name = service_name
        self.logger = get_logger("request")

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            service=self.service_name,
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            client_ip=request.client.host if request.client else "unknown",
        )

        started = time.perf_counter()
        self.logger.debug("Request started")

        try:
            response = await call_next(request)
        except Exception as exc:
            self.logger.error(
                "Request failed",
                exc_info=True,
                extra={
                    "data": {
                        "exception_type": type(exc).__name__,
                        "exception_message": str(exc),
                    }
                }
            )
            raise

        self.logger.info(
            "Request completed",
            extra={
                "data": {
                    "status_code": response.status_code,
                    "response_time_ms": round((time.perf_counter() - started) * 1000, 2),
                }
            }
        )
        response.headers["X-Request-ID"] = request_id
        return response


def log_status_read(
    outcome: str,
    details: Dict[str, Any],
    logger: Optional[structlog.stdlib.BoundLogger] = None
) -> None:
    """Log the outcome of a status read (fresh, stale, default) with consistent format."""
    if logger is None:
        logger = get_logger("status")

    log = logger.warning if outcome == "stale" else logger.info
    log(
        f"Status read: {outcome}",
        extra={
            "data": {
                "outcome": outcome,
                **details
            }
        }
    )
