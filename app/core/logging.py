"""
Structured logging configuration using structlog.

In development (app_env=dev): colored console output.
In all other environments: JSON output with timestamp, level, message, and all bound context vars.

Usage:
    from app.core.logging import configure_logging
    configure_logging(app_env="dev")

    # Application modules keep using stdlib loggers; the bridge below renders
    # them through structlog so they come out structured as well.
    import logging
    logger = logging.getLogger(__name__)
    logger.info("Recommendation cache hit for user %s", user_id)

Request ID is injected per-request by RequestIdMiddleware via structlog.contextvars:
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id)
"""

import logging
import sys
import uuid

import structlog


def configure_logging(app_env: str = "dev") -> None:
    """
    Configure structlog with a stdlib bridge so all loggers (including
    uvicorn, sqlalchemy, etc.) produce structured output.

    Args:
        app_env: Application environment. "dev" → ConsoleRenderer; anything else → JSONRenderer.
    """
    shared_processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if app_env == "dev":
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=shared_processors
        + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=shared_processors,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers = []
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.INFO)

    # Suppress noisy third-party loggers outside development
    if app_env != "dev":
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


class RequestIdMiddleware:
    """
    Bind a request id to the structlog context for every HTTP request.

    The id is taken from the ``X-Request-ID`` header when present, generated
    otherwise, and echoed back on the response.
    """

    header = b"x-request-id"

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = None
        for name, value in scope.get("headers", []):
            if name == self.header:
                request_id = value.decode("latin-1")
                break
        request_id = request_id or uuid.uuid4().hex

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        async def send_with_request_id(message):
            if message["type"] == "http.response.start":
                message["headers"] = list(message.get("headers", [])) + [(self.header, request_id.encode("latin-1"))]
            await send(message)

        await self.app(scope, receive, send_with_request_id)
