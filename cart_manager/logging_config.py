"""Logging setup and the structured context attached to cart log lines.

stdlib logging (Rich console, optional file) carries the request and
database records from ``logging_utils``; structlog carries the cart
operation events. Context bound with ``cart_operation_context`` or
``request_log_context`` is merged into every structlog event emitted inside
the block, so a refused add can be traced back to its request.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import structlog
from opentelemetry import trace
from rich.logging import RichHandler

from .config import settings
from .constants import LOG_FILE_NAME

_QUIET_LOGGERS = (
    "sqlalchemy.engine",
    "sqlalchemy.pool",
    "aiosqlite",
    "uvicorn.access",
)


def setup_logging(log_level: str | None = None) -> None:
    """Configure stdlib and structlog logging for the cart service.

    Args:
        log_level: Override the level derived from ``settings.debug``
    """
    if log_level:
        level = getattr(logging, log_level.upper(), logging.INFO)
    else:
        level = logging.DEBUG if settings.debug else logging.INFO

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    for handler in _build_handlers():
        root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.contextvars.clear_contextvars()
    structlog.configure(
        processors=_build_processors(),
        logger_factory=structlog.WriteLoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=True,
    )

    get_logger(__name__).info(
        "Logging configured",
        level=logging.getLevelName(level),
        database=settings.database_url.partition("://")[0],
    )


def _build_handlers() -> list[logging.Handler]:
    formatter = logging.Formatter(
        "%(asctime)s | %(name)s | %(levelname)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console = RichHandler(
        rich_tracebacks=True, show_path=settings.debug, show_time=False
    )
    handlers: list[logging.Handler] = [console]

    # Production keeps a file copy; development only when asked to
    if settings.is_production or settings.log_to_file:
        log_dir = Path("logs")
        log_dir.mkdir(exist_ok=True)
        log_file = log_dir / LOG_FILE_NAME
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def _add_trace_context(logger, method_name, event_dict):
    """Attach the active OpenTelemetry span to the event, if any."""
    span_context = trace.get_current_span().get_span_context()
    if span_context.is_valid:
        event_dict["trace_id"] = f"0x{span_context.trace_id:032x}"
        event_dict["span_id"] = f"0x{span_context.span_id:016x}"
    return event_dict


def _build_processors() -> list[structlog.typing.Processor]:
    processors: list[structlog.typing.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        _add_trace_context,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if settings.is_development:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))
    else:
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    return processors


@contextmanager
def cart_operation_context(
    operation: str, product_id: str, quantity: int
) -> Iterator[None]:
    """Bind the cart operation and its target to every event in the block."""
    with structlog.contextvars.bound_contextvars(
        cart_operation=operation, product_id=product_id, quantity=quantity
    ):
        yield


@contextmanager
def request_log_context(request_id: str, method: str, path: str) -> Iterator[None]:
    """Bind the HTTP request that triggered the cart work."""
    with structlog.contextvars.bound_contextvars(
        request_id=request_id, method=method, path=path
    ):
        yield


def get_logger(name: str):
    """Return a structlog logger named after the calling module."""
    return structlog.get_logger(name)
