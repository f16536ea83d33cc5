import logging
from datetime import UTC, datetime
from typing import Any, Final

from fastapi import Request


# HTTP statuses the cart returns for refused adds; these are expected outcomes
CART_REFUSAL_STATUSES: Final = frozenset({404, 409})


def log_api_request(
    request: Request,
    response_status: int,
    process_time_ms: float | None = None,
    request_id: str | None = None,
    logger_name: str = "api",
) -> None:
    """Log a finished API request.

    Refused add-to-cart calls (404/409) are logged at INFO since they are
    normal cart outcomes; other 4xx responses at WARNING, 5xx at ERROR.

    Args:
        request: FastAPI request object
        response_status: HTTP response status code
        process_time_ms: Request processing time in milliseconds
        request_id: Id bound to the cart log events of this request
        logger_name: Name of the logger to use
    """
    logger = logging.getLogger(logger_name)

    log_data = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "status_code": response_status,
        "client_ip": request.client.host if request.client else None,
    }
    if process_time_ms is not None:
        log_data["process_time_ms"] = round(process_time_ms, 2)

    if response_status >= 500:
        log_level = logging.ERROR
    elif response_status >= 400 and response_status not in CART_REFUSAL_STATUSES:
        log_level = logging.WARNING
    else:
        log_level = logging.INFO

    message = f"{request.method} {request.url.path} - {response_status}"
    if process_time_ms is not None:
        message += f" ({process_time_ms:.1f}ms)"
    if request_id:
        message += f" [{request_id}]"

    logger.log(log_level, message, extra=log_data)


def log_database_operation(
    operation: str,
    table: str,
    success: bool = True,
    logger_name: str = "database",
    **kwargs: Any,
) -> None:
    """Log database operations.

    Args:
        operation: Database operation (upsert, select, ...)
        table: Table name being operated on
        success: Whether the operation was successful
        logger_name: Name of the logger to use
        **kwargs: Additional context data
    """
    logger = logging.getLogger(logger_name)

    log_data = {"operation": operation, "table": table, "success": success, **kwargs}

    level = logging.INFO if success else logging.ERROR
    status = "succeeded" if success else "failed"

    logger.log(level, f"Database {operation} on {table} {status}", extra=log_data)


def log_system_info(hostname: str, debug_mode: bool, database_url: str) -> None:
    """Log system startup information.

    Args:
        hostname: Server hostname
        debug_mode: Whether debug mode is enabled
        database_url: Database URL in use (credentials are stripped)
    """
    logger = logging.getLogger("system")

    logger.info(
        "Application startup",
        extra={
            "hostname": hostname,
            "debug_mode": debug_mode,
            "database": _strip_credentials(database_url),
            "timestamp": datetime.now(UTC).isoformat(),
        },
    )


def _strip_credentials(database_url: str) -> str:
    """Remove ``user:password@`` from a database URL before logging it."""
    scheme, sep, rest = database_url.partition("://")
    if not sep or "@" not in rest:
        return database_url
    return f"{scheme}://[REDACTED]@{rest.split('@', 1)[1]}"
