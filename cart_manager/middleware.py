import time
import uuid
from collections.abc import Awaitable, Callable

from fastapi import Request, Response

from .logging_config import request_log_context
from .logging_utils import log_api_request

REQUEST_ID_HEADER = "X-Request-ID"


async def request_context_middleware(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Tag the request with an id, bind it to cart log events and log the result.

    An incoming ``X-Request-ID`` is reused so a client can correlate its
    add-to-cart call with the server log; otherwise a short id is generated.
    """
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:12]
    started = time.perf_counter()

    with request_log_context(request_id, request.method, request.url.path):
        response = await call_next(request)

    response.headers[REQUEST_ID_HEADER] = request_id
    log_api_request(
        request=request,
        response_status=response.status_code,
        process_time_ms=(time.perf_counter() - started) * 1000,
        request_id=request_id,
    )
    return response
