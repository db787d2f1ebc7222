"""
Where: rpc_cache/proxy/middleware.py
What: HTTP middleware for request ids and access logging.
Why: Isolate cross-cutting request concerns from app assembly.
"""

import logging
import time

from fastapi import Request

from rpc_cache.common.core.request_context import clear_request_id, set_request_id

logger = logging.getLogger("proxy.access")


async def request_context_middleware(request: Request, call_next):
    """Bind a request id for the life of the request and write the access log."""
    start_time = time.perf_counter()
    req_id = set_request_id(request.headers.get("X-Request-Id"))

    try:
        response = await call_next(request)

        process_time_ms = round((time.perf_counter() - start_time) * 1000, 2)

        logger.info(
            f"{request.method} {request.url.path} {response.status_code}",
            extra={
                "request_id": req_id,
                "method": request.method,
                "path": request.url.path,
                "query_params": str(request.query_params),
                "status": response.status_code,
                "latency_ms": process_time_ms,
                "user_agent": request.headers.get("user-agent"),
                "client_ip": request.client.host if request.client else None,
            },
        )

        return response
    finally:
        clear_request_id()
