"""
Proxy error kinds and their canonical responses.

Every error the proxy can answer with belongs to a closed set of kinds.
`render_error` is the single place mapping a kind to status, body and headers.
"""

import enum
import logging
from typing import Dict, Optional

from fastapi import Request, status
from fastapi.responses import PlainTextResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger("proxy.exceptions")

ALLOWED_METHODS = ("GET", "POST")


class ErrorKind(str, enum.Enum):
    METHOD_NOT_ALLOWED = "method_not_allowed"
    RPC_NOT_ALLOWED = "rpc_not_allowed"
    UPSTREAM_FAILURE = "upstream_failure"
    UPSTREAM_TIMEOUT = "upstream_timeout"
    UNHANDLED_FAULT = "unhandled_fault"


class ConfigurationError(Exception):
    """Raised at startup when the proxy cannot be assembled."""

    pass


class ProxyError(Exception):
    """Base exception class for errors answered with a canonical response."""

    kind: ErrorKind = ErrorKind.UNHANDLED_FAULT


class MethodNotAllowedError(ProxyError):
    """Client used a verb other than GET or POST."""

    kind = ErrorKind.METHOD_NOT_ALLOWED

    def __init__(self, method: str):
        self.method = method
        super().__init__(f"Method {method} not allowed.")


class RPCNotAllowedError(ProxyError):
    """Request path is outside the allowed RPC surface."""

    kind = ErrorKind.RPC_NOT_ALLOWED

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"RPC {path} not allowed.")


class UpstreamFailureError(ProxyError):
    """Upstream node answered with a non-200 status."""

    kind = ErrorKind.UPSTREAM_FAILURE

    def __init__(self, node: str, upstream_status: int):
        self.node = node
        self.upstream_status = upstream_status
        super().__init__(f"Upstream {node} returned status {upstream_status}")


class UpstreamTimeoutError(ProxyError):
    """Upstream node did not answer within UPSTREAM_TIMEOUT."""

    kind = ErrorKind.UPSTREAM_TIMEOUT

    def __init__(self, node: str, cause: Optional[Exception] = None):
        self.node = node
        self.cause = cause
        super().__init__(f"Upstream {node} timed out")


class UpstreamUnreachableError(Exception):
    """Transport failure reaching an upstream node. Rendered as an unhandled fault."""

    def __init__(self, node: str, cause: Exception):
        self.node = node
        self.cause = cause
        # Node URL stays in the logs; the message reaches clients.
        super().__init__(f"Upstream unreachable: {type(cause).__name__}: {cause}")


def render_error(exc: Exception) -> Response:
    """
    Build the canonical response for an error.

    Anything that is not a ProxyError is an unhandled fault and is answered
    with 500 plus the exception type and message.
    """
    kind = getattr(exc, "kind", ErrorKind.UNHANDLED_FAULT)
    headers: Dict[str, str] = {}

    if kind is ErrorKind.METHOD_NOT_ALLOWED:
        status_code = status.HTTP_405_METHOD_NOT_ALLOWED
        body = f"Method {exc.method} not allowed."
        headers["Allow"] = ", ".join(ALLOWED_METHODS)
    elif kind is ErrorKind.RPC_NOT_ALLOWED:
        status_code = status.HTTP_403_FORBIDDEN
        body = f"RPC {exc.path} not allowed."
    elif kind is ErrorKind.UPSTREAM_FAILURE:
        status_code = status.HTTP_404_NOT_FOUND
        body = "An error occurred. Please try again later."
    elif kind is ErrorKind.UPSTREAM_TIMEOUT:
        status_code = status.HTTP_408_REQUEST_TIMEOUT
        body = "RPC timed out. Please try again later."
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        body = f"Internal Server Error: {type(exc).__name__}: {exc}"

    return PlainTextResponse(content=body, status_code=status_code, headers=headers)


# ===========================================
# Exception Handlers
# ===========================================


async def proxy_error_handler(request: Request, exc: ProxyError):
    """
    Handler for ProxyError raised outside the dispatcher.
    """
    return render_error(exc)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """
    Handler for HTTPException raised by the router.

    Verbs with no route at all are answered like any other disallowed method.
    """
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        return render_error(MethodNotAllowedError(request.method))
    return PlainTextResponse(
        content=str(exc.detail), status_code=exc.status_code, headers=exc.headers
    )


async def global_exception_handler(request: Request, exc: Exception):
    """
    Catch-all handler for unhandled exceptions.
    """
    logger.error(
        f"Global exception handler caught: {exc}",
        exc_info=True,
        extra={
            "path": request.url.path,
            "method": request.method,
        },
    )
    return render_error(exc)
