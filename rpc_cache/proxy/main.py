"""
RPC Cache Proxy - caching reverse proxy for blockchain RPC nodes

Forwards RPC calls to a randomly chosen upstream node and caches successful
replies keyed by URL (GET) or by path and body hash (POST).
"""

import logging
from contextlib import asynccontextmanager

from fastapi import BackgroundTasks, FastAPI, Request

from .api.deps import DispatcherDep
from .config import config
from .core.logging_config import setup_logging
from .exceptions import register_exception_handlers
from .lifecycle import manage_lifespan
from .middleware import request_context_middleware
from .models import InboundRequest

setup_logging()
logger = logging.getLogger("proxy.main")

# Every standard verb is routed here so the dispatcher, not the router, answers 405.
PROXY_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS", "TRACE"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    async with manage_lifespan(app, config):
        yield


app = FastAPI(
    title="RPC Cache Proxy",
    version="1.0.0",
    lifespan=lifespan,
    root_path=config.root_path,
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
)

app.middleware("http")(request_context_middleware)
register_exception_handlers(app)


@app.api_route("/{path:path}", methods=PROXY_METHODS)
async def proxy_handler(
    request: Request,
    background_tasks: BackgroundTasks,
    dispatcher: DispatcherDep,
):
    """
    Catch-all route: validate, serve from cache or forward to an upstream node.
    """
    body = await request.body() if request.method.upper() == "POST" else b""
    inbound = InboundRequest.from_request(request, body)
    return await dispatcher.dispatch(inbound, background_tasks)


if __name__ == "__main__":
    import uvicorn

    host, _, port = config.UVICORN_BIND_ADDR.rpartition(":")
    uvicorn.run(app, host=host or "0.0.0.0", port=int(port))
