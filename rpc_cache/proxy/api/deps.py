"""
Dependency Injection for the proxy API.

Manage request handler dependencies using FastAPI Depends.
"""

from typing import Annotated

from fastapi import Depends, Request

from ..services.dispatcher import ProxyDispatcher


def get_dispatcher(request: Request) -> ProxyDispatcher:
    return request.app.state.dispatcher


DispatcherDep = Annotated[ProxyDispatcher, Depends(get_dispatcher)]
