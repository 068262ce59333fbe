"""
Asset Fixup Middleware

Gives every request a fresh ScriptRegistry at `request.state.scripts`.
Endpoints and templates register and queue scripts on it; once the
endpoint has produced its response the asset dependency scheduler runs
exactly once, and the final queue is reported in the X-Script-Queue
header.
"""

from __future__ import annotations

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from cms_system.assets.scheduler import AssetDependencyScheduler
from cms_system.assets.scripts import ScriptRegistry

logger = logging.getLogger(__name__)

SCRIPT_QUEUE_HEADER = "X-Script-Queue"


def get_scripts(request: Request) -> ScriptRegistry:
    """FastAPI dependency returning the current request's script registry."""
    return request.state.scripts


class AssetFixupMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, loader_name: str | None = None):
        super().__init__(app)
        self.scheduler = AssetDependencyScheduler(loader_name)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        scripts = ScriptRegistry()
        request.state.scripts = scripts

        response = await call_next(request)

        self.scheduler.run(scripts)
        if len(scripts.queue):
            response.headers[SCRIPT_QUEUE_HEADER] = ",".join(scripts.queue)
        return response
