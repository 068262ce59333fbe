"""
System Request Middleware

Flags admin requests on `request.state.is_admin` and announces the
request lifecycle on the event dispatcher:

  system.init   → before the endpoint runs
  system.loaded → after the endpoint has produced a response
"""

from __future__ import annotations

import re

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from cms_system.extensions.events import EVENT_SYSTEM_INIT, EVENT_SYSTEM_LOADED, EventDispatcher


def admin_path_pattern(prefix: str) -> re.Pattern[str]:
    return re.compile(rf"^{re.escape(prefix.rstrip('/'))}(/?$|/.+)")


class SystemRequestMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, dispatcher: EventDispatcher, admin_prefix: str = "/admin"):
        super().__init__(app)
        self.dispatcher = dispatcher
        self.admin_pattern = admin_path_pattern(admin_prefix)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request.state.is_admin = bool(self.admin_pattern.match(request.url.path))

        self.dispatcher.emit(EVENT_SYSTEM_INIT, request)
        response = await call_next(request)
        self.dispatcher.emit(EVENT_SYSTEM_LOADED, request)

        return response
