"""
Request logging middleware.

Logs method, path, status and duration. Query strings are left out since
they may carry filter values from user documents.
"""

import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for logging HTTP requests and responses."""

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        method = request.method
        path = request.url.path

        try:
            response: Response = await call_next(request)
        except Exception as e:
            logger.exception(
                f"{method} {path} - {type(e).__name__} after "
                f"{round((time.time() - start_time) * 1000, 2)}ms"
            )
            raise

        logger.info(
            f"{method} {path} - {response.status_code} "
            f"({round((time.time() - start_time) * 1000, 2)}ms)"
        )
        return response


class BareOptionsMiddleware(BaseHTTPMiddleware):
    """
    Answers every OPTIONS request, CORS preflight or not, with 200 and the
    configured CORS policy. Registered outside CORSMiddleware, which would
    otherwise reject preflights asking for unlisted headers or methods.
    """

    def __init__(self, app, allow_origins, allow_methods, allow_headers):
        super().__init__(app)
        self.allow_origins = list(allow_origins)
        self.headers = {
            "Access-Control-Allow-Methods": ", ".join(allow_methods),
            "Access-Control-Allow-Headers": ", ".join(allow_headers),
        }

    def _allow_origin(self, origin):
        if "*" in self.allow_origins:
            return "*"
        if origin in self.allow_origins:
            return origin
        return None

    async def dispatch(self, request: Request, call_next):
        if request.method != "OPTIONS":
            return await call_next(request)

        headers = dict(self.headers)
        allow_origin = self._allow_origin(request.headers.get("origin"))
        if allow_origin is not None:
            headers["Access-Control-Allow-Origin"] = allow_origin
            if allow_origin != "*":
                headers["Vary"] = "Origin"
        return Response(status_code=200, headers=headers)
