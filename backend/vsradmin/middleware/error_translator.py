"""
VSRAdmin Backend - Error Translator Middleware
===============================================

What:  Last line of defense around the request pipeline.
How:   Any exception that escapes a route handler (or an inner interceptor)
       is logged with its traceback and request id, then answered with a
       500 Failure envelope carrying a non-specific message.
When:  Innermost interceptor, directly around the routes.

Handlers translate their own expected failures (bad payloads, file writes,
collaborator errors), so reaching this code means a bug or an unanticipated
fault. The client never sees a stack trace. In the development environment
the exception text is appended to the message to speed up debugging.
"""

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from vsradmin.config import settings
from vsradmin.middleware.request_id import request_id_var
from vsradmin.schemas.envelope import failure_response

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred. Please try again or contact support."


class ErrorTranslatorMiddleware(BaseHTTPMiddleware):
    """Interceptor contract: wrap-and-translate; never re-raises."""

    def __init__(self, app, expose_details: bool | None = None):
        super().__init__(app)
        self.expose_details = settings.is_development if expose_details is None else expose_details

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            rid = request_id_var.get("")
            logger.error(
                "[%s] Unhandled error on %s %s: %s",
                rid,
                request.method,
                request.url.path,
                str(e),
                exc_info=True,
            )
            message = UNEXPECTED_ERROR_MESSAGE
            if self.expose_details:
                message = f"{message} ({type(e).__name__}: {e})"
            return failure_response(message, 500)
