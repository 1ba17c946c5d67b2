"""
VSRAdmin Backend - Shared Handler Helpers
==========================================

What:  The failure paths every request handler shares.
Why:   Handlers translate their own expected failures into Failure envelopes,
       so only unanticipated faults reach the error translator middleware.

Status mapping:
    PayloadError (validator result)   → its kind's status (400)
    VSRAdminError (FileWriteError...) → exc.status_code
    any other collaborator exception  → 500, message carries the error text
"""

import logging

from fastapi.responses import JSONResponse

from vsradmin.exceptions import VSRAdminError
from vsradmin.results import PayloadError
from vsradmin.schemas.envelope import failure_response


def payload_failure(error: PayloadError, logger: logging.Logger) -> JSONResponse:
    logger.warning("Rejected request (%s): %s", error.kind.value, error.message)
    return failure_response(error.message, error.status_code)


def collaborator_failure(
    operation: str,
    exc: Exception,
    logger: logging.Logger,
) -> JSONResponse:
    """
    Log a failed service call with its traceback and answer with a Failure envelope.

    The underlying message is kept so the operator can diagnose the problem
    from the console.
    """
    if isinstance(exc, VSRAdminError):
        logger.error(
            "%s failed: %s | Context: %s", operation, exc.message, exc.context, exc_info=exc
        )
        return failure_response(exc.message, exc.status_code)

    logger.error("An error occurred in %s: %s", operation, str(exc), exc_info=exc)
    return failure_response(f"An error occurred: {exc}", 500)
