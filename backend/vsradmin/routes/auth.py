"""
VSRAdmin Backend - Login Route
===============================

What:  POST /api/ValidateLogin checks operator credentials.
How:   Body is validated by FastAPI into LoginValues; one call to
       CompanyService.validate_credentials(); result wrapped in an envelope.

Credentials never appear in logs: only the username is logged, and
LoginValues hides the password from its repr.
"""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from vsradmin.routes.common import collaborator_failure
from vsradmin.schemas.auth import LoginValues
from vsradmin.schemas.envelope import GenericResponse, envelope_response
from vsradmin.services.base import CompanyService

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid username or password"


def create_router(company_service: CompanyService) -> APIRouter:
    router = APIRouter(prefix="/api", tags=["Login"])

    @router.post(
        "/ValidateLogin",
        response_model=GenericResponse,
        summary="Validate operator credentials",
    )
    async def validate_login(loginvalues: LoginValues) -> JSONResponse:
        # Username only: LoginValues never reaches a log line as a whole
        logger.info("Login attempt for user '%s'", loginvalues.username)
        try:
            result = await company_service.validate_credentials(loginvalues)
        except Exception as e:
            return collaborator_failure("ValidateLogin", e, logger)

        # A wrong password is a normal outcome: 200 with a Failure envelope
        if result is None:
            logger.warning("Login rejected for user '%s'", loginvalues.username)
            return envelope_response(GenericResponse.failure(INVALID_CREDENTIALS_MESSAGE))

        logger.info("Login succeeded for user '%s'", result.username)
        return envelope_response(GenericResponse.success(result, message="Login successful"))

    return router
