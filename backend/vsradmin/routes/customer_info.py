"""POST /api/CustomerInfo: insert or update a restaurant's supplementary profile."""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from vsradmin.routes.common import collaborator_failure
from vsradmin.schemas.customer import CustomerInfo
from vsradmin.schemas.envelope import GenericResponse, envelope_response
from vsradmin.services.base import CustomerService

logger = logging.getLogger(__name__)


def create_router(customer_service: CustomerService) -> APIRouter:
    router = APIRouter(prefix="/api", tags=["CustomerInfo"])

    @router.post(
        "/CustomerInfo",
        response_model=GenericResponse,
        responses={500: {"description": "Profile could not be saved", "model": GenericResponse}},
        summary="Save customer profile information",
    )
    async def add_customer_info(addcustomerinfo: CustomerInfo) -> JSONResponse:
        logger.info("Saving customer info for customer %s", addcustomerinfo.customer_id)
        try:
            stored = await customer_service.upsert_customer_info(addcustomerinfo)
        except Exception as e:
            return collaborator_failure("AddCustomerInfo", e, logger)
        return envelope_response(
            GenericResponse.success(stored, message="Customer info saved successfully")
        )

    return router
