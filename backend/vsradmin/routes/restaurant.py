"""
VSRAdmin Backend - Restaurant Route Handlers
=============================================

What:  POST /api/Restaurant (create/update with optional logo) and
       GET /api/Restaurant (paginated search).
Who:   Called by the admin console's restaurant registration and list pages.

Request Flow (POST):
    1. Read the multipart form: `customerdata` (JSON text) + optional file
    2. Parse `customerdata` into MasterCustomer. Any failure → 400, and
       nothing is written or called.
    3. Store the logo as `{DID}.jpg` (no-op without a file). A failed write
       → 500, and the record is not created.
    4. CompanyService.create_company(customer, logo_key)
    5. Success envelope with the CompanySummary

Request Flow (GET):
    1. Normalize `search` / `pageno` (pageno < 1 → 400 or clamped, see PAGE_POLICY)
    2. CompanyService.search_companies(search, pageno)
    3. Success envelope with {"rows": [...], "totalrow": n}. totalrow = 0 is a
       normal result, logged as a warning.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse

from vsradmin.config import settings
from vsradmin.routes.common import collaborator_failure, payload_failure
from vsradmin.schemas.envelope import GenericResponse, envelope_response
from vsradmin.services.base import CompanyService
from vsradmin.services.logo_service import LogoService
from vsradmin.validators import (
    CUSTOMER_FIELD,
    FILE_FIELD,
    parse_company_search,
    parse_customer_data,
    read_customer_form,
)

logger = logging.getLogger(__name__)

# The form is read by hand (to answer malformed JSON with our own 400), so the
# multipart schema is declared explicitly for the API docs
_MULTIPART_BODY = {
    "requestBody": {
        "required": True,
        "content": {
            "multipart/form-data": {
                "schema": {
                    "type": "object",
                    "required": [CUSTOMER_FIELD],
                    "properties": {
                        CUSTOMER_FIELD: {
                            "type": "string",
                            "description": 'JSON-encoded restaurant, e.g. {"DID": 42, "Name": "..."}',
                        },
                        FILE_FIELD: {
                            "type": "string",
                            "format": "binary",
                            "description": "Optional logo image, stored as {DID}.jpg",
                        },
                    },
                }
            }
        },
    }
}


def create_router(
    company_service: CompanyService,
    logo_service: LogoService,
    page_policy: Optional[str] = None,
) -> APIRouter:
    router = APIRouter(prefix="/api", tags=["Restaurant"])
    policy = page_policy or settings.page_policy

    @router.post(
        "/Restaurant",
        response_model=GenericResponse,
        responses={
            400: {"description": "Malformed customerdata", "model": GenericResponse},
            500: {"description": "Logo or record could not be saved", "model": GenericResponse},
        },
        summary="Register or update a restaurant with an optional logo",
        openapi_extra=_MULTIPART_BODY,
    )
    async def add_company(request: Request) -> JSONResponse:
        # Step 1: Read the multipart form (JSON text + optional logo)
        # Why not a Form() parameter: a bad body must become our 400 envelope, not a 422
        form_result = await read_customer_form(request)
        if not form_result.ok:
            return payload_failure(form_result.error, logger)
        form_data = form_result.value

        # Step 2: Parse customerdata; nothing is written until this succeeds
        customer_result = parse_customer_data(form_data.customer_json)
        if not customer_result.ok:
            # Release the spooled upload; it will never be stored
            if form_data.upload is not None:
                await form_data.upload.close()
            return payload_failure(customer_result.error, logger)
        customer = customer_result.value

        # Step 3 + 4: Store the logo, then the record
        # Why this order: a failed write must leave no record that claims a logo
        try:
            logo_key = await logo_service.associate(customer.did, form_data.upload)
            summary = await company_service.create_company(customer, logo_key)
        except Exception as e:
            return collaborator_failure("AddCompany", e, logger)

        logger.info(
            "AddCompany executed successfully for DID %s (logo=%s)",
            summary.did,
            summary.logo or "none",
        )
        return envelope_response(
            GenericResponse.success(summary, message="Restaurant saved successfully")
        )

    @router.get(
        "/Restaurant",
        response_model=GenericResponse,
        responses={
            400: {"description": "Invalid page number", "model": GenericResponse},
            500: {"description": "Search failed", "model": GenericResponse},
        },
        summary="Search restaurants, one page at a time",
    )
    async def load_company(
        pageno: int = Query(..., description="1-based page number"),
        search: Optional[str] = Query(default=None, description="Free-text filter; empty matches all"),
    ) -> JSONResponse:
        logger.info("Received Search: '%s', Page Number: %d", search or "", pageno)

        # pageno < 1 is answered here; the collaborator only sees pages >= 1
        query_result = parse_company_search(search, pageno, policy)
        if not query_result.ok:
            return payload_failure(query_result.error, logger)
        query = query_result.value

        try:
            page = await company_service.search_companies(query.search, query.pageno)
        except Exception as e:
            return collaborator_failure("LoadCompany", e, logger)

        logger.info("Database returned %d rows in total, %d on this page", page.totalrow, len(page.rows))
        # Zero matches is a normal outcome: Success envelope, warning for the operator
        if page.totalrow == 0:
            logger.warning("No data found for Search: '%s', Page: %d", query.search, query.pageno)

        return envelope_response(GenericResponse.success(page))

    return router
