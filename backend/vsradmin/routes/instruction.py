"""
VSRAdmin Backend - Instruction Route Handlers
==============================================

What:  POST /api/Instruction adds a free-text instruction to a restaurant;
       GET /api/Instruction?customerid=N lists them, oldest first.
"""

import logging

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse

from vsradmin.routes.common import collaborator_failure
from vsradmin.schemas.envelope import GenericResponse, envelope_response
from vsradmin.schemas.instruction import ReqInput
from vsradmin.services.base import InstructionService

logger = logging.getLogger(__name__)


def create_router(instruction_service: InstructionService) -> APIRouter:
    router = APIRouter(prefix="/api", tags=["Restaurant"])

    @router.post(
        "/Instruction",
        response_model=GenericResponse,
        summary="Add an instruction for a restaurant",
    )
    async def add_instruction(req_input: ReqInput) -> JSONResponse:
        logger.info("Adding instruction for customer %s", req_input.customer_id)
        try:
            created = await instruction_service.add_instruction(req_input)
        except Exception as e:
            return collaborator_failure("AddInstruction", e, logger)
        return envelope_response(
            GenericResponse.success(created, message="Instruction added successfully")
        )

    @router.get(
        "/Instruction",
        response_model=GenericResponse,
        summary="List the instructions of a restaurant",
    )
    async def load_instruction(
        customerid: int = Query(..., description="Restaurant DID"),
    ) -> JSONResponse:
        try:
            instructions = await instruction_service.load_instructions(customerid)
        except Exception as e:
            return collaborator_failure("LoadInstruction", e, logger)

        logger.info("Loaded %d instructions for customer %s", len(instructions), customerid)
        return envelope_response(GenericResponse.success(instructions))

    return router
