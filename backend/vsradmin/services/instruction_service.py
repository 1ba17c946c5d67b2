"""
VSRAdmin Backend - SQL Instruction Service
===========================================

What:  SQLAlchemy implementation of `InstructionService`.
How:   Instructions are append-only rows keyed by an autoincrement id; loading
       orders by that id, which is also insertion order.
"""

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from vsradmin.exceptions import CollaboratorError
from vsradmin.models.admin import RestaurantInstruction
from vsradmin.schemas.instruction import Instruction, ReqInput
from vsradmin.services.base import InstructionService

logger = logging.getLogger(__name__)


def _to_instruction(row: RestaurantInstruction) -> Instruction:
    return Instruction(
        instruction_id=row.instruction_id,
        customer_id=row.customer_id,
        instruction=row.instruction,
        created_by=row.created_by,
        created_at=row.created_at,
    )


class SqlInstructionService(InstructionService):

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def add_instruction(self, req: ReqInput) -> Instruction:
        try:
            async with self.session_factory() as session, session.begin():
                row = RestaurantInstruction(
                    customer_id=req.customer_id,
                    instruction=req.instruction,
                    created_by=req.created_by,
                )
                session.add(row)
                # flush assigns instruction_id and created_at defaults
                await session.flush()
                created = _to_instruction(row)
        except SQLAlchemyError as e:
            raise CollaboratorError(
                message=f"Could not add instruction for customer {req.customer_id}: {e}",
                operation="add_instruction",
                context={"customer_id": req.customer_id},
            ) from e

        logger.info(
            "Instruction %s added for customer %s",
            created.instruction_id,
            created.customer_id,
        )
        return created

    async def load_instructions(self, customer_id: int) -> List[Instruction]:
        query = (
            select(RestaurantInstruction)
            .where(RestaurantInstruction.customer_id == customer_id)
            .order_by(RestaurantInstruction.instruction_id)
        )
        try:
            async with self.session_factory() as session:
                rows = (await session.execute(query)).scalars().all()
        except SQLAlchemyError as e:
            raise CollaboratorError(
                message=f"Could not load instructions for customer {customer_id}: {e}",
                operation="load_instructions",
                context={"customer_id": customer_id},
            ) from e
        return [_to_instruction(row) for row in rows]
