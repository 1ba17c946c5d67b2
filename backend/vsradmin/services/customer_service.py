"""SQLAlchemy implementation of `CustomerService` (customer_info upserts)."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from vsradmin.exceptions import CollaboratorError
from vsradmin.models.admin import CustomerInfoRecord
from vsradmin.schemas.customer import CustomerInfo
from vsradmin.services.base import CustomerService

logger = logging.getLogger(__name__)


class SqlCustomerService(CustomerService):

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def upsert_customer_info(self, info: CustomerInfo) -> CustomerInfo:
        fields = info.model_dump(exclude={"customer_id"})
        try:
            async with self.session_factory() as session, session.begin():
                row = await session.get(CustomerInfoRecord, info.customer_id)
                if row is None:
                    row = CustomerInfoRecord(customer_id=info.customer_id, **fields)
                    session.add(row)
                else:
                    for name, value in fields.items():
                        setattr(row, name, value)
        except SQLAlchemyError as e:
            raise CollaboratorError(
                message=f"Could not save customer info for {info.customer_id}: {e}",
                operation="upsert_customer_info",
                context={"customer_id": info.customer_id},
            ) from e

        logger.info("Customer info stored for customer %s", info.customer_id)
        return CustomerInfo(
            customer_id=row.customer_id,
            contact_name=row.contact_name,
            phone=row.phone,
            email=row.email,
            address=row.address,
            notes=row.notes,
        )
