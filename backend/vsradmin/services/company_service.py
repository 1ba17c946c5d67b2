"""
VSRAdmin Backend - SQL Company Service
=======================================

What:  SQLAlchemy implementation of `CompanyService` (restaurants + login).
How:   Each call opens its own session from the injected factory and runs in
       one transaction; SQLAlchemy errors are wrapped in CollaboratorError
       with the original message for the operator.
Who:   Composed into the auth and restaurant routers by `main.create_app()`.

Search Strategy:
    Offset pagination with a fixed page size (PAGE_SIZE):
        page n → OFFSET (n - 1) * size LIMIT size, ordered by name then DID
    The match count runs as a separate COUNT(*) with the same filter, so
    `totalrow` is exact even when the requested page is past the end.
"""

import logging
from typing import Optional

from sqlalchemy import func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from vsradmin.config import settings
from vsradmin.exceptions import CollaboratorError
from vsradmin.models.admin import AdminUser, Restaurant
from vsradmin.schemas.auth import LoginResult, LoginValues
from vsradmin.schemas.customer import CompanySummary, MasterCustomer, SearchPage
from vsradmin.services.base import CompanyService
from vsradmin.services.passwords import verify_password

logger = logging.getLogger(__name__)

# Columns a search term is matched against
_SEARCH_COLUMNS = (Restaurant.name, Restaurant.city, Restaurant.email, Restaurant.phone)


def _like_pattern(term: str) -> str:
    """Escape LIKE wildcards so user input is matched literally."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _to_customer(row: Restaurant) -> MasterCustomer:
    return MasterCustomer(
        did=row.did,
        name=row.name,
        contact_person=row.contact_person,
        email=row.email,
        phone=row.phone,
        address=row.address,
        city=row.city,
        website=row.website,
        is_active=row.is_active,
    )


class SqlCompanyService(CompanyService):

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        page_size: Optional[int] = None,
    ):
        self.session_factory = session_factory
        self.page_size = page_size or settings.page_size

    async def validate_credentials(self, values: LoginValues) -> Optional[LoginResult]:
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    select(AdminUser).where(
                        AdminUser.username == values.username,
                        AdminUser.is_active.is_(True),
                    )
                )
                user = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise CollaboratorError(
                message=f"Login check failed: {e}",
                operation="validate_credentials",
            ) from e

        if user is None or not verify_password(values.password, user.password_hash):
            return None
        return LoginResult(username=user.username, full_name=user.full_name)

    async def create_company(
        self, customer: MasterCustomer, logo_key: Optional[str]
    ) -> CompanySummary:
        """
        Insert the restaurant, or update it in place when the DID exists.

        An existing logo_key is kept when this request carried no logo.
        """
        # Snake_case field names match the ORM attributes one to one
        fields = customer.model_dump(exclude={"did"})
        try:
            async with self.session_factory() as session, session.begin():
                row = await session.get(Restaurant, customer.did)
                if row is None:
                    row = Restaurant(did=customer.did, logo_key=logo_key, **fields)
                    session.add(row)
                    logger.info("Inserting restaurant DID %s", customer.did)
                else:
                    for name, value in fields.items():
                        setattr(row, name, value)
                    # No upload this time: keep pointing at the previous logo
                    if logo_key is not None:
                        row.logo_key = logo_key
                    logger.info("Updating restaurant DID %s", customer.did)
                summary = CompanySummary(did=row.did, name=row.name, logo=row.logo_key)
        except SQLAlchemyError as e:
            raise CollaboratorError(
                message=f"Could not save restaurant {customer.did}: {e}",
                operation="create_company",
                context={"did": customer.did},
            ) from e
        return summary

    async def search_companies(self, search: str, pageno: int) -> SearchPage:
        query = select(Restaurant)
        count_query = select(func.count()).select_from(Restaurant)
        if search:
            pattern = _like_pattern(search)
            match = or_(*(col.ilike(pattern, escape="\\") for col in _SEARCH_COLUMNS))
            query = query.where(match)
            count_query = count_query.where(match)

        offset = (pageno - 1) * self.page_size
        query = (
            query.order_by(Restaurant.name, Restaurant.did)
            .offset(offset)
            .limit(self.page_size)
        )

        try:
            async with self.session_factory() as session:
                total = (await session.execute(count_query)).scalar() or 0
                # A page past the last match is empty and its OFFSET is never sent:
                # offsets beyond 64 bits would overflow the driver
                if offset >= total:
                    rows = []
                else:
                    rows = (await session.execute(query)).scalars().all()
        except SQLAlchemyError as e:
            raise CollaboratorError(
                message=f"Restaurant search failed: {e}",
                operation="search_companies",
                context={"search": search, "pageno": pageno},
            ) from e

        return SearchPage(
            rows=[_to_customer(row) for row in rows],
            totalrow=total,
        )
