"""
VSRAdmin Backend - SQL Collaborator Tests
==========================================

What:  SqlCompanyService, SqlInstructionService and SqlCustomerService against
       a real (SQLite, aiosqlite) database created per test.

What we test:
    ✅ Restaurant insert, update-in-place by DID, logo key retention
    ✅ Search filter, case-insensitivity, literal wildcards, pagination, totalrow
    ✅ Login against PBKDF2 hashes, inactive users
    ✅ Instructions in insertion order, customer info upsert
    ✅ Database errors surface as CollaboratorError
"""

import pytest

from vsradmin.database import build_engine, build_session_factory
from vsradmin.exceptions import CollaboratorError
from vsradmin.models.admin import AdminUser
from vsradmin.schemas.auth import LoginValues
from vsradmin.schemas.customer import CustomerInfo, MasterCustomer
from vsradmin.schemas.instruction import ReqInput
from vsradmin.services.company_service import SqlCompanyService
from vsradmin.services.customer_service import SqlCustomerService
from vsradmin.services.instruction_service import SqlInstructionService
from vsradmin.services.passwords import hash_password


async def seed(service: SqlCompanyService, *names: str) -> None:
    for did, name in enumerate(names, start=1):
        await service.create_company(MasterCustomer(did=did, name=name), None)


class TestSqlCompanyServiceCreate:

    @pytest.mark.asyncio
    async def test_insert_returns_summary(self, session_factory):
        service = SqlCompanyService(session_factory)

        summary = await service.create_company(
            MasterCustomer(did=42, name="Blue Door Bistro", city="Lyon"), "42.jpg"
        )

        assert (summary.did, summary.name, summary.logo) == (42, "Blue Door Bistro", "42.jpg")
        page = await service.search_companies("", 1)
        assert page.totalrow == 1
        assert page.rows[0].city == "Lyon"

    @pytest.mark.asyncio
    async def test_same_did_updates_in_place(self, session_factory):
        service = SqlCompanyService(session_factory)
        await service.create_company(MasterCustomer(did=42, name="Old Name"), "42.jpg")

        summary = await service.create_company(MasterCustomer(did=42, name="New Name"), None)

        assert summary.name == "New Name"
        assert summary.logo == "42.jpg"
        page = await service.search_companies("", 1)
        assert page.totalrow == 1
        assert page.rows[0].name == "New Name"


class TestSqlCompanyServiceSearch:

    @pytest.mark.asyncio
    async def test_empty_store(self, session_factory):
        page = await SqlCompanyService(session_factory).search_companies("", 1)

        assert page.rows == []
        assert page.totalrow == 0

    @pytest.mark.asyncio
    async def test_filter_is_case_insensitive(self, session_factory):
        service = SqlCompanyService(session_factory)
        await seed(service, "Pizza Roma", "Sushi Go", "pizza napoli")

        page = await service.search_companies("PIZZA", 1)

        assert page.totalrow == 2
        assert [r.name for r in page.rows] == ["Pizza Roma", "pizza napoli"]

    @pytest.mark.asyncio
    async def test_wildcards_match_literally(self, session_factory):
        service = SqlCompanyService(session_factory)
        await seed(service, "100% Vegan", "Burger Barn")

        page = await service.search_companies("%", 1)

        assert [r.name for r in page.rows] == ["100% Vegan"]

    @pytest.mark.asyncio
    async def test_pagination_keeps_total(self, session_factory):
        service = SqlCompanyService(session_factory, page_size=2)
        await seed(service, "A1", "A2", "A3", "A4", "A5")

        third = await service.search_companies("", 3)
        past_end = await service.search_companies("", 4)

        assert [r.name for r in third.rows] == ["A5"]
        assert third.totalrow == 5
        assert past_end.rows == []
        assert past_end.totalrow == 5

    @pytest.mark.asyncio
    async def test_page_beyond_64_bit_offset(self, session_factory):
        service = SqlCompanyService(session_factory)
        await seed(service, "A1", "A2")

        page = await service.search_companies("", 10**18)

        assert page.rows == []
        assert page.totalrow == 2

    @pytest.mark.asyncio
    async def test_missing_tables_raise_collaborator_error(self, tmp_path):
        engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'empty.db'}")
        service = SqlCompanyService(build_session_factory(engine))

        with pytest.raises(CollaboratorError, match="Restaurant search failed"):
            await service.search_companies("", 1)

        await engine.dispose()


class TestSqlCompanyServiceLogin:

    async def add_user(self, session_factory, username, password, is_active=True):
        async with session_factory() as session, session.begin():
            session.add(
                AdminUser(
                    username=username,
                    full_name="Operations Desk",
                    password_hash=hash_password(password, iterations=1000),
                    is_active=is_active,
                )
            )

    @pytest.mark.asyncio
    async def test_valid_credentials(self, session_factory):
        await self.add_user(session_factory, "ops", "hunter2")

        result = await SqlCompanyService(session_factory).validate_credentials(
            LoginValues(username="ops", password="hunter2")
        )

        assert result.username == "ops"
        assert result.full_name == "Operations Desk"

    @pytest.mark.asyncio
    async def test_wrong_password_or_unknown_user(self, session_factory):
        await self.add_user(session_factory, "ops", "hunter2")
        service = SqlCompanyService(session_factory)

        assert await service.validate_credentials(LoginValues(username="ops", password="nope")) is None
        assert await service.validate_credentials(LoginValues(username="ghost", password="x")) is None

    @pytest.mark.asyncio
    async def test_inactive_user_rejected(self, session_factory):
        await self.add_user(session_factory, "former", "hunter2", is_active=False)

        result = await SqlCompanyService(session_factory).validate_credentials(
            LoginValues(username="former", password="hunter2")
        )

        assert result is None


class TestSqlInstructionService:

    @pytest.mark.asyncio
    async def test_add_and_load_in_order(self, session_factory):
        await SqlCompanyService(session_factory).create_company(
            MasterCustomer(did=7, name="Harbor Grill"), None
        )
        service = SqlInstructionService(session_factory)

        first = await service.add_instruction(
            ReqInput(customer_id=7, instruction="No onions", created_by="ops")
        )
        await service.add_instruction(ReqInput(customer_id=7, instruction="Back door"))

        assert first.instruction_id is not None
        assert first.created_at is not None
        loaded = await service.load_instructions(7)
        assert [i.instruction for i in loaded] == ["No onions", "Back door"]
        assert await service.load_instructions(8) == []


class TestSqlCustomerService:

    @pytest.mark.asyncio
    async def test_upsert(self, session_factory):
        await SqlCompanyService(session_factory).create_company(
            MasterCustomer(did=5, name="Corner Deli"), None
        )
        service = SqlCustomerService(session_factory)

        await service.upsert_customer_info(CustomerInfo(customer_id=5, contact_name="Ana"))
        stored = await service.upsert_customer_info(
            CustomerInfo(customer_id=5, contact_name="Ana Ruiz", notes="Prefers email")
        )

        assert stored.customer_id == 5
        assert stored.contact_name == "Ana Ruiz"
        assert stored.notes == "Prefers email"
