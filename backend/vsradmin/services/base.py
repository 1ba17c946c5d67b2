"""
VSRAdmin Backend - Collaborator Service Interfaces
===================================================

What:  Abstract contracts for the services the request handlers call.
Why:   Handlers depend only on these narrow interfaces. The concrete
       implementations (SQL adapters in this package, or fakes in tests) are
       handed to the routers in `main.create_app()`.

Contract shared by every method:
    - returns plain schema objects, never ORM rows
    - any failure is raised; handlers turn it into a Failure envelope (500)
    - implementations own connection pooling and timeouts
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from vsradmin.schemas.auth import LoginResult, LoginValues
from vsradmin.schemas.customer import CompanySummary, CustomerInfo, MasterCustomer, SearchPage
from vsradmin.schemas.instruction import Instruction, ReqInput


class CompanyService(ABC):
    """Restaurant records and operator login."""

    @abstractmethod
    async def validate_credentials(self, values: LoginValues) -> Optional[LoginResult]:
        """Returns the operator on success, None when the credentials do not match."""

    @abstractmethod
    async def create_company(
        self, customer: MasterCustomer, logo_key: Optional[str]
    ) -> CompanySummary:
        """
        Store a restaurant record.

        Args:
            customer: Parsed record; its DID is the immutable identifier.
            logo_key: Storage key of the logo already written for this DID, or None.
        """

    @abstractmethod
    async def search_companies(self, search: str, pageno: int) -> SearchPage:
        """
        One page of restaurants matching `search` ("" matches all).

        `totalrow` counts matches across all pages and must be set even when 0.
        """


class InstructionService(ABC):
    """Free-text instructions attached to a restaurant."""

    @abstractmethod
    async def add_instruction(self, req: ReqInput) -> Instruction:
        ...

    @abstractmethod
    async def load_instructions(self, customer_id: int) -> List[Instruction]:
        """All instructions of a customer, oldest first."""


class CustomerService(ABC):
    """Supplementary customer profile data."""

    @abstractmethod
    async def upsert_customer_info(self, info: CustomerInfo) -> CustomerInfo:
        """Insert or replace the profile of `info.customer_id`; returns the stored profile."""
