"""
VSRAdmin Backend - Restaurant & Customer Schemas
=================================================

What:  Pydantic models for restaurant (master customer) records, paginated
       search, and supplementary customer info.
Why:   Strict input validation and a stable wire contract. Attribute names are
       snake_case; the wire keeps the admin console's PascalCase keys through
       aliases (`DID`, `CustomerID`, ...). Both spellings are accepted on input.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from starlette.datastructures import UploadFile


class MasterCustomer(BaseModel):
    """
    What:  The canonical restaurant/customer record.
    Who:   Parsed from the `customerdata` form field of POST /api/Restaurant and
           returned as rows of GET /api/Restaurant.

    DID is the immutable identifier; the logo for the restaurant is stored
    under `{DID}.jpg`.
    """

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    did: int = Field(alias="DID", ge=1, description="Restaurant identifier")
    name: str = Field(alias="Name", min_length=1, max_length=200)
    contact_person: Optional[str] = Field(default=None, alias="ContactPerson", max_length=200)
    email: Optional[str] = Field(default=None, alias="Email", max_length=254)
    phone: Optional[str] = Field(default=None, alias="Phone", max_length=50)
    address: Optional[str] = Field(default=None, alias="Address", max_length=500)
    city: Optional[str] = Field(default=None, alias="City", max_length=100)
    website: Optional[str] = Field(default=None, alias="Website", max_length=255)
    is_active: bool = Field(default=True, alias="IsActive")


class CustomerFileData(BaseModel):
    """
    Transport-only composite of the restaurant-creation form.

    Never persisted as-is: `customer_json` is deserialized into MasterCustomer,
    and `upload` is stored by the logo service keyed by the customer's DID.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    customer_json: str
    upload: Optional[UploadFile] = None


class CompanySearch(BaseModel):
    """Query parameters of GET /api/Restaurant. An empty search matches everything."""

    search: str = Field(default="", description="Free-text filter; empty = no filter")
    pageno: int = Field(ge=1, description="1-based page number")


class SearchPage(BaseModel):
    """
    One page of search results.

    `totalrow` is the number of matching rows across all pages and is always
    present, including when it is 0.
    """

    rows: List[MasterCustomer] = Field(default_factory=list)
    totalrow: int = Field(ge=0)


class CompanySummary(BaseModel):
    """Returned by POST /api/Restaurant after the record is stored."""

    model_config = ConfigDict(populate_by_name=True)

    did: int = Field(alias="DID")
    name: str = Field(alias="Name")
    logo: Optional[str] = Field(default=None, alias="Logo", description="Stored logo key")


class CustomerInfo(BaseModel):
    """
    Supplementary profile data for an existing customer.

    Sent to POST /api/CustomerInfo; upserted by CustomerID.
    """

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    customer_id: int = Field(alias="CustomerID", ge=1)
    contact_name: Optional[str] = Field(default=None, alias="ContactName", max_length=200)
    phone: Optional[str] = Field(default=None, alias="Phone", max_length=50)
    email: Optional[str] = Field(default=None, alias="Email", max_length=254)
    address: Optional[str] = Field(default=None, alias="Address", max_length=500)
    notes: Optional[str] = Field(default=None, alias="Notes")
