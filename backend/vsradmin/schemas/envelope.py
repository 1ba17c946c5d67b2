"""
VSRAdmin Backend - Response Envelope
=====================================

What:  The uniform `GenericResponse` wrapper returned by every API operation.
Why:   The admin console parses one shape for every endpoint:
       {"status": "Success" | "Failure", "message": str, "data": any}
How:   Handlers build envelopes with `GenericResponse.success()` or
       `GenericResponse.failure()` and send them with `envelope_response()`.

Invariant:
    `data` is only ever set on a Success envelope. A Failure envelope built with
    data is rejected by the model validator.

Example (search):
    {
        "status": "Success",
        "message": "",
        "data": {"rows": [...], "totalrow": 0}
    }
"""

from enum import Enum
from typing import Any, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, model_validator


class ResponseStatus(str, Enum):
    SUCCESS = "Success"
    FAILURE = "Failure"


class GenericResponse(BaseModel):
    status: ResponseStatus = Field(description="Success or Failure")
    message: str = Field(default="", description="Confirmation text or failure cause")
    data: Optional[Any] = Field(default=None, description="Operation result (Success only)")

    @model_validator(mode="after")
    def _no_data_on_failure(self) -> "GenericResponse":
        if self.status is ResponseStatus.FAILURE and self.data is not None:
            raise ValueError("A Failure envelope must not carry data")
        return self

    @classmethod
    def success(cls, data: Any = None, message: str = "") -> "GenericResponse":
        return cls(status=ResponseStatus.SUCCESS, message=message, data=data)

    @classmethod
    def failure(cls, message: str) -> "GenericResponse":
        return cls(status=ResponseStatus.FAILURE, message=message)


def envelope_response(
    envelope: GenericResponse,
    status_code: int = 200,
    headers: Optional[dict] = None,
) -> JSONResponse:
    """
    Serialize an envelope into a JSONResponse.

    Nested pydantic models inside `data` are dumped by alias so the wire keeps
    the console's field names (DID, CustomerID, ...).
    """
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(envelope, by_alias=True),
        headers=headers,
    )


def failure_response(message: str, status_code: int) -> JSONResponse:
    return envelope_response(GenericResponse.failure(message), status_code=status_code)
