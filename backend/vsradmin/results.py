"""
VSRAdmin Backend - Validator Results
=====================================

What:  A small result type returned by the payload validators.
Why:   Bad input is an expected outcome, not an exceptional one. Handlers
       branch on `PayloadError.kind` to pick the HTTP status instead of
       catching parser exceptions.

Usage:
    result = parse_customer_data(raw)
    if not result.ok:
        return failure_response(result.error.message, result.error.status_code)
    customer = result.value
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class PayloadErrorKind(str, Enum):
    MALFORMED_PAYLOAD = "malformed_payload"
    INVALID_PAGE = "invalid_page"
    TRANSPORT = "transport"


# All validator failures are client errors
_STATUS_BY_KIND = {
    PayloadErrorKind.MALFORMED_PAYLOAD: 400,
    PayloadErrorKind.INVALID_PAGE: 400,
    PayloadErrorKind.TRANSPORT: 400,
}


@dataclass(frozen=True)
class PayloadError:
    kind: PayloadErrorKind
    message: str
    field: Optional[str] = None

    @property
    def status_code(self) -> int:
        return _STATUS_BY_KIND[self.kind]


@dataclass(frozen=True)
class PayloadResult(Generic[T]):
    """Either a parsed value or a `PayloadError`, never both."""

    value: Optional[T] = None
    error: Optional[PayloadError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "PayloadResult[T]":
        return cls(value=value)

    @classmethod
    def failure(
        cls,
        kind: PayloadErrorKind,
        message: str,
        field: Optional[str] = None,
    ) -> "PayloadResult[T]":
        return cls(error=PayloadError(kind=kind, message=message, field=field))
