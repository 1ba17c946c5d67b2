"""
VSRAdmin Backend - Payload Validators
======================================

What:  Turns heterogeneous wire input into typed request models before any
       domain logic runs.
How:   Each validator returns a `PayloadResult`; nothing here raises for bad
       input. Handlers inspect `result.error.kind` to choose the HTTP status.

Inputs handled here:
    - multipart form with an embedded JSON field (`customerdata`) and an
      optional logo file (POST /api/Restaurant)
    - pagination query parameters (GET /api/Restaurant)

Plain JSON bodies (login, instruction, customer info) are validated by
FastAPI against the pydantic models; failures there are turned into the same
400 Failure envelope by the RequestValidationError handler in `main.py`,
which reuses `describe_validation_errors()`.
"""

import json
import logging
from typing import Any, Iterable, Mapping, Optional

from pydantic import ValidationError
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException
from starlette.requests import ClientDisconnect, Request

from vsradmin.exceptions import InvalidPageError, MalformedPayloadError
from vsradmin.results import PayloadErrorKind, PayloadResult
from vsradmin.schemas.customer import CompanySearch, CustomerFileData, MasterCustomer

logger = logging.getLogger(__name__)

CUSTOMER_FIELD = "customerdata"
FILE_FIELD = "file"

INVALID_CUSTOMER_MESSAGE = "Invalid customer data format."


def describe_validation_errors(errors: Iterable[Mapping[str, Any]]) -> str:
    """
    Flatten pydantic error dicts into one readable line.

    Example: "body.username: Field required; query.pageno: Input should be a valid integer"
    """
    parts = []
    for err in errors:
        location = ".".join(str(p) for p in err.get("loc", ()) if p != "__root__")
        message = err.get("msg", "invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts) or "invalid value"


async def read_customer_form(request: Request) -> PayloadResult[CustomerFileData]:
    """
    Extract `customerdata` and the optional logo from a multipart request.

    The JSON text is returned unparsed; `parse_customer_data()` deals with it
    so that the JSON is judged independently of whether a file was sent.

    Failure kinds:
        TRANSPORT:          client went away mid-upload, the multipart body is
                            broken, or it stops before its closing boundary
        MALFORMED_PAYLOAD:  the `customerdata` field is missing or is not text
    """
    try:
        # Buffer the whole body first; request.form() then parses the cached bytes
        body = await request.body()
        if not _multipart_complete(request.headers.get("content-type", ""), body):
            logger.warning("Multipart body ended before its closing boundary (%d bytes)", len(body))
            return PayloadResult.failure(
                PayloadErrorKind.TRANSPORT,
                "The form data was incomplete: the upload ended before the closing boundary.",
            )
        form = await request.form()
    except ClientDisconnect:
        logger.warning("Client disconnected while uploading restaurant form")
        return PayloadResult.failure(
            PayloadErrorKind.TRANSPORT,
            "The connection closed before the form data was fully received.",
        )
    except (MultiPartException, StarletteHTTPException) as e:
        detail = getattr(e, "message", None) or getattr(e, "detail", None) or str(e)
        logger.warning("Unreadable multipart body: %s", detail)
        return PayloadResult.failure(
            PayloadErrorKind.TRANSPORT,
            f"The form data could not be read: {detail}",
        )

    raw = form.get(CUSTOMER_FIELD)
    if not isinstance(raw, str):
        error = MalformedPayloadError(
            message=f"{INVALID_CUSTOMER_MESSAGE} The '{CUSTOMER_FIELD}' field is required.",
            field=CUSTOMER_FIELD,
        )
        return PayloadResult.failure(PayloadErrorKind.MALFORMED_PAYLOAD, error.message, error.field)

    return PayloadResult.success(
        CustomerFileData(customer_json=raw, upload=_pick_upload(form))
    )


def _multipart_boundary(content_type: str) -> Optional[bytes]:
    media_type, _, params = content_type.partition(";")
    if media_type.strip().lower() != "multipart/form-data":
        return None
    for param in params.split(";"):
        name, _, value = param.strip().partition("=")
        if name.lower() == "boundary" and value:
            return value.strip('"').encode("latin-1")
    return None


def _multipart_complete(content_type: str, body: bytes) -> bool:
    """
    True unless `body` is multipart and lacks its close delimiter (`--boundary--`).

    The multipart parser drops a part that is cut off mid-stream without
    complaint, so a truncated upload would otherwise look like "no file sent".
    Bodies without a boundary parameter are left to the parser, which rejects them.
    """
    boundary = _multipart_boundary(content_type)
    if boundary is None:
        return True
    close = b"--" + boundary + b"--"
    return body.startswith(close) or b"\r\n" + close in body


def _pick_upload(form) -> Optional[UploadFile]:
    """
    Prefer the `file` field; otherwise take the first uploaded file in the form.
    A file part with an empty filename is what browsers send for "no file".
    """
    preferred = form.get(FILE_FIELD)
    if isinstance(preferred, UploadFile) and preferred.filename:
        return preferred
    for _, value in form.multi_items():
        if isinstance(value, UploadFile) and value.filename:
            return value
    return None


def parse_customer_data(raw: Optional[str]) -> PayloadResult[MasterCustomer]:
    """
    Deserialize the `customerdata` JSON text into a MasterCustomer.

    Rejected (MALFORMED_PAYLOAD), never coerced into defaults:
        - missing or blank text
        - text that is not valid JSON
        - JSON null, an empty object, or anything other than an object
        - an object that fails MasterCustomer validation (e.g. no DID)
    """
    if raw is None or not raw.strip():
        return _malformed(f"{INVALID_CUSTOMER_MESSAGE} The '{CUSTOMER_FIELD}' field is empty.")

    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.error("Invalid JSON format in customerdata: %s", e.msg)
        return _malformed(f"{INVALID_CUSTOMER_MESSAGE} Expected a JSON object.")

    if not isinstance(payload, dict) or not payload:
        logger.error("customerdata deserialized to an empty value: %r", type(payload).__name__)
        return _malformed(f"{INVALID_CUSTOMER_MESSAGE} Expected a non-empty JSON object.")

    try:
        customer = MasterCustomer.model_validate(payload)
    except ValidationError as e:
        detail = describe_validation_errors(e.errors())
        logger.error("customerdata failed validation: %s", detail)
        return _malformed(f"{INVALID_CUSTOMER_MESSAGE} {detail}")

    return PayloadResult.success(customer)


def _malformed(message: str) -> PayloadResult:
    error = MalformedPayloadError(message=message, field=CUSTOMER_FIELD)
    return PayloadResult.failure(PayloadErrorKind.MALFORMED_PAYLOAD, error.message, error.field)


def parse_company_search(
    search: Optional[str],
    pageno: int,
    page_policy: str = "reject",
) -> PayloadResult[CompanySearch]:
    """
    Normalize the search query parameters.

    - A missing or whitespace-only `search` becomes "" (match everything).
    - `pageno < 1` is answered with INVALID_PAGE under the `reject` policy,
      or served as page 1 under the `clamp` policy.
    """
    term = "" if search is None or not search.strip() else search

    if pageno < 1:
        if page_policy == "clamp":
            logger.warning("Page number %d clamped to 1", pageno)
            pageno = 1
        else:
            error = InvalidPageError(pageno)
            return PayloadResult.failure(PayloadErrorKind.INVALID_PAGE, error.message, "pageno")

    return PayloadResult.success(CompanySearch(search=term, pageno=pageno))
