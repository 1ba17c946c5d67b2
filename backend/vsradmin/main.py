"""
VSRAdmin Backend - FastAPI Application Factory
===============================================

What:  Creates and configures the FastAPI application instance.
How:   `create_app(services)` composes the collaborator services into the
       routers and installs the interceptor chain. Nothing is looked up from
       a global registry: whatever is passed in is what the handlers use.
Who:   uvicorn (`uvicorn vsradmin.main:app`) and the test suite, which passes
       fake services.

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │  Interceptor chain (outermost first):                    │
    │  CORS → RequestID → RequestLogging → ErrorTranslator     │
    │                                                          │
    │  Routes:                                                 │
    │  POST /api/ValidateLogin      POST/GET /api/Restaurant   │
    │  POST/GET /api/Instruction    POST /api/CustomerInfo     │
    │  GET /   GET /health                                     │
    │                                                          │
    │  Exception handlers:                                     │
    │  RequestValidationError → 400 envelope                   │
    │  HTTPException          → envelope with its status       │
    │  VSRAdminError          → envelope with exc.status_code  │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging, configuration check, logo root, SQLite tables (local runs)
    Shutdown: dispose the database engine when this app created it
"""

import logging
import sys
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncGenerator, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncEngine
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware import Middleware

from vsradmin import __version__
from vsradmin.config import settings
from vsradmin.database import build_engine, build_session_factory, create_all
from vsradmin.exceptions import MalformedPayloadError, VSRAdminError
from vsradmin.middleware.error_translator import ErrorTranslatorMiddleware
from vsradmin.middleware.logging import RequestLoggingMiddleware
from vsradmin.middleware.request_id import RequestIdLogFilter, RequestIDMiddleware, request_id_var
from vsradmin.routes import auth, customer_info, health, instruction, restaurant
from vsradmin.schemas.envelope import failure_response
from vsradmin.services.base import CompanyService, CustomerService, InstructionService
from vsradmin.services.company_service import SqlCompanyService
from vsradmin.services.customer_service import SqlCustomerService
from vsradmin.services.instruction_service import SqlInstructionService
from vsradmin.services.logo_service import LocalBlobStore, LogoService
from vsradmin.validators import describe_validation_errors

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure the root logger once, at startup.

    Format: 2024-01-15T12:00:00 [INFO] vsradmin.routes.restaurant [a1b2c3d4] message
    The request id comes from RequestIdLogFilter ("-" outside a request).
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIdLogFilter())

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s [%(request_id)s] %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[handler],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Service Composition
# ══════════════════════════════════════════════════════════════════════════

@dataclass
class ServiceBundle:
    """
    Everything the request handlers call.

    `engine` is set only when the bundle owns a database engine that must be
    disposed on shutdown.
    """

    company: CompanyService
    instructions: InstructionService
    customers: CustomerService
    logos: LogoService
    engine: Optional[AsyncEngine] = None


def build_default_services() -> ServiceBundle:
    """SQL collaborators on DATABASE_URL plus logos on the local filesystem."""
    engine = build_engine()
    session_factory = build_session_factory(engine)
    return ServiceBundle(
        company=SqlCompanyService(session_factory),
        instructions=SqlInstructionService(session_factory),
        customers=SqlCustomerService(session_factory),
        logos=LogoService(LocalBlobStore(settings.logo_storage_root)),
        engine=engine,
    )


# ══════════════════════════════════════════════════════════════════════════
# Lifespan
# ══════════════════════════════════════════════════════════════════════════

def _build_lifespan(services: ServiceBundle):

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        setup_logging()
        logger.info("VSRAdmin API %s starting (environment=%s)", __version__, settings.environment)

        # Misconfiguration is logged, not fatal: health checks still answer
        try:
            settings.validate_required_for_production()
        except ValueError as e:
            logger.error("Configuration error: %s", str(e))

        store = services.logos.store
        if isinstance(store, LocalBlobStore):
            logger.info("Logo storage root: %s", store.root)

        if services.engine is not None and services.engine.dialect.name == "sqlite":
            await create_all(services.engine)
            logger.info("SQLite schema created")

        if settings.docs_enabled:
            logger.info("Swagger UI: http://%s:%d/swagger", settings.backend_host, settings.backend_port)

        yield

        logger.info("VSRAdmin API shutting down...")
        if services.engine is not None:
            await services.engine.dispose()
        logger.info("Shutdown complete.")

    return lifespan


# ══════════════════════════════════════════════════════════════════════════
# Interceptor Chain & Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def build_middleware_chain() -> List[Middleware]:
    """
    The request interceptors, outermost first.

    CORS              pass-through; answers preflight requests itself
    RequestID         pass-through; tags request and response
    RequestLogging    pass-through; logs the final status, including translated 500s
    ErrorTranslator   wrap-and-translate; turns escaped exceptions into 500 envelopes
    """
    origins = settings.cors_origins_list
    return [
        Middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials="*" not in origins,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=["X-Request-ID"],
        ),
        Middleware(RequestIDMiddleware),
        Middleware(RequestLoggingMiddleware),
        Middleware(ErrorTranslatorMiddleware),
    ]


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map framework-level failures onto the response envelope.

    RequestValidationError covers plain JSON bodies and query parameters:
    bad JSON, missing fields, wrong types. These are client errors (400),
    reported before any handler runs.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        error = MalformedPayloadError(
            message=f"Invalid request payload: {describe_validation_errors(exc.errors())}",
        )
        logger.warning("[%s] %s %s: %s", request_id_var.get(""), request.method, request.url.path, error.message)
        return failure_response(error.message, error.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        response = failure_response(str(exc.detail), exc.status_code)
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(VSRAdminError)
    async def handle_app_error(request: Request, exc: VSRAdminError):
        logger.error("[%s] %s | Context: %s", request_id_var.get(""), exc.message, exc.context)
        return failure_response(exc.message, exc.status_code)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(services: Optional[ServiceBundle] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        services: Collaborators for the handlers. Defaults to the SQL services
                  on DATABASE_URL and local logo storage.
    """
    services = services or build_default_services()
    docs = settings.docs_enabled

    app = FastAPI(
        title="VSRAdmin API",
        description="API for VSR Admin operations",
        version=__version__,
        docs_url="/swagger" if docs else None,
        redoc_url=None,
        openapi_url="/swagger/v1/swagger.json" if docs else None,
        middleware=build_middleware_chain(),
        lifespan=_build_lifespan(services),
    )

    register_exception_handlers(app)

    app.include_router(auth.create_router(services.company))
    app.include_router(restaurant.create_router(services.company, services.logos))
    app.include_router(instruction.create_router(services.instructions))
    app.include_router(customer_info.create_router(services.customers))
    app.include_router(health.router)

    return app


app = create_app()
