"""
VSRAdmin Backend - Application Package Initializer
===================================================

What: Marks the `vsradmin` directory as a Python package.
Who:  Imported by uvicorn (`vsradmin.main:app`), Alembic and pytest.

Architecture Note:
    The backend is split into an orchestration core and replaceable collaborators:

    ┌─────────────────────────────────────┐
    │   Middleware (interceptor chain)    │  ← request id, access log, error translator
    ├─────────────────────────────────────┤
    │   Routes (request handlers)         │  ← validate → one service call → envelope
    ├─────────────────────────────────────┤
    │   Validators & Schemas              │  ← wire input → typed request models
    ├─────────────────────────────────────┤
    │   Services (collaborator adapters)  │  ← SQL persistence, logo storage
    └─────────────────────────────────────┘

    Handlers only see the abstract service interfaces in `services.base`;
    the SQL adapters are composed in `main.create_app()`.
"""

__version__ = "1.0.0"
