# Routes package init
"""
VSRAdmin Backend - API Routes Package
======================================

What:  HTTP route handlers for the admin API.
How:   Each module exposes `create_router(...)`, which receives the services it
       calls. `main.create_app()` builds the routers from one ServiceBundle.

Route Inventory:
    - auth.py:           POST /api/ValidateLogin
    - restaurant.py:     POST /api/Restaurant  (multipart: customerdata + logo file)
                         GET  /api/Restaurant  (paged company search)
    - instruction.py:    POST /api/Instruction, GET /api/Instruction
    - customer_info.py:  POST /api/CustomerInfo
    - health.py:         GET  /, GET /health   (plain text)
    - common.py:         shared failure-envelope helpers

Routes stay thin: parse the payload, call the collaborator, wrap the result
in a GenericResponse envelope.
"""
