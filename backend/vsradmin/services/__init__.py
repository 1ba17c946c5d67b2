# Services package init
"""
VSRAdmin Backend - Services Layer
==================================

What:  The collaborators the route handlers call.

Service Inventory:
    - base.py:                  CompanyService, InstructionService, CustomerService (abstract)
    - company_service.py:       SqlCompanyService (login, company upsert, company search)
    - instruction_service.py:   SqlInstructionService
    - customer_service.py:      SqlCustomerService
    - logo_service.py:          BlobStore / LocalBlobStore and LogoService ({DID}.jpg logos)
    - passwords.py:             PBKDF2 password hashing for admin users

Routes depend on the abstract classes only, so tests pass fakes and a
different store can replace the SQL implementations without touching routes.
"""
