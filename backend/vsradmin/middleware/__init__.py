# Middleware package init
"""
VSRAdmin Backend - Middleware Package
======================================

What:  Interceptors applied to every request.

Chain (outermost first, see main.build_middleware_chain):
    Request → [CORS] → [Request ID] → [Logging] → [Error Translator] → Route Handler

    1. CORS: answers preflight requests before anything else runs
    2. Request ID: correlation id for every later log line and the response header
    3. Logging: sees the final status, including 500s produced by the translator
    4. Error Translator: turns any escaped exception into a 500 Failure envelope

Only the error translator may produce a response on its own; the others
pass the request through and decorate or observe the response.
"""
