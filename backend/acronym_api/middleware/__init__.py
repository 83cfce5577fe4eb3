# Middleware package init
"""
Acronym API: Middleware Package
==================================

Middleware Chain (outermost first):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID: correlation ID available to everything below it
    2. Logging: access line with status and duration, tagged with the ID
    3. GZip / CORS: Starlette built-ins configured in main.create_app()
"""
