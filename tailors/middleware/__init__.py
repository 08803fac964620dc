# Middleware package init
"""
Tailors Backend - Middleware Package
====================================

Request path (outermost first):
    [Request ID] → [Logging] → [Origin allow-list] → [CORS headers] → Route

Request ID comes first so that rejected origins are still logged and
tagged. Protected routers additionally run the ``BearerAuth`` dependency
before their handlers.
"""
