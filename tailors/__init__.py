"""
Tailors Backend - Application Package
=====================================

What: Async HTTP backend for a tailoring shop: customers, body measurements,
      clothing orders and payment tracking behind bearer-token auth.
Who:  Imported by uvicorn (``tailors.main:app``), pytest and the ``serve`` script.

Layout:

    ┌─────────────────────────────────────┐
    │     Routes + Middleware (HTTP)      │  ← auth, CORS, request IDs, logging
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← CRUD, schema bootstrap
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy engine/sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
