# Routes package init
"""
Tailors Backend - API Routes Package
====================================

Route Inventory:
    - health.py:        GET /, GET /health                    (public)
    - auth.py:          POST /auth/login, GET /auth/me        (public / token)
    - customers.py:     /customers CRUD                       (bearer token)
    - measurements.py:  /measurements CRUD                    (bearer token)
    - orders.py:        /orders CRUD + PATCH /{id}/payment    (bearer token)

Routes stay thin: parse input, call a service, return its result.
"""
