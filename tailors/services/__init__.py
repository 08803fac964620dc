# Services package init
"""
Tailors Backend - Services Layer
================================

Service Inventory:
    - schema_service: startup schema bootstrap (tables + additive columns)
    - CustomerService / MeasurementService / OrderService: CRUD
    - AuthService: login and token issuance

Services know nothing about HTTP; they raise the exceptions in
tailors.exceptions and the handlers in main.py map them to responses.
"""
