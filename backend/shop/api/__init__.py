"""API Layer — FastAPI routes, dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return JSON except the product photo stream

Design Decisions:
    - Thin routes delegate to services
"""
