"""Infrastructure Layer — database sessions, logging, payment gateway.

Invariants:
    - External SDK failures are mapped to ShopError subclasses here
"""
