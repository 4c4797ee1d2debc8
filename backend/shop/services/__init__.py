"""Services Layer — database queries and workflows behind the routes.

Invariants:
    - Services raise ShopError subclasses; they never build HTTP responses
    - One module per resource (users, catalog, orders, checkout)
"""
