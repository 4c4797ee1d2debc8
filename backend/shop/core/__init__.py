"""Core Layer — pure domain logic, no DB, no HTTP.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Functions are deterministic given their inputs (password hashing salts aside)

Design Decisions:
    - Pagination, cart totals and product form rules live here so they can be
      tested without a database or a running app
"""
