"""Core Layer — pure domain logic, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Functions are deterministic; clocks and file contents are passed in

Design Decisions:
    - Functional core separated from the imperative shell (services, routes)
"""
