"""Infrastructure Layer — database, AI service client, credentials and logging.

Invariants:
    - Infrastructure may use core/ errors and value types, never services/ or api/
    - All external calls wrapped with timeout/error mapping

Design Decisions:
    - Thin wrappers over raw clients: one concern per module
"""
