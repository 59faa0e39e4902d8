"""Infrastructure Layer — database access and cross-cutting concerns.

Invariants:
    - Protocol implementations (user_directory, request_store) never commit
    - All SQLAlchemy failures mapped to TandemError subclasses at the boundary

Design Decisions:
    - Adapters live beside the session manager they depend on
"""
