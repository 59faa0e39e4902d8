"""Service Layer — async orchestration around the pure core.

Invariants:
    - Services sequence protocol calls; every decision is delegated to core/
    - Each write is one `async with unit_of_work(...)` block: all of it commits or none of it
"""
