"""Database Infrastructure: SQLAlchemy Base for the snapshot tables.

Invariants:
    - One synchronous engine per snapshot store
"""
