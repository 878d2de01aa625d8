"""Infrastructure Layer — database access, repositories and cross-cutting concerns.

Invariants:
    - Infrastructure implements core Protocols; core never imports from here
    - All SQLAlchemy failures are mapped to core errors before leaving this layer

Design Decisions:
    - One repository class per aggregate, no shared repository base class
"""
