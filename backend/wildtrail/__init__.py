"""
Wildtrail Backend: Application Package
======================================

Content API behind the Wildtrail outdoor-adventure storefront and blog.

Layers:

    ┌─────────────────────────────────────┐
    │   Routes (public + admin API)       │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Collection registry + repository  │  ← validation, ordering, CRUD
    ├─────────────────────────────────────┤
    │   Models & Schemas                  │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │   Database                          │  ← async SQLAlchemy sessions
    └─────────────────────────────────────┘

Routes never touch the ORM directly; every read and write of an ordered
collection goes through a CollectionRepository.
"""

__version__ = "1.0.0"
