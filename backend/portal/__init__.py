"""
Institute Portal Backend: Application Package
==============================================

What: REST backend for the institute's content portal (service centers,
      products, catalogue services, departments, laboratories and staff).
Who:  Imported by uvicorn (`portal.main:app`), Alembic and pytest.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns, locale resolution
    ├─────────────────────────────────────┤
    │         Services (Queries)          │  ← Filters, slug checks, writes
    ├─────────────────────────────────────┤
    │       Transforms (Normalization)    │  ← Pure row → canonical JSON
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Rows leave the database with JSON-encoded text columns and locale-keyed
    mappings. The transforms layer is the only place that turns them into
    the shapes API consumers see, so every route agrees on field formats.
"""

__version__ = "1.0.0"
