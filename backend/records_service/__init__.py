"""
Records Service - Application Package
======================================

What: A small HTTP CRUD service over a single `records` table (id, name, type).
How:  FastAPI routes -> stateless service -> async SQLAlchemy session per request.

Layering:

    ┌─────────────────────────────────────┐
    │        Routes (API Layer)           │  ← HTTP concerns: ids, bodies, status codes
    ├─────────────────────────────────────┤
    │        Services                     │  ← exactly one SQL statement per operation
    ├─────────────────────────────────────┤
    │     Models & Schemas (Data)         │  ← SQLAlchemy ORM table + Pydantic contracts
    ├─────────────────────────────────────┤
    │     Database (Persistence)          │  ← async engine, pooled sessions
    └─────────────────────────────────────┘

Entry points:
    records-service --config ./config.toml        (CLI, see cli.py)
    python -m records_service                     (same CLI)
    uvicorn --factory records_service.main:create_app
"""

__version__ = "1.0.0"
