"""Catalog vertical — book catalog CRUD with genre discounts.

Pieces, leaves first:
- Pydantic schemas with a message table (validation)
- Pure-function rules (duplicate policy, discount checks)
- In-memory and SQLAlchemy stores behind one protocol
- CatalogService returning explicit results
- FastAPI router mapping results to status codes
- Dataclass configuration
"""
