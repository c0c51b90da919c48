"""Catalog API router — book CRUD and the genre discount view.

Request bodies are read as raw JSON and handed to CatalogService, which does
its own validation so that every violation is reported in one response.
Each ServiceResult is mapped to a status code by its ErrorKind.
"""

import json
from typing import Optional

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from verticals.catalog.results import ServiceResult
from verticals.catalog.service import CatalogService

router = APIRouter()

INVALID_JSON = "Request body must be valid JSON"


# ---------------------------------------------------------------------------
# Dependencies & helpers
# ---------------------------------------------------------------------------

def get_catalog_service(request: Request) -> CatalogService:
    """FastAPI dependency for the app's CatalogService."""
    return request.app.state.catalog_service


async def _read_json(request: Request) -> tuple[object, Optional[JSONResponse]]:
    try:
        return await request.json(), None
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None, JSONResponse(status_code=400, content={"errors": [INVALID_JSON]})


def _respond(result: ServiceResult, status_code: int = 200) -> Response:
    if not result.ok:
        return JSONResponse(status_code=result.error.status_code, content=result.to_body())
    if result.value is None:
        return Response(status_code=204)
    return JSONResponse(status_code=status_code, content=result.value)


# ============================================================================
# Book Endpoints
# ============================================================================

@router.post("/books", status_code=201)
async def create_book(
    request: Request,
    service: CatalogService = Depends(get_catalog_service),
):
    """Add a new book to the catalog."""
    payload, error = await _read_json(request)
    if error:
        return error
    return _respond(await service.create(payload), status_code=201)


@router.get("/books")
async def list_books(service: CatalogService = Depends(get_catalog_service)):
    """List every book in the catalog."""
    return _respond(await service.list_all())


@router.get("/books/discounted-price")
async def get_discounted_price(
    genre: Optional[str] = None,
    discount: Optional[str] = None,
    service: CatalogService = Depends(get_catalog_service),
):
    """Total price of a genre with a percentage discount applied.

    Both ``genre`` and ``discount`` (0-100) are required.
    """
    return _respond(await service.discounted_price(genre, discount))


@router.get("/books/{book_id}")
async def get_book(
    book_id: str,
    service: CatalogService = Depends(get_catalog_service),
):
    """Get a single book."""
    return _respond(await service.get(book_id))


@router.put("/books/{book_id}")
async def update_book(
    book_id: str,
    request: Request,
    service: CatalogService = Depends(get_catalog_service),
):
    """Update some or all fields of a book."""
    payload, error = await _read_json(request)
    if error:
        return error
    return _respond(await service.update(book_id, payload))


@router.delete("/books/{book_id}", status_code=204)
async def delete_book(
    book_id: str,
    service: CatalogService = Depends(get_catalog_service),
):
    """Remove a book from the catalog."""
    return _respond(await service.delete(book_id))
