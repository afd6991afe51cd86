from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response

from .schemas import (
    ErrorResponse,
    FilterResponse,
    NaturalLanguageResponse,
    StringEntry,
    StringRequest,
)
from .services import (
    create_string,
    delete_string,
    get_string,
    list_by_natural_language,
    list_filtered,
)
from .store import EntryStore

router = APIRouter()


def get_store(request: Request) -> EntryStore:
    """Hand each request the store owned by the running application."""
    return request.app.state.store


@router.get("/health")
def health() -> dict:
    """Basic health check endpoint."""
    return {"status": "ok"}


@router.post(
    "/strings",
    response_model=StringEntry,
    status_code=201,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
def create_string_endpoint(payload: StringRequest, store: EntryStore = Depends(get_store)) -> StringEntry:
    """Create and analyze a string."""
    return create_string(payload.value, store)


# Registered before /strings/{string_value} so the literal path wins.
@router.get(
    "/strings/filter-by-natural-language",
    response_model=NaturalLanguageResponse,
    responses={400: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
def filter_by_natural_language(
    query: Optional[str] = Query(None, description="e.g. 'all single word palindromic strings'"),
    store: EntryStore = Depends(get_store),
) -> dict:
    """Filter strings using a natural language query."""
    return list_by_natural_language(store, query)


@router.get("/strings/{string_value}", response_model=StringEntry, responses={404: {"model": ErrorResponse}})
def get_string_endpoint(string_value: str, store: EntryStore = Depends(get_store)) -> StringEntry:
    """Get a specific string by its raw value (or its SHA-256 id)."""
    return get_string(string_value, store)


@router.get("/strings", response_model=FilterResponse, responses={400: {"model": ErrorResponse}})
def get_all_strings(
    is_palindrome: Optional[str] = Query(None, description="'true' or 'false'"),
    min_length: Optional[str] = Query(None, description="Minimum string length"),
    max_length: Optional[str] = Query(None, description="Maximum string length"),
    word_count: Optional[str] = Query(None, description="Exact word count"),
    contains_character: Optional[str] = Query(None, description="Single character to look for"),
    store: EntryStore = Depends(get_store),
) -> dict:
    """Get all strings with optional filtering."""
    return list_filtered(
        store,
        {
            "is_palindrome": is_palindrome,
            "min_length": min_length,
            "max_length": max_length,
            "word_count": word_count,
            "contains_character": contains_character,
        },
    )


@router.delete("/strings/{string_value}", status_code=204, responses={404: {"model": ErrorResponse}})
def delete_string_endpoint(string_value: str, store: EntryStore = Depends(get_store)) -> Response:
    """Delete a string by its raw value (or its SHA-256 id)."""
    delete_string(string_value, store)
    return Response(status_code=204)
