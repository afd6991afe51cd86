from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class StringRequest(BaseModel):
    """Request schema for creating/analyzing a string.

    ``value`` is optional at the schema level so a missing or null value
    reaches the service layer and is reported as a 400 rather than a 422.
    """
    value: Optional[str] = Field(None, description="String to analyze")


class StringProperties(BaseModel):
    """Computed properties of an analyzed string."""
    model_config = ConfigDict(frozen=True)

    length: int
    is_palindrome: bool
    unique_characters: int
    word_count: int
    sha256_hash: str
    character_frequency_map: Dict[str, int]


class StringEntry(BaseModel):
    """A stored, analyzed string. Never mutated after creation."""
    model_config = ConfigDict(frozen=True)

    id: str
    value: str
    properties: StringProperties
    created_at: datetime


class FilterResponse(BaseModel):
    """Response schema for structured filtering."""
    data: List[StringEntry]
    count: int
    filters_applied: Dict[str, Any]


class InterpretedQuery(BaseModel):
    original: str
    parsed_filters: Dict[str, Any]


class NaturalLanguageResponse(BaseModel):
    """Response schema for natural-language filtering."""
    data: List[StringEntry]
    count: int
    interpreted_query: InterpretedQuery


class ErrorResponse(BaseModel):
    error: str
    details: Optional[List[Any]] = None
