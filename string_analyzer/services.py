import re
from typing import Any, Dict, Optional

from .analyzer import analyze
from .errors import InvalidInputError, InvalidTypeError, NotFoundError
from .filters import apply_filters, validate_query_filters
from .nlp import check_conflicts, interpret_nl_query
from .schemas import StringEntry
from .store import EntryStore
from .tagger import Tagger, default_tagger

_SHA256_HEX = re.compile(r'^[0-9a-f]{64}$')


def create_string(value: Any, store: EntryStore) -> StringEntry:
    """Analyze ``value`` and store it. Raises on missing, non-string or duplicate input."""
    if value is None or value == '':
        raise InvalidInputError("String is missing")
    if not isinstance(value, str):
        raise InvalidTypeError(f"{value!r} must be a string")

    return store.insert(analyze(value))


def _lookup(identifier: str, store: EntryStore) -> Optional[StringEntry]:
    record = store.find_by_value(identifier)
    if record is None and _SHA256_HEX.match(identifier):
        record = store.find_by_fingerprint(identifier)
    return record


def get_string(identifier: str, store: EntryStore) -> StringEntry:
    """Lookup by raw value (hashed), falling back to treating it as a fingerprint."""
    record = _lookup(identifier, store)
    if record is None:
        raise NotFoundError("String doesn't exist in the system")
    return record


def delete_string(identifier: str, store: EntryStore) -> None:
    record = _lookup(identifier, store)
    if record is None or not store.delete_by_fingerprint(record.id):
        raise NotFoundError("String doesn't exist in the system")


def list_filtered(store: EntryStore, raw_filters: Optional[Dict[str, Optional[str]]] = None) -> Dict[str, Any]:
    filters = validate_query_filters(**(raw_filters or {}))
    records = apply_filters(store.all(), filters)
    return {
        "data": records,
        "count": len(records),
        "filters_applied": filters,
    }


def list_by_natural_language(
    store: EntryStore, query: Optional[str], tagger: Tagger = default_tagger
) -> Dict[str, Any]:
    if not query:
        raise InvalidInputError("Missing natural language query")

    interpreted = interpret_nl_query(query, tagger)
    filters = interpreted['parsed_filters']
    records = apply_filters(store.all(), filters)
    # Conflicts are only detected once the filters have been run
    check_conflicts(filters)
    return {
        "data": records,
        "count": len(records),
        "interpreted_query": interpreted,
    }
