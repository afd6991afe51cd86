import re
from typing import Any, Dict, Iterable, List, Optional

from .errors import FilterValidationError
from .schemas import StringEntry

FILTER_NAMES = ('is_palindrome', 'min_length', 'max_length', 'word_count', 'contains_character')
_INTEGER_FILTERS = ('min_length', 'max_length', 'word_count')
_NUMBER = re.compile(r'^[+-]?(?:\d+(?:\.\d*)?|\.\d+)$')


def _parse_count(name: str, raw: str, errors: List[str]) -> Optional[int]:
    """Parse a numeric query value, truncating decimals toward zero."""
    text = raw.strip()
    if not _NUMBER.match(text):
        errors.append(f"{name} must be a number")
        return None
    whole = text.split('.')[0]
    if whole in ('', '+', '-'):
        whole += '0'
    try:
        n = int(whole)
    except ValueError:
        errors.append(f"{name} is too large")
        return None
    if n < 0:
        errors.append(f"{name} must be non-negative")
        return None
    return n


def validate_query_filters(
    is_palindrome: Optional[str] = None,
    min_length: Optional[str] = None,
    max_length: Optional[str] = None,
    word_count: Optional[str] = None,
    contains_character: Optional[str] = None,
) -> Dict[str, Any]:
    """Turn raw query-string values into typed filters.

    Every parameter is checked before anything is returned; if any of them
    is malformed a single FilterValidationError lists all the problems.
    ``min_length > max_length`` is accepted and just matches nothing.
    """
    errors: List[str] = []
    filters: Dict[str, Any] = {}

    if is_palindrome is not None:
        if is_palindrome not in ('true', 'false'):
            errors.append("is_palindrome must be 'true' or 'false'")
        else:
            filters['is_palindrome'] = is_palindrome == 'true'

    raw_counts = {'min_length': min_length, 'max_length': max_length, 'word_count': word_count}
    for name in _INTEGER_FILTERS:
        raw = raw_counts[name]
        if raw is None:
            continue
        n = _parse_count(name, raw, errors)
        if n is not None:
            filters[name] = n

    if contains_character is not None:
        if len(contains_character) != 1:
            errors.append("contains_character must be a single character")
        else:
            filters['contains_character'] = contains_character

    if errors:
        raise FilterValidationError("Invalid query parameter values or types", details=errors)

    # Keep a stable key order in the echo regardless of which were supplied
    return {name: filters[name] for name in FILTER_NAMES if name in filters}


def matches_filters(entry: StringEntry, filters: Dict[str, Any]) -> bool:
    props = entry.properties

    if 'is_palindrome' in filters and props.is_palindrome != filters['is_palindrome']:
        return False

    if 'min_length' in filters and props.length < filters['min_length']:
        return False

    if 'max_length' in filters and props.length > filters['max_length']:
        return False

    if 'word_count' in filters and props.word_count != filters['word_count']:
        return False

    if 'contains_character' in filters:
        # Checked against the raw value, not the cleaned frequency map,
        # so punctuation and spaces can be searched for too.
        if filters['contains_character'].lower() not in entry.value.lower():
            return False

    return True


def apply_filters(entries: Iterable[StringEntry], filters: Dict[str, Any]) -> List[StringEntry]:
    """Return the entries matching every filter, in store order."""
    return [e for e in entries if matches_filters(e, filters)]
