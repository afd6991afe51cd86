import re
from typing import Any, Dict

from .errors import FilterConflictError, QueryParseError
from .tagger import Tagger, default_tagger, has_phrase

_LETTER = re.compile(r'letter\s+([a-z])', re.IGNORECASE)


def interpret_nl_query(query: str, tagger: Tagger = default_tagger) -> Dict[str, Any]:
    """Interpret a natural language filter query into structured filters.

    Each rule category is independent; every one that matches contributes a
    filter. Raises QueryParseError when nothing matched.
    """
    if not isinstance(query, str):
        raise TypeError("query must be a string")

    q = query.lower().strip()
    tokens = tagger.tag(q)
    numbers = tagger.extract_numbers(q)
    filters: Dict[str, Any] = {}

    if has_phrase(tokens, 'palindrome') or has_phrase(tokens, 'palindromic'):
        filters['is_palindrome'] = True

    if has_phrase(tokens, 'single word'):
        filters['word_count'] = 1
    elif numbers and has_phrase(tokens, 'word'):
        filters['word_count'] = int(numbers[0])

    # "longer than N" / "shorter than N" are strict, stored as inclusive bounds
    if has_phrase(tokens, 'longer than') and numbers:
        filters['min_length'] = numbers[0] + 1

    if has_phrase(tokens, 'shorter than') and numbers:
        filters['max_length'] = numbers[0] - 1

    m = _LETTER.search(query)
    if m:
        filters['contains_character'] = m.group(1).lower()

    # Heuristic: "the first vowel" always means 'a', overriding any letter above
    if has_phrase(tokens, 'first vowel'):
        filters['contains_character'] = 'a'

    if not filters:
        raise QueryParseError("Unable to parse natural language query")

    return {'original': query, 'parsed_filters': filters}


def check_conflicts(filters: Dict[str, Any]) -> None:
    """Reject a length window that can never match."""
    if 'min_length' in filters and 'max_length' in filters:
        if filters['min_length'] > filters['max_length']:
            raise FilterConflictError("Query parsed but resulted in conflicting filters")
