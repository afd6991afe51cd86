import re
from hashlib import sha256
from typing import Dict
from datetime import datetime, timezone

from .schemas import StringEntry, StringProperties

_NON_ALNUM = re.compile(r'[^a-z0-9]')
_WHITESPACE = re.compile(r'\s+')


def clean(value: str) -> str:
    """Lowercase and drop everything outside ASCII a-z / 0-9."""
    return _NON_ALNUM.sub('', value.lower())


def fingerprint(value: str) -> str:
    return sha256(value.encode('utf-8')).hexdigest()


def is_palindrome(value: str) -> bool:
    cleaned = clean(value)
    return cleaned == cleaned[::-1]


def unique_characters(value: str) -> int:
    return len(set(clean(value)))


def word_count(value: str) -> int:
    """Count whitespace-separated tokens of the trimmed raw value.

    Splitting on a regex (not ``str.split()``) keeps the naive behaviour:
    an empty or all-whitespace value counts as one word.
    """
    return len(_WHITESPACE.split(value.strip()))


def character_frequency_map(value: str) -> Dict[str, int]:
    freq: Dict[str, int] = {}
    for c in clean(value):
        freq[c] = freq.get(c, 0) + 1
    return freq


def compute_properties(value: str) -> StringProperties:
    return StringProperties(
        length=len(value),
        is_palindrome=is_palindrome(value),
        unique_characters=unique_characters(value),
        word_count=word_count(value),
        sha256_hash=fingerprint(value),
        character_frequency_map=character_frequency_map(value),
    )


def analyze(value: str) -> StringEntry:
    """Build a complete entry for ``value``, stamped with the current UTC time."""
    props = compute_properties(value)
    return StringEntry(
        id=props.sha256_hash,
        value=value,
        properties=props,
        created_at=datetime.now(timezone.utc),
    )
